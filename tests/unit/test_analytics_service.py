"""Analytics aggregation tests."""

from datetime import timedelta, timezone

from conftest import make_message, make_session
from src.features.analytics.service import (
    classify_review,
    process_session_data,
    session_length_bucket,
)
from src.features.sessions.models import Message, UserAction

NOV_14_2023_2213 = 1700000000
JAN_01_2024_0000 = 1704067200


def test_empty_input_yields_zero_summary():
    """No sessions gives zeros and empty breakdowns without raising."""
    summary = process_session_data([])

    assert summary.total_sessions == 0
    assert summary.total_messages == 0
    assert summary.total_credits_used == 0
    assert summary.average_messages_per_session == 0
    assert summary.average_credits_per_session == 0
    assert summary.session_engagement.engagement_rate == 0
    assert summary.tool_usage_breakdown == {}
    assert summary.tool_efficiency == {}
    assert summary.model_usage_breakdown == {}
    assert summary.credits_usage_by_tool == {}
    assert summary.daily_sessions_data.labels == []
    assert summary.hourly_distribution.labels == []
    assert summary.session_length_distribution.labels == []
    assert summary.top_queries == []


def test_sessions_without_messages_average_to_zero():
    summary = process_session_data([make_session("a"), make_session("b")])

    assert summary.total_sessions == 2
    assert summary.average_messages_per_session == 0
    assert summary.average_credits_per_session == 0
    assert summary.session_engagement.neutral_sessions == 2
    assert summary.session_engagement.engagement_rate == 0


def test_totals_and_averages():
    sessions = [
        make_session("a", [make_message(credits=2), make_message(credits=4)]),
        make_session("b", [make_message(credits=6)]),
    ]
    summary = process_session_data(sessions)

    assert summary.total_messages == 3
    assert summary.total_credits_used == 12
    assert summary.average_messages_per_session == 1.5
    assert summary.average_credits_per_session == 6


def test_user_action_breakdown_sums_to_total_messages():
    sessions = [
        make_session("a", [
            make_message(action="like"),
            make_message(action="dislike"),
            make_message(action=None),
            make_message(action="none"),
        ]),
        make_session("b", [make_message(action="like")]),
    ]
    summary = process_session_data(sessions)
    breakdown = summary.user_action_breakdown

    assert (breakdown.likes, breakdown.dislikes, breakdown.no_action) == (2, 1, 2)
    assert breakdown.likes + breakdown.dislikes + breakdown.no_action == summary.total_messages


def test_mixed_feedback_session_is_neutral():
    sessions = [
        make_session("mixed", [make_message(action="like"), make_message(action="dislike")]),
        make_session("liked", [make_message(action="like"), make_message()]),
        make_session("disliked", [make_message(action="dislike")]),
        make_session("quiet", [make_message()]),
    ]
    engagement = process_session_data(sessions).session_engagement

    assert engagement.liked_sessions == 1
    assert engagement.disliked_sessions == 1
    assert engagement.neutral_sessions == 2
    assert engagement.engagement_rate == 50
    assert (
        engagement.liked_sessions + engagement.disliked_sessions + engagement.neutral_sessions
        == len(sessions)
    )


def test_single_liked_tool_message_efficiency():
    sessions = [make_session("a", [make_message(tool="screener", credits=10, action="like")])]
    efficiency = process_session_data(sessions).tool_efficiency["screener"]

    assert efficiency.usage == 1
    assert efficiency.average_credits == 10
    assert efficiency.success_rate == 100


def test_tool_and_model_breakdowns():
    sessions = [
        make_session("a", [
            make_message(tool="market_data", model="gemini-2.5-pro", credits=3, action="like"),
            make_message(tool="market_data", model="gpt-4.1-mini", credits=5),
            make_message(tool="direct_response", model="gpt-4.1-mini", credits=1),
        ]),
    ]
    summary = process_session_data(sessions)

    assert summary.tool_usage_breakdown == {"market_data": 2, "direct_response": 1}
    assert summary.credits_usage_by_tool == {"market_data": 8, "direct_response": 1}
    assert summary.model_usage_breakdown == {"gemini-2.5-pro": 1, "gpt-4.1-mini": 2}
    market = summary.tool_efficiency["market_data"]
    assert market.usage == 2
    assert market.average_credits == 4
    assert market.success_rate == 50


def test_session_length_buckets():
    sessions = [
        make_session(str(count), message_count=count)
        for count in [1, 2, 3, 4, 5, 6, 10]
    ]
    distribution = process_session_data(sessions).session_length_distribution

    assert dict(zip(distribution.labels, distribution.data)) == {
        "1 message": 1,
        "2-3 messages": 2,
        "4-5 messages": 2,
        "6+ messages": 2,
    }


def test_session_length_buckets_are_zero_filled_in_fixed_order():
    distribution = process_session_data([make_session(message_count=7)]).session_length_distribution

    assert distribution.labels == ["1 message", "2-3 messages", "4-5 messages", "6+ messages"]
    assert distribution.data == [0, 0, 0, 1]


def test_session_length_bucket_uses_denormalized_count():
    assert session_length_bucket(1) == "1 message"
    assert session_length_bucket(3) == "2-3 messages"
    assert session_length_bucket(5) == "4-5 messages"
    assert session_length_bucket(6) == "6+ messages"


def test_review_sentiment():
    sessions = [
        make_session("a", [
            make_message(review="This was great!"),
            make_message(review="Terrible response"),
            make_message(review="It was okay"),
            make_message(review=None),
            make_message(review=""),
        ]),
    ]
    sentiment = process_session_data(sessions).review_sentiment

    assert (sentiment.positive, sentiment.negative, sentiment.neutral) == (1, 1, 1)


def test_positive_keywords_take_precedence():
    # "not good" contains "good"
    assert classify_review("Not good at all") == "positive"
    assert classify_review("POOR answer") == "negative"
    assert classify_review("badly formatted") == "negative"
    assert classify_review("fine") == "neutral"


def test_top_queries_ranking():
    queries = ["a", "a", "b", "a", "c", "c"]
    sessions = [make_session("s", [make_message(query=q) for q in queries])]
    top = process_session_data(sessions).top_queries

    assert [(t.query, t.count) for t in top] == [("a", 3), ("c", 2), ("b", 1)]


def test_top_queries_are_case_sensitive_and_limited():
    queries = [f"q{i}" for i in range(15)] + ["Q0", "q0"]
    sessions = [make_session("s", [make_message(query=q) for q in queries])]
    top = process_session_data(sessions).top_queries

    assert len(top) == 10
    assert (top[0].query, top[0].count) == ("q0", 2)
    assert top[1].query == "q1"

    assert len(process_session_data(sessions, top_queries_limit=3).top_queries) == 3


def test_daily_sessions_sorted_by_date():
    sessions = [
        make_session("a", created_at=JAN_01_2024_0000),
        make_session("b", created_at=NOV_14_2023_2213),
        make_session("c", created_at=JAN_01_2024_0000 + 3600),
    ]
    daily = process_session_data(sessions).daily_sessions_data

    assert daily.labels == ["Nov 14", "Jan 01"]
    assert daily.data == [1, 2]


def test_hourly_distribution_collapses_days():
    sessions = [
        make_session("a", [
            make_message(timestamp=NOV_14_2023_2213),
            make_message(timestamp=NOV_14_2023_2213 + 86400),
            make_message(timestamp=JAN_01_2024_0000),
        ]),
    ]
    hourly = process_session_data(sessions).hourly_distribution

    assert hourly.labels == ["00:00", "22:00"]
    assert hourly.data == [1, 2]


def test_labels_follow_display_timezone():
    ist = timezone(timedelta(hours=5, minutes=30))
    sessions = [make_session("a", [make_message(timestamp=NOV_14_2023_2213)], created_at=NOV_14_2023_2213)]
    summary = process_session_data(sessions, tz=ist)

    assert summary.daily_sessions_data.labels == ["Nov 15"]
    assert summary.hourly_distribution.labels == ["03:00"]


def test_aggregation_is_idempotent():
    sessions = [
        make_session("a", [make_message(action="like", review="great"), make_message(query="b")]),
        make_session("b", [make_message(tool="screener", action="dislike")], created_at=JAN_01_2024_0000),
    ]

    assert process_session_data(sessions) == process_session_data(sessions)


def test_summary_serializes_with_camel_case_names():
    sessions = [make_session("a", [make_message(tool="market_data", action="like")])]
    data = process_session_data(sessions).model_dump(by_alias=True)

    assert data["totalSessions"] == 1
    assert data["userActionBreakdown"] == {"likes": 1, "dislikes": 0, "noAction": 0}
    assert data["toolEfficiency"]["market_data"]["successRate"] == 100
    assert "engagementRate" in data["sessionEngagement"]
    assert data["topQueries"] == [{"query": "nifty outlook", "count": 1}]


def test_unrecognized_user_actions_count_as_no_action():
    raw = {"timestamp": NOV_14_2023_2213, "query": "q"}
    messages = [
        Message.model_validate({**raw, "userAction": ""}),
        Message.model_validate({**raw, "userAction": "thumbs_up"}),
        Message.model_validate({**raw, "userAction": "like"}),
    ]

    assert [m.user_action for m in messages] == [None, None, UserAction.LIKE]

    breakdown = process_session_data([make_session("a", messages)]).user_action_breakdown
    assert (breakdown.likes, breakdown.dislikes, breakdown.no_action) == (1, 0, 2)
