"""Analytics service for aggregating session statistics."""

import logging
from collections import Counter, defaultdict
from datetime import date, timezone, tzinfo

from src.config import get_settings
from src.features.sessions.models import Filters, Message, Session, UserAction
from src.features.sessions.service import SessionService, get_session_service
from src.utils.dates import day_label, hour_label, resolve_timezone

from .models import (
    AnalyticsSummary,
    ChartSeries,
    ReviewSentiment,
    SessionEngagement,
    ToolEfficiency,
    TopQuery,
    UserActionBreakdown,
)

logger = logging.getLogger(__name__)

POSITIVE_KEYWORDS = ("good", "great", "excellent", "perfect")
NEGATIVE_KEYWORDS = ("bad", "poor", "not good", "terrible")

SESSION_LENGTH_BUCKETS = ("1 message", "2-3 messages", "4-5 messages", "6+ messages")

DEFAULT_TOP_QUERIES = 10


def _ratio(numerator: float, denominator: float) -> float:
    """Divide, treating a zero denominator as a zero result."""
    return numerator / denominator if denominator else 0.0


def session_length_bucket(message_count: int) -> str:
    """Get the length bucket label for a session's message count."""
    if message_count == 1:
        return "1 message"
    if message_count <= 3:
        return "2-3 messages"
    if message_count <= 5:
        return "4-5 messages"
    return "6+ messages"


def classify_review(review: str) -> str:
    """
    Classify a review as positive, negative or neutral.

    Matching is case-insensitive substring search; positive keywords win
    over negative ones.
    """
    text = review.lower()
    if any(word in text for word in POSITIVE_KEYWORDS):
        return "positive"
    if any(word in text for word in NEGATIVE_KEYWORDS):
        return "negative"
    return "neutral"


def _user_actions(messages: list[Message]) -> UserActionBreakdown:
    breakdown = UserActionBreakdown()
    for msg in messages:
        if msg.user_action == UserAction.LIKE:
            breakdown.likes += 1
        elif msg.user_action == UserAction.DISLIKE:
            breakdown.dislikes += 1
        else:
            breakdown.no_action += 1
    return breakdown


def _session_engagement(sessions: list[Session]) -> SessionEngagement:
    engagement = SessionEngagement()
    for session in sessions:
        has_likes = any(m.user_action == UserAction.LIKE for m in session.messages)
        has_dislikes = any(m.user_action == UserAction.DISLIKE for m in session.messages)

        # Mixed feedback counts as neutral
        if has_likes and not has_dislikes:
            engagement.liked_sessions += 1
        elif has_dislikes and not has_likes:
            engagement.disliked_sessions += 1
        else:
            engagement.neutral_sessions += 1

    engaged = engagement.liked_sessions + engagement.disliked_sessions
    engagement.engagement_rate = _ratio(engaged, len(sessions)) * 100
    return engagement


def _tool_statistics(
    messages: list[Message],
) -> tuple[dict[str, int], dict[str, ToolEfficiency], dict[str, float]]:
    usage: dict[str, int] = defaultdict(int)
    credits: dict[str, float] = defaultdict(float)
    likes: dict[str, int] = defaultdict(int)

    for msg in messages:
        usage[msg.tool_used] += 1
        credits[msg.tool_used] += msg.credits_used
        if msg.user_action == UserAction.LIKE:
            likes[msg.tool_used] += 1

    # Every tool in usage has at least one message
    efficiency = {
        tool: ToolEfficiency(
            usage=count,
            average_credits=credits[tool] / count,
            success_rate=likes[tool] / count * 100,
        )
        for tool, count in usage.items()
    }
    return dict(usage), efficiency, dict(credits)


def _daily_sessions(sessions: list[Session], tz: tzinfo) -> ChartSeries:
    counts: dict[str, int] = defaultdict(int)
    first_day: dict[str, date] = {}

    for session in sessions:
        day, label = day_label(session.created_at, tz)
        counts[label] += 1
        if label not in first_day or day < first_day[label]:
            first_day[label] = day

    labels = sorted(counts, key=lambda label: first_day[label])
    return ChartSeries(labels=labels, data=[counts[label] for label in labels])


def _hourly_distribution(messages: list[Message], tz: tzinfo) -> ChartSeries:
    counts = Counter(hour_label(msg.timestamp, tz) for msg in messages)
    labels = sorted(counts)
    return ChartSeries(labels=labels, data=[counts[label] for label in labels])


def _session_lengths(sessions: list[Session]) -> ChartSeries:
    if not sessions:
        return ChartSeries()

    counts = Counter(session_length_bucket(s.message_count) for s in sessions)
    return ChartSeries(
        labels=list(SESSION_LENGTH_BUCKETS),
        data=[counts[bucket] for bucket in SESSION_LENGTH_BUCKETS],
    )


def _review_sentiment(messages: list[Message]) -> ReviewSentiment:
    sentiment = ReviewSentiment()
    for msg in messages:
        if not msg.user_review:
            continue
        category = classify_review(msg.user_review)
        if category == "positive":
            sentiment.positive += 1
        elif category == "negative":
            sentiment.negative += 1
        else:
            sentiment.neutral += 1
    return sentiment


def _top_queries(messages: list[Message], limit: int) -> list[TopQuery]:
    counts: dict[str, int] = defaultdict(int)
    for msg in messages:
        counts[msg.query] += 1

    # sorted() is stable, so ties keep first-occurrence order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [TopQuery(query=query, count=count) for query, count in ranked]


def process_session_data(
    sessions: list[Session],
    top_queries_limit: int = DEFAULT_TOP_QUERIES,
    tz: tzinfo = timezone.utc,
) -> AnalyticsSummary:
    """
    Aggregate sessions into dashboard statistics.

    Pure function of its input: an empty list yields zero totals and
    averages, empty breakdowns and no top queries.

    Args:
        sessions: Sessions with their messages, in display order
        top_queries_limit: Number of most frequent queries to keep
        tz: Timezone used for day and hour labels

    Returns:
        Analytics summary for all sessions
    """
    total_sessions = len(sessions)
    all_messages = [msg for session in sessions for msg in session.messages]
    total_messages = len(all_messages)
    total_credits = sum(msg.credits_used for msg in all_messages)

    tool_usage, tool_efficiency, credits_by_tool = _tool_statistics(all_messages)
    model_usage = dict(Counter(msg.model_used for msg in all_messages))

    return AnalyticsSummary(
        total_sessions=total_sessions,
        total_messages=total_messages,
        total_credits_used=total_credits,
        average_messages_per_session=_ratio(total_messages, total_sessions),
        average_credits_per_session=_ratio(total_credits, total_sessions),
        user_action_breakdown=_user_actions(all_messages),
        session_engagement=_session_engagement(sessions),
        tool_usage_breakdown=tool_usage,
        tool_efficiency=tool_efficiency,
        model_usage_breakdown=model_usage,
        daily_sessions_data=_daily_sessions(sessions, tz),
        credits_usage_by_tool=credits_by_tool,
        session_length_distribution=_session_lengths(sessions),
        review_sentiment=_review_sentiment(all_messages),
        hourly_distribution=_hourly_distribution(all_messages, tz),
        top_queries=_top_queries(all_messages, top_queries_limit),
    )


class AnalyticsService:
    """Service for building dashboard statistics from the session source."""

    def __init__(self, sessions: SessionService):
        self.sessions = sessions

    def summarize(self, sessions: list[Session]) -> AnalyticsSummary:
        """Aggregate already retrieved sessions with configured options."""
        settings = get_settings()
        return process_session_data(
            sessions,
            top_queries_limit=settings.top_queries_limit,
            tz=resolve_timezone(settings.display_timezone),
        )

    async def get_dashboard_stats(
        self,
        filters: Filters | None = None,
    ) -> AnalyticsSummary:
        """Fetch all matching sessions and aggregate them."""
        sessions = await self.sessions.fetch_all_sessions(filters)
        summary = self.summarize(sessions)
        logger.info(
            "Computed analytics: sessions=%s messages=%s",
            summary.total_sessions,
            summary.total_messages,
        )
        return summary


def get_analytics_service() -> AnalyticsService:
    """Get analytics service instance."""
    return AnalyticsService(sessions=get_session_service())
