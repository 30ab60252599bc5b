"""Analytics data models."""

from pydantic import Field

from src.features.sessions.models import CamelModel


class UserActionBreakdown(CamelModel):
    """Message-level feedback counts."""
    likes: int = 0
    dislikes: int = 0
    no_action: int = 0


class SessionEngagement(CamelModel):
    """Session-level feedback classification."""
    liked_sessions: int = 0
    disliked_sessions: int = 0
    neutral_sessions: int = 0
    engagement_rate: float = 0.0


class ToolEfficiency(CamelModel):
    """Usage and outcome statistics for one tool."""
    usage: int
    average_credits: float
    success_rate: float


class ChartSeries(CamelModel):
    """Parallel label/value sequences for a chart."""
    labels: list[str] = Field(default_factory=list)
    data: list[int] = Field(default_factory=list)


class ReviewSentiment(CamelModel):
    """Keyword-based classification of written reviews."""
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class TopQuery(CamelModel):
    """Query text with its number of occurrences."""
    query: str
    count: int


class AnalyticsSummary(CamelModel):
    """Complete dashboard statistics."""
    total_sessions: int
    total_messages: int
    total_credits_used: float
    average_messages_per_session: float
    average_credits_per_session: float
    user_action_breakdown: UserActionBreakdown
    session_engagement: SessionEngagement
    tool_usage_breakdown: dict[str, int]
    tool_efficiency: dict[str, ToolEfficiency]
    model_usage_breakdown: dict[str, int]
    daily_sessions_data: ChartSeries
    credits_usage_by_tool: dict[str, float]
    session_length_distribution: ChartSeries
    review_sentiment: ReviewSentiment
    hourly_distribution: ChartSeries
    top_queries: list[TopQuery]
