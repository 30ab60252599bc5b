"""Session and message models for the remote session-data endpoint."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class UserAction(str, Enum):
    """Feedback an end user left on a message."""

    LIKE = "like"
    DISLIKE = "dislike"
    NONE = "none"


class Message(CamelModel):
    """One query/response exchange within a session."""

    model_config = ConfigDict(frozen=True)

    credits_used: float = 0
    model_used: str = ""
    tool_used: str = ""
    query: str = ""
    timestamp: float
    total_cost_inr: float = 0
    user_action: UserAction | None = None
    user_review: str | None = None

    @field_validator("user_action", mode="before")
    @classmethod
    def unknown_action_as_none(cls, value):
        # Anything other than a known action counts as no feedback
        if isinstance(value, str) and value in {action.value for action in UserAction}:
            return value
        return None


class Session(CamelModel):
    """One user conversation with its messages in chronological order."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    user_id: str = ""
    email_id: str = ""
    title: str = ""
    session_url: str | None = None
    sso_id: str | None = Field(default=None, alias="ssoID")
    created_at: float
    last_updated_at: float = 0
    like_count: int = 0
    dislike_count: int = 0
    message_count: int = 0
    review_count: int = 0
    messages: list[Message] = Field(default_factory=list)


class Filters(CamelModel):
    """Criteria forwarded to the session-data endpoint."""

    user_ids: list[str] | None = None
    session_ids: list[str] | None = None
    email_ids: list[str] | None = None
    liked: bool | None = None
    disliked: bool | None = None
    user_reviewed: bool | None = None


class Pagination(CamelModel):
    """Page request, echoed back with metadata by the endpoint."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    has_more: bool | None = None
    total_count: int | None = None
    total_pages: int | None = None


class SessionDataRequest(CamelModel):
    """Request body for the session-data endpoint."""

    filters: Filters = Field(default_factory=Filters)
    pagination: Pagination = Field(default_factory=Pagination)


class SessionDataResponse(CamelModel):
    """One page of sessions with echoed filters and pagination metadata."""

    filters: Filters = Field(default_factory=Filters)
    pagination: Pagination
    sessions: list[Session] = Field(default_factory=list)


class SessionOverview(CamelModel):
    """Summary chips for the sessions on one page."""

    total_sessions: int
    total_messages: int
    total_credits: float
    liked_sessions: int
    disliked_sessions: int
    average_messages: float
    average_credits: float
    engagement_rate: float


class SessionPage(SessionDataResponse):
    """Session page returned to the browser, with its overview."""

    overview: SessionOverview | None = None
