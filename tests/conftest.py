"""Shared test configuration."""

import pytest
from fastapi.testclient import TestClient

from src.features.sessions.models import Message, Session


def make_message(
    query: str = "nifty outlook",
    tool: str = "direct_response",
    model: str = "gpt-4.1-mini",
    credits: float = 1,
    action: str | None = None,
    review: str | None = None,
    timestamp: float = 1700000000,
) -> Message:
    return Message(
        credits_used=credits,
        model_used=model,
        tool_used=tool,
        query=query,
        timestamp=timestamp,
        total_cost_inr=credits * 10,
        user_action=action,
        user_review=review,
    )


def make_session(
    session_id: str = "s1",
    messages: list[Message] | None = None,
    message_count: int | None = None,
    created_at: float = 1700000000,
) -> Session:
    messages = messages or []
    return Session(
        session_id=session_id,
        user_id=f"user-{session_id}",
        email_id=f"{session_id}@example.com",
        title=f"Session {session_id}",
        created_at=created_at,
        last_updated_at=created_at + 60,
        message_count=len(messages) if message_count is None else message_count,
        messages=messages,
    )


@pytest.fixture
def client():
    """Test client for the application."""
    from src.core.rate_limiter import limiter
    from src.main import app

    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
