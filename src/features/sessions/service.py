"""Session retrieval service."""

import asyncio
import logging

import httpx

from src.config import get_settings
from src.core.session_api import SessionApiClient, SessionApiError, get_session_api_client

from .models import (
    Filters,
    Pagination,
    Session,
    SessionDataRequest,
    SessionDataResponse,
    SessionOverview,
    UserAction,
)

logger = logging.getLogger(__name__)


class SessionFetchError(Exception):
    """Raised when a session retrieval cannot be completed."""

    pass


def parse_id_list(text: str | None) -> list[str] | None:
    """Split a comma-separated ID string, dropping blank entries."""
    if not text:
        return None
    ids = [part.strip() for part in text.split(",")]
    ids = [i for i in ids if i]
    return ids or None


def compute_session_overview(sessions: list[Session]) -> SessionOverview | None:
    """
    Summarize one page of sessions for the session browser.

    Message totals use the denormalized message_count. A session with both
    likes and dislikes counts as liked and as disliked.
    """
    if not sessions:
        return None

    total_sessions = len(sessions)
    total_messages = sum(s.message_count for s in sessions)
    total_credits = sum(m.credits_used for s in sessions for m in s.messages)
    liked = sum(
        1 for s in sessions
        if any(m.user_action == UserAction.LIKE for m in s.messages)
    )
    disliked = sum(
        1 for s in sessions
        if any(m.user_action == UserAction.DISLIKE for m in s.messages)
    )

    return SessionOverview(
        total_sessions=total_sessions,
        total_messages=total_messages,
        total_credits=total_credits,
        liked_sessions=liked,
        disliked_sessions=disliked,
        average_messages=total_messages / total_sessions,
        average_credits=total_credits / total_sessions,
        engagement_rate=(liked + disliked) / total_sessions * 100,
    )


class SessionService:
    """Service for paging through the remote session source."""

    def __init__(self, api: SessionApiClient):
        self.api = api

    async def fetch_page(
        self,
        filters: Filters | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> SessionDataResponse:
        """Fetch a single page of sessions."""
        request = SessionDataRequest(
            filters=filters or Filters(),
            pagination=Pagination(page=page, page_size=page_size),
        )
        try:
            return await self.api.fetch_session_data(request)
        except SessionApiError as e:
            raise SessionFetchError(f"Failed to fetch sessions: {e}") from e

    async def fetch_all_sessions(
        self,
        filters: Filters | None = None,
        page_size: int | None = None,
        max_pages: int | None = None,
    ) -> list[Session]:
        """
        Fetch every page of sessions up to a page cap.

        The first page tells whether more pages exist; the remaining pages
        are requested concurrently and concatenated in page order. A single
        failed page fails the whole retrieval.

        Args:
            filters: Criteria applied to every page
            page_size: Sessions per page (settings default)
            max_pages: Highest page number requested (settings default)

        Returns:
            Sessions from all fetched pages
        """
        settings = get_settings()
        page_size = page_size or settings.analytics_page_size
        max_pages = max_pages or settings.analytics_max_pages
        filters = filters or Filters()

        async with self.api.open_client() as client:
            first = await self._fetch(client, filters, 1, page_size)
            sessions = list(first.sessions)

            pagination = first.pagination
            total_pages = pagination.total_pages or 1
            if not pagination.has_more or total_pages <= 1:
                return sessions

            last_page = min(total_pages, max_pages)
            if total_pages > max_pages:
                logger.warning(
                    "Session source has %s pages, fetching only the first %s",
                    total_pages,
                    max_pages,
                )

            tasks = [
                asyncio.create_task(self._fetch(client, filters, page, page_size))
                for page in range(2, last_page + 1)
            ]
            try:
                pages = await asyncio.gather(*tasks)
            except SessionFetchError:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        for page in pages:
            sessions.extend(page.sessions)

        logger.info(
            "Fetched %s sessions from %s pages", len(sessions), last_page
        )
        return sessions

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        filters: Filters,
        page: int,
        page_size: int,
    ) -> SessionDataResponse:
        request = SessionDataRequest(
            filters=filters,
            pagination=Pagination(page=page, page_size=page_size),
        )
        try:
            return await self.api.fetch_session_data(request, client=client)
        except SessionApiError as e:
            raise SessionFetchError(f"Failed to fetch session page {page}: {e}") from e


def get_session_service() -> SessionService:
    """Get session service instance."""
    return SessionService(api=get_session_api_client())
