"""HTTP client for the remote session-data endpoint."""

import logging

import httpx
from pydantic import ValidationError

from src.config import get_settings
from src.features.sessions.models import SessionDataRequest, SessionDataResponse

logger = logging.getLogger(__name__)


class SessionApiError(Exception):
    """Raised when the session-data endpoint cannot be queried."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SessionApiClient:
    """Wrapper for the paginated session-data query service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def open_client(self) -> httpx.AsyncClient:
        """Open a client for issuing one or more page requests."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=self.transport,
        )

    async def fetch_session_data(
        self,
        request: SessionDataRequest,
        client: httpx.AsyncClient | None = None,
    ) -> SessionDataResponse:
        """
        Fetch one page of sessions.

        Args:
            request: Filters and pagination for the page
            client: Open client to reuse (a short-lived one is created otherwise)

        Returns:
            Parsed page of sessions
        """
        payload = request.model_dump(by_alias=True, exclude_none=True, mode="json")

        try:
            if client is None:
                async with self.open_client() as own_client:
                    response = await own_client.post("/session-data", json=payload)
            else:
                response = await client.post("/session-data", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Session data request failed: page=%s status=%s",
                request.pagination.page,
                e.response.status_code,
            )
            raise SessionApiError(
                f"Session data request failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "Error fetching session data: page=%s error=%s",
                request.pagination.page,
                e,
            )
            raise SessionApiError(f"Error fetching session data: {e}") from e

        try:
            return SessionDataResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Invalid session data payload: page=%s", request.pagination.page)
            raise SessionApiError(f"Invalid session data payload: {e}") from e


def get_session_api_client() -> SessionApiClient:
    """Get session API client instance (dependency injection)."""
    settings = get_settings()
    return SessionApiClient(
        base_url=settings.session_api_base_url,
        timeout=settings.session_api_timeout,
    )
