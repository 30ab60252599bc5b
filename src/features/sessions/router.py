"""Session browser API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from .models import Filters, SessionDataRequest, SessionDataResponse, SessionPage
from .service import (
    SessionFetchError,
    SessionService,
    compute_session_overview,
    get_session_service,
    parse_id_list,
)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def get_session_filters(
    user_ids: str | None = Query(default=None, description="Comma-separated user IDs"),
    session_ids: str | None = Query(default=None, description="Comma-separated session IDs"),
    email_ids: str | None = Query(default=None, description="Comma-separated email IDs"),
    liked: bool = False,
    disliked: bool = False,
    user_reviewed: bool = False,
) -> Filters:
    """Build filters from query parameters; unchecked flags are left unset."""
    return Filters(
        user_ids=parse_id_list(user_ids),
        session_ids=parse_id_list(session_ids),
        email_ids=parse_id_list(email_ids),
        liked=liked or None,
        disliked=disliked or None,
        user_reviewed=user_reviewed or None,
    )


def _to_page(data: SessionDataResponse) -> SessionPage:
    return SessionPage(
        filters=data.filters,
        pagination=data.pagination,
        sessions=data.sessions,
        overview=compute_session_overview(data.sessions),
    )


@router.get("", response_model=SessionPage, response_model_by_alias=True)
async def list_sessions(
    filters: Filters = Depends(get_session_filters),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=1000),
    service: SessionService = Depends(get_session_service),
):
    """
    Get one page of sessions.

    Returns the sessions, the echoed filters, pagination metadata and an
    overview of the page.
    """
    try:
        data = await service.fetch_page(filters, page=page, page_size=page_size)
    except SessionFetchError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return _to_page(data)


@router.post("/search", response_model=SessionPage, response_model_by_alias=True)
async def search_sessions(
    body: SessionDataRequest,
    service: SessionService = Depends(get_session_service),
):
    """Get one page of sessions for a full filter and pagination request."""
    try:
        data = await service.fetch_page(
            body.filters,
            page=body.pagination.page,
            page_size=body.pagination.page_size,
        )
    except SessionFetchError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return _to_page(data)
