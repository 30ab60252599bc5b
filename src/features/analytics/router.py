"""Analytics API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.config import get_settings
from src.core.rate_limiter import limiter
from src.features.sessions.models import Filters, Session
from src.features.sessions.router import get_session_filters
from src.features.sessions.service import SessionFetchError

from .models import AnalyticsSummary
from .service import AnalyticsService, get_analytics_service

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def dashboard_rate_limit() -> str:
    return f"{get_settings().rate_limit_per_minute}/minute"


@router.get("/dashboard", response_model=AnalyticsSummary, response_model_by_alias=True)
@limiter.limit(dashboard_rate_limit)
async def get_dashboard(
    request: Request,
    filters: Filters = Depends(get_session_filters),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """
    Get complete dashboard statistics.

    Fetches every matching session (up to the configured page cap) and
    aggregates them. Fails as a whole if any page cannot be fetched.
    """
    try:
        return await service.get_dashboard_stats(filters)
    except SessionFetchError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch analytics data: {e}",
        )


@router.post("/summary", response_model=AnalyticsSummary, response_model_by_alias=True)
async def summarize_sessions(
    sessions: list[Session],
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Aggregate sessions supplied in the request body."""
    return service.summarize(sessions)
