"""Session analytics module."""

from .models import AnalyticsSummary
from .service import process_session_data

__all__ = ["AnalyticsSummary", "process_session_data"]
