"""Session browsing module."""

from .models import Message, Session, Filters, Pagination, UserAction

__all__ = ["Message", "Session", "Filters", "Pagination", "UserAction"]
