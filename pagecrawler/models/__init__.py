"""Data models for crawl sessions."""

from .state import EventLog, EventRecord, SessionState
from .pagination import PaginationLink, PaginationResult

__all__ = [
    "EventLog",
    "EventRecord",
    "SessionState",
    "PaginationLink",
    "PaginationResult",
]
