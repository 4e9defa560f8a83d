"""Base class for capability services.

A capability service wraps the session's page handle and event log and
exposes one cohesive unit of browser interaction. Services are constructed on
demand by the service registry, used for an operation and discarded; the only
state they share across calls is the event log.
"""

import logging
from typing import Any, ClassVar

from playwright.async_api import Page

from ..models.state import EventLog, EventRecord

logger = logging.getLogger(__name__)


class PageService:
    """Abstract base for all capability services."""

    #: Tag written as the source of every record this service appends
    name: ClassVar[str] = "page"

    def __init__(self, page: Page, event_log: EventLog):
        """Initialize service.

        Args:
            page: Session page handle
            event_log: Shared session event log
        """
        self.page = page
        self.event_log = event_log
        logger.debug(f"Service [{self.name}] created")

    def record(self, message: str, *payload: Any) -> EventRecord:
        """Append a record tagged with this service's name.

        Args:
            message: Human readable description for the debug log
            *payload: Values stored with the record
        """
        record = self.event_log.append(self.name, *payload)
        self.debug(message)
        return record

    def debug(self, message: str) -> None:
        logger.debug(f"[{self.name}] {message}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
