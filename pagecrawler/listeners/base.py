"""Base class for traffic listeners.

Traffic listeners subscribe to the page's network events once, when the
session is initialized and before the first navigation, and append a record
to the event log for every event they observe until the session ends.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from playwright.async_api import Page

from ..models.state import EventLog, EventRecord

logger = logging.getLogger(__name__)


class TrafficListener(ABC):
    """Abstract base for request/response listeners."""

    #: Tag written as the source of every record this listener appends
    name: ClassVar[str] = "listener"

    def __init__(self, page: Page, event_log: EventLog):
        """Initialize listener.

        Args:
            page: Session page handle
            event_log: Shared session event log
        """
        self.page = page
        self.event_log = event_log
        self.events_seen = 0

    @abstractmethod
    async def attach(self, page: Page) -> None:
        """Subscribe to the page's network events."""
        ...

    async def on_initialize(self) -> None:
        """Attach to the session page."""
        logger.info(f"Attaching listener [{self.name}]")
        await self.attach(self.page)

    def record(self, *payload: Any) -> EventRecord:
        self.events_seen += 1
        return self.event_log.append(self.name, *payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, events={self.events_seen})"
