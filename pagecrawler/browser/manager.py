"""Session manager owning the browser, the page and the event log.

The SessionManager is the single owner of one crawl session. It opens the
browser and exactly one page, attaches every registered traffic listener
before anything can navigate, hands out freshly constructed capability
services by name, and finally exports the event log and tears the session
down.

Lifecycle: uninitialized -> initialized -> closed. A closed session cannot
be initialized again.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from playwright.async_api import Browser, Page

from .factory import BrowserConfig, BrowserFactory
from ..errors import MissingInstanceError, SessionStateError
from ..listeners.base import TrafficListener
from ..listeners.registry import listener_registry as default_listener_registry
from ..models.state import EventLog, SessionState
from ..persistence.snapshot import write_snapshot
from ..registry import Registry
from ..services.base import PageService
from ..services.registry import service_registry as default_service_registry

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns one browser connection, one page and one event log."""

    def __init__(
        self,
        service_registry: Optional[Registry[PageService]] = None,
        listener_registry: Optional[Registry[TrafficListener]] = None,
    ):
        """Initialize session manager.

        Args:
            service_registry: Capability services available through get()
            listener_registry: Listeners attached at initialize()
        """
        self._service_registry = service_registry or default_service_registry
        self._listener_registry = listener_registry or default_listener_registry
        self._event_log = EventLog()
        self._state = SessionState.UNINITIALIZED
        self._factory: Optional[BrowserFactory] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None
        self._listeners: List[TrafficListener] = []

    @property
    def page(self) -> Page:
        if self._page is None:
            raise MissingInstanceError("page")
        return self._page

    @property
    def browser(self) -> Browser:
        if self._browser is None:
            raise MissingInstanceError("browser")
        return self._browser

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def listeners(self) -> List[TrafficListener]:
        """Listeners attached to the current page."""
        return list(self._listeners)

    async def initialize(self, config: BrowserConfig) -> None:
        """Open the browser and page and attach all listeners.

        Connects to ``config.remote_endpoint`` when set, otherwise launches a
        local browser.

        Args:
            config: Browser configuration

        Raises:
            SessionStateError: If the session was already initialized or closed
        """
        if self._state is not SessionState.UNINITIALIZED:
            raise SessionStateError(
                f"Cannot initialize a session in state '{self._state.value}'",
                state=self._state.value
            )

        self._factory = BrowserFactory(config)
        self._browser = await self._factory.start()

        try:
            self._page = await self._factory.new_page()

            self._listeners = [
                listener_class(self._page, self._event_log)
                for listener_class in self._listener_registry.classes()
            ]
            for listener in self._listeners:
                if isinstance(listener, TrafficListener):
                    await listener.on_initialize()

        except Exception as e:
            logger.error(f"Failed to initialize session: {e}")
            await self._factory.stop()
            self._browser = None
            self._page = None
            self._listeners = []
            raise

        self._state = SessionState.INITIALIZED
        logger.info(f"Session initialized with {len(self._listeners)} listeners")

    def get(self, name: str) -> PageService:
        """Construct the capability service registered under a name.

        Raises:
            ServiceNotFoundError: If no service has that name
            MissingInstanceError: If the session is not initialized
        """
        return self._service_registry.create(name, self.page, self._event_log)

    def listen(self, name: str) -> TrafficListener:
        """Construct (without attaching) the listener registered under a name.

        Raises:
            ListenerNotFoundError: If no listener has that name
            MissingInstanceError: If the session is not initialized
        """
        return self._listener_registry.create(name, self.page, self._event_log)

    async def export_state(self, path: Union[str, Path]) -> bool:
        """Write the full event log to a JSON snapshot.

        Failures are logged rather than raised.

        Returns:
            True if the snapshot was written
        """
        try:
            target = await write_snapshot(path, self._event_log.snapshot())
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving state to file {path}: {e}")
            return False

        logger.info(f"State saved to file: {target}")
        return True

    async def close(self) -> None:
        """Close the page, then the browser connection.

        The browser is released even if closing the page fails.
        """
        page = self.page
        try:
            await page.close()
        finally:
            self._state = SessionState.CLOSED
            if self._factory:
                await self._factory.stop()
            logger.info("Session closed")

    async def __aenter__(self) -> "SessionManager":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._state is SessionState.INITIALIZED:
            await self.close()

    def __repr__(self) -> str:
        return f"SessionManager(state={self._state.value}, records={len(self._event_log)})"
