"""Page navigation service."""

import logging
from typing import Any, Dict, Optional

from .base import PageService

logger = logging.getLogger(__name__)


class WaitStrategy:
    """Load states accepted by Playwright's ``wait_until``."""
    NETWORKIDLE = "networkidle"
    LOAD = "load"
    DOMCONTENTLOADED = "domcontentloaded"
    COMMIT = "commit"


DEFAULT_NAVIGATION_TIMEOUT_MS = 30000


def default_navigation_options() -> Dict[str, Any]:
    """Wait for the network to settle, bounded by a fixed timeout."""
    return {
        'wait_until': WaitStrategy.NETWORKIDLE,
        'timeout': DEFAULT_NAVIGATION_TIMEOUT_MS,
    }


class NavigationService(PageService):
    """Navigates the session page."""

    name = "navigation"

    async def navigate(self, url: str, options: Optional[Dict[str, Any]] = None) -> None:
        """Navigate to a URL.

        The attempt is recorded before navigating, so a navigation that times
        out still leaves a record behind.

        Args:
            url: Destination URL
            options: Keyword options for ``page.goto`` (defaults to
                networkidle with a 30 second timeout)
        """
        options = dict(options) if options is not None else default_navigation_options()

        self.record(f"navigating to {url}", {'url': url, 'options': options})
        await self.page.goto(url, **options)
        logger.info(f"Navigation completed: {url}")
