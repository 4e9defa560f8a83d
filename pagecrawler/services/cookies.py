"""Cookie persistence and consent overlay service.

Cookies recorded by one session are replayed into the next: the exported
snapshot of a previous run is scanned for the latest cookie record, which is
added to the new page's browser context before navigating.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .base import PageService
from ..persistence.snapshot import read_snapshot

logger = logging.getLogger(__name__)

DEFAULT_CONSENT_ELEMENT_ID = "close-cookies"
CONSENT_WAIT_TIMEOUT_MS = 5000

_CLICK_BY_ID_JS = """
(elementId) => {
    const element = document.getElementById(elementId);
    if (element) element.click();
}
"""


def _is_cookie(value: Any) -> bool:
    return isinstance(value, dict) and 'name' in value and 'value' in value


class CookiesService(PageService):
    """Reads, replays and records session cookies."""

    name = "cookies"

    async def load_from_storage(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        """Load the most recent cookie record from an exported snapshot.

        Any failure (missing file, malformed content, no cookie record) is
        treated as "no stored cookies".

        Args:
            path: Snapshot written by a previous session

        Returns:
            Stored cookies, or an empty list
        """
        try:
            records = await read_snapshot(path)
        except (OSError, ValueError) as e:
            logger.info(f"No stored cookies loaded from {path}: {e}")
            return []

        for entry in reversed(records):
            if not isinstance(entry, dict):
                continue
            payload = entry.get(self.name)
            if not isinstance(payload, list):
                continue
            cookies = [cookie for cookie in payload if _is_cookie(cookie)]
            if cookies:
                logger.info(f"Loaded {len(cookies)} stored cookies from {path}")
                return cookies

        logger.info(f"No cookie record found in {path}")
        return []

    async def set_cookies(self, cookies: Optional[List[Dict[str, Any]]] = None) -> None:
        """Add cookies to the page's browser context (no-op when empty)."""
        if not cookies:
            return

        self.debug(f"setting {len(cookies)} cookies")
        await self.page.context.add_cookies(cookies)

    async def get_cookies(self) -> List[Dict[str, Any]]:
        """Record and return the cookies currently set in the session."""
        cookies = await self.page.context.cookies()
        self.record(f"cookies intercepted ({len(cookies)})", *cookies)
        return cookies

    async def close(self, element_id: str = DEFAULT_CONSENT_ELEMENT_ID) -> bool:
        """Dismiss a consent overlay by clicking its close element.

        Waits a bounded time for ``#element_id``; an overlay that never shows
        up is ignored.

        Args:
            element_id: DOM id of the close control

        Returns:
            True if the close control was found
        """
        self.debug(f"trying to close #{element_id}")
        try:
            element = await self.page.wait_for_selector(
                f"#{element_id}",
                timeout=CONSENT_WAIT_TIMEOUT_MS
            )
        except PlaywrightTimeoutError:
            element = None

        if not element:
            logger.debug(f"Consent overlay #{element_id} not present")
            return False

        await self.page.evaluate(_CLICK_BY_ID_JS, element_id)
        return True
