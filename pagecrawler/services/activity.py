"""In-flight request tracking for a page.

Playwright's ``networkidle`` load state fires once per navigation, so after
the initial load it cannot tell whether a later action (a scroll, a click)
triggered new requests. RequestActivity counts the page's requests between
``request`` and ``requestfinished``/``requestfailed`` events and waits until
none have been pending for a quiet period.
"""

import asyncio
import logging
import time
from typing import Set

from playwright.async_api import Page, Request

logger = logging.getLogger(__name__)

DEFAULT_QUIET_MS = 500
DEFAULT_QUIET_TIMEOUT_MS = 30000
POLL_INTERVAL_MS = 100


class RequestActivity:
    """Counts a page's in-flight requests while attached."""

    def __init__(self, page: Page):
        self.page = page
        self._active: Set[Request] = set()
        self._last_activity = time.monotonic()
        self._attached = False

    @property
    def pending(self) -> int:
        return len(self._active)

    def attach(self) -> None:
        if self._attached:
            return
        self.page.on("request", self._on_request)
        self.page.on("requestfinished", self._on_request_done)
        self.page.on("requestfailed", self._on_request_done)
        self._attached = True
        self._last_activity = time.monotonic()

    def detach(self) -> None:
        if not self._attached:
            return
        self.page.remove_listener("request", self._on_request)
        self.page.remove_listener("requestfinished", self._on_request_done)
        self.page.remove_listener("requestfailed", self._on_request_done)
        self._attached = False
        self._active.clear()

    def _on_request(self, request: Request) -> None:
        self._active.add(request)
        self._last_activity = time.monotonic()

    def _on_request_done(self, request: Request) -> None:
        self._active.discard(request)
        self._last_activity = time.monotonic()

    async def wait_for_quiet(
        self,
        quiet_ms: int = DEFAULT_QUIET_MS,
        timeout_ms: int = DEFAULT_QUIET_TIMEOUT_MS,
        poll_ms: int = POLL_INTERVAL_MS
    ) -> bool:
        """Wait until no request has been pending for ``quiet_ms``.

        The quiet period is measured from the later of the call and the last
        request event, so requests started shortly after an action still count.

        Returns:
            True if the network went quiet, False if the timeout elapsed first
        """
        started = time.monotonic()
        deadline = started + timeout_ms / 1000

        while True:
            now = time.monotonic()
            quiet_since = max(self._last_activity, started)
            if not self._active and (now - quiet_since) * 1000 >= quiet_ms:
                return True
            if now >= deadline:
                logger.debug(f"Network not quiet after {timeout_ms}ms ({self.pending} requests pending)")
                return False
            await asyncio.sleep(poll_ms / 1000)
