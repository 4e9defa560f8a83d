"""Scroll-until-stable service for lazily loaded content.

The service repeatedly scrolls an element to its end and waits for the requests
it triggered to finish, until two consecutive measurements of the scroll extent
are equal, i.e. scrolling stopped loading new content.
"""

import logging
import random
from enum import Enum

from .activity import RequestActivity
from .base import PageService

logger = logging.getLogger(__name__)

SELECTOR_TIMEOUT_MS = 60000
SETTLE_DELAY_MS = 500
NETWORK_QUIET_MS = 500
NETWORK_QUIET_TIMEOUT_MS = 30000
POLL_DELAY_RANGE_MS = (1000, 2000)


class ScrollDirection(str, Enum):
    """Axes a scroll can run along."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    BOTH = "both"


# "both" is measured on the vertical extent only
MEASURE_EXTENT_JS = """
([selector, direction]) => {
    const element = document.querySelector(selector);
    if (!element) throw new Error(`Element not found: ${selector}`);
    return direction === "horizontal" ? element.scrollWidth : element.scrollHeight;
}
"""

SCROLL_TO_END_JS = """
async ([selector, direction, settleMs]) => {
    const element = document.querySelector(selector);
    if (!element) throw new Error(`Element not found: ${selector}`);
    const settle = () => new Promise((resolve) => setTimeout(resolve, settleMs));

    if (direction === "horizontal" || direction === "both") {
        element.scrollTo({ left: element.scrollWidth, behavior: "smooth" });
        await settle();
    }
    if (direction === "vertical" || direction === "both") {
        element.scrollTo({ top: element.scrollHeight, behavior: "smooth" });
        await settle();
    }
}
"""


class ScrollService(PageService):
    """Scrolls an element until its content stops growing."""

    name = "scroll"

    async def scroll(self, selector: str, direction: str = ScrollDirection.VERTICAL) -> int:
        """Scroll an element until its extent converges.

        There is no iteration cap: content that keeps growing keeps the loop
        running.

        Args:
            selector: CSS selector of the scrollable element
            direction: One of vertical, horizontal or both

        Returns:
            Final scroll extent in pixels

        Raises:
            ValueError: If the direction is unknown
            TimeoutError: (Playwright) if the element never appears
        """
        direction = ScrollDirection(direction)
        self.record(
            f"scrolling to element {selector}",
            {'selector': selector, 'direction': direction.value}
        )

        await self.page.wait_for_selector(selector, timeout=SELECTOR_TIMEOUT_MS)

        # TODO: add an optional max_rounds bound for sites that report growth forever
        previous_extent = 0
        current_extent = await self._measure(selector, direction)
        rounds = 0

        activity = RequestActivity(self.page)
        activity.attach()
        try:
            while current_extent != previous_extent:
                previous_extent = current_extent
                rounds += 1

                await self.page.evaluate(
                    SCROLL_TO_END_JS,
                    [selector, direction.value, SETTLE_DELAY_MS]
                )
                await activity.wait_for_quiet(NETWORK_QUIET_MS, NETWORK_QUIET_TIMEOUT_MS)

                current_extent = await self._measure(selector, direction)
                logger.debug(f"Scroll round {rounds}: extent {previous_extent} -> {current_extent}")

                await self.page.wait_for_timeout(random.randint(*POLL_DELAY_RANGE_MS))
        finally:
            activity.detach()

        logger.info(f"Scrolling {selector} converged after {rounds} rounds at {current_extent}px")
        return current_extent

    async def _measure(self, selector: str, direction: ScrollDirection) -> int:
        return await self.page.evaluate(MEASURE_EXTENT_JS, [selector, direction.value])
