"""Element click service."""

from .base import PageService


class ClickService(PageService):
    """Clicks elements on the session page."""

    name = "click"

    async def click(self, selector: str) -> None:
        """Click the first element matching a selector.

        The intent is recorded first. A selector that never appears raises
        Playwright's TimeoutError to the caller.

        Args:
            selector: CSS selector of the element to click
        """
        self.record(f"new click on {selector}", {'selector': selector})
        await self.page.wait_for_selector(selector)
        await self.page.click(selector)
