"""Rendered document content service."""

from .base import PageService


class ContentService(PageService):
    """Captures the rendered document markup."""

    name = "content"

    async def get_content(self) -> str:
        markup = await self.page.content()
        self.record(f"getting page content ({len(markup)} chars)", markup)
        return markup
