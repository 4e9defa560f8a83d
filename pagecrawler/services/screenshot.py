"""Full-page screenshot service."""

from pathlib import Path
from typing import Union

from .base import PageService


class ScreenshotService(PageService):
    """Captures full-page screenshots."""

    name = "screenshot"

    async def screenshot(self, path: Union[str, Path]) -> int:
        """Capture the full page to an image file.

        Only the path and size are recorded, never the image bytes.

        Args:
            path: Destination image path

        Returns:
            Size of the captured image in bytes
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        image = await self.page.screenshot(path=target, full_page=True)
        size = len(image)

        self.record("screenshot taken", {'path': str(target), 'byte_size': size})
        return size
