"""Incoming response recording."""

import logging
from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError, Page, Response

from .base import TrafficListener

logger = logging.getLogger(__name__)


class ResponseInterceptorListener(TrafficListener):
    """Records every response together with its decoded body."""

    name = "response_interceptor"

    async def attach(self, page: Page) -> None:
        page.on("response", self._on_response)
        logger.debug("Response listener attached")

    async def _on_response(self, response: Response) -> None:
        self.record({
            'ok': response.ok,
            'status': response.status,
            'status_text': response.status_text,
            'url': response.url,
            'remote_address': await self._remote_address(response),
            'from_cache': response.from_service_worker,
            'headers': response.headers,
            'content': await self._read_body(response),
        })

    @staticmethod
    async def _read_body(response: Response) -> Optional[str]:
        """Decoded response body, or None if it cannot be read."""
        try:
            return await response.text()
        except (PlaywrightError, UnicodeDecodeError) as e:
            # Redirects, aborted requests and closed pages have no body
            logger.debug(f"Response body unavailable for {response.url}: {e}")
            return None

    @staticmethod
    async def _remote_address(response: Response) -> Optional[Dict[str, Any]]:
        try:
            return await response.server_addr()
        except PlaywrightError as e:
            logger.debug(f"Remote address unavailable for {response.url}: {e}")
            return None
