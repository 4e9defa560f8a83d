"""Outgoing request interception.

Every request the page issues is routed through this listener, recorded,
and then either blocked or let through untouched depending on its resource
type. Fonts, stylesheets and uncategorized resources are never fetched.
"""

import logging
from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError, Page, Request, Route

from .base import TrafficListener

logger = logging.getLogger(__name__)

ABORTED_RESOURCE_TYPES = frozenset({"font", "stylesheet", "other"})


def should_abort(resource_type: str) -> bool:
    """Whether requests of a resource type are blocked."""
    return resource_type in ABORTED_RESOURCE_TYPES


def describe_initiator(request: Request) -> Dict[str, Any]:
    """Describe what triggered a request.

    Playwright does not expose the DevTools initiator, so this reports the
    navigation flag, the issuing frame and the redirect source instead.
    """
    frame_url: Optional[str]
    try:
        frame_url = request.frame.url
    except PlaywrightError:
        # Service worker requests have no frame
        frame_url = None

    redirected_from = request.redirected_from
    return {
        'is_navigation': request.is_navigation_request(),
        'frame_url': frame_url,
        'redirected_from': redirected_from.url if redirected_from else None,
    }


class RequestInterceptorListener(TrafficListener):
    """Records every outgoing request and blocks unwanted resource types."""

    name = "request_interceptor"

    async def attach(self, page: Page) -> None:
        await page.route("**/*", self._on_route)
        logger.debug("Request interception enabled")

    async def _on_route(self, route: Route) -> None:
        request = route.request
        resource_type = request.resource_type
        aborted = should_abort(resource_type)

        self.record({
            'method': request.method,
            'url': request.url,
            'resource_type': resource_type,
            'headers': request.headers,
            'initiator': describe_initiator(request),
            'aborted': aborted,
        })

        try:
            if aborted:
                await route.abort()
            else:
                await route.continue_()
        except PlaywrightError as e:
            # Page closed or request already handled
            logger.debug(f"Failed to resolve route for {request.url}: {e}")
