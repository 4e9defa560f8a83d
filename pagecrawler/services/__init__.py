"""Capability services for a crawl session.

Each service wraps the session page and event log and exposes one category
of browser interaction:

- NavigationService: page navigation
- ScrollService: scroll an element until its content stops growing
- CookiesService: cookie replay/recording and consent overlay dismissal
- ClickService: element clicks
- MetricsService: page metadata and performance metrics
- PaginationService: pagination and result link discovery
- ScreenshotService: full-page screenshots
- ContentService: rendered document markup
"""

from .base import PageService
from .click import ClickService
from .content import ContentService
from .cookies import CookiesService
from .metrics import MetricsService
from .navigation import NavigationService, WaitStrategy
from .pagination import PaginationService
from .registry import ServiceName, service_registry
from .screenshot import ScreenshotService
from .scroll import ScrollDirection, ScrollService

__all__ = [
    "PageService",
    "ClickService",
    "ContentService",
    "CookiesService",
    "MetricsService",
    "NavigationService",
    "PaginationService",
    "ScreenshotService",
    "ScrollService",
    "ScrollDirection",
    "WaitStrategy",
    "ServiceName",
    "service_registry",
]
