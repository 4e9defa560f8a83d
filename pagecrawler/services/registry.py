"""Registry of capability services."""

from enum import Enum

from .base import PageService
from .click import ClickService
from .content import ContentService
from .cookies import CookiesService
from .metrics import MetricsService
from .navigation import NavigationService
from .pagination import PaginationService
from .screenshot import ScreenshotService
from .scroll import ScrollService
from ..errors import ServiceNotFoundError
from ..registry import Registry


class ServiceName(str, Enum):
    """Names of the built-in capability services."""
    NAVIGATION = NavigationService.name
    SCROLL = ScrollService.name
    COOKIES = CookiesService.name
    CLICK = ClickService.name
    METRICS = MetricsService.name
    PAGINATION = PaginationService.name
    SCREENSHOT = ScreenshotService.name
    CONTENT = ContentService.name


service_registry: Registry[PageService] = Registry("service", ServiceNotFoundError)

for _service_class in (
    NavigationService,
    ScrollService,
    CookiesService,
    ClickService,
    MetricsService,
    PaginationService,
    ScreenshotService,
    ContentService,
):
    service_registry.register(_service_class)
