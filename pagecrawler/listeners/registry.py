"""Registry of traffic listeners."""

from enum import Enum

from .base import TrafficListener
from .request_interceptor import RequestInterceptorListener
from .response_interceptor import ResponseInterceptorListener
from ..errors import ListenerNotFoundError
from ..registry import Registry


class ListenerName(str, Enum):
    """Names of the built-in traffic listeners."""
    REQUEST_INTERCEPTOR = RequestInterceptorListener.name
    RESPONSE_INTERCEPTOR = ResponseInterceptorListener.name


listener_registry: Registry[TrafficListener] = Registry("listener", ListenerNotFoundError)

# Attached in this order at session start
listener_registry.register(RequestInterceptorListener)
listener_registry.register(ResponseInterceptorListener)
