"""Traffic listeners attached to a session page for its whole lifetime."""

from .base import TrafficListener
from .registry import ListenerName, listener_registry
from .request_interceptor import RequestInterceptorListener
from .response_interceptor import ResponseInterceptorListener

__all__ = [
    "TrafficListener",
    "RequestInterceptorListener",
    "ResponseInterceptorListener",
    "ListenerName",
    "listener_registry",
]
