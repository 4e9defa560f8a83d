"""Browser lifecycle: launch/connect factory and the session manager."""

from .factory import BrowserConfig, BrowserEngineType, BrowserFactory
from .manager import SessionManager

__all__ = [
    "BrowserConfig",
    "BrowserEngineType",
    "BrowserFactory",
    "SessionManager",
]
