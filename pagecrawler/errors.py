"""Exceptions raised by the crawl session core.

Only programming and setup errors live here. Errors raised by Playwright
itself (timeouts, navigation failures, missing selectors) are propagated
unmodified to the caller.
"""

from typing import Optional


class PageCrawlerError(Exception):
    """Base error for the crawl session core."""


class MissingInstanceError(PageCrawlerError):
    """Raised when the page or browser is accessed before initialization."""

    def __init__(self, instance: str):
        self.instance = instance
        super().__init__(f"Missing {instance} instance")


class SessionStateError(PageCrawlerError):
    """Raised when a session lifecycle transition is not allowed."""

    def __init__(self, message: str, state: Optional[str] = None):
        self.state = state
        super().__init__(message)


class RegistryLookupError(PageCrawlerError, KeyError):
    """Raised when a registry has no entry for the requested name."""

    kind = "Entry"

    def __init__(self, name: str):
        self.name = name
        self.message = f"{self.kind} '{name}' not found"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ServiceNotFoundError(RegistryLookupError):
    """Raised for an unknown capability service name."""

    kind = "Service"


class ListenerNotFoundError(RegistryLookupError):
    """Raised for an unknown traffic listener name."""

    kind = "Listener"


class ConfigLoadError(PageCrawlerError):
    """Raised when crawl configuration cannot be loaded or validated."""
