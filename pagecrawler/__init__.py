"""Browser session orchestration for scraping a paginated page.

This package drives a single Playwright page through a fixed sequence of
capability services (navigation, cookies, pagination, metrics, screenshot,
content), records all network traffic with long-lived listeners, and
collects everything into one append-only event log.

Main Components:
- Event Log: append-only tagged records shared by the session (models/state.py)
- Capability Services: one unit of browser interaction each (services/)
- Traffic Listeners: request/response recording (listeners/)
- Session Manager: browser, page and log ownership (browser/manager.py)
- Runner: the complete crawl sequence (runner.py)

Usage:
    from pagecrawler import SessionManager, BrowserConfig, ServiceName

    async with SessionManager() as manager:
        await manager.initialize(BrowserConfig(headless=True))
        await manager.get(ServiceName.NAVIGATION).navigate("https://example.com")
        await manager.export_state("output/output.json")
"""

__version__ = "1.0.0"

__all__ = [
    "EventLog",
    "EventRecord",
    "SessionState",
    "PaginationLink",
    "PaginationResult",
    "BrowserConfig",
    "BrowserFactory",
    "SessionManager",
    "ServiceName",
    "ListenerName",
    "CrawlConfig",
    "load_config",
    "run",
]

from .models import EventLog, EventRecord, PaginationLink, PaginationResult, SessionState
from .browser import BrowserConfig, BrowserFactory, SessionManager
from .services import ServiceName
from .listeners import ListenerName
from .config import CrawlConfig, load_config
from .runner import run
