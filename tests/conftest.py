"""Shared test fixtures and configuration for pagecrawler tests."""

import sys
from collections import defaultdict
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pagecrawler.models.state import EventLog


class FakeBrowserContext:
    """In-memory stand-in for a Playwright BrowserContext cookie jar."""

    def __init__(self, cookies=None):
        self._cookies = list(cookies or [])

    async def add_cookies(self, cookies):
        for cookie in cookies:
            self._cookies = [
                existing for existing in self._cookies
                if (existing['name'], existing.get('domain'), existing.get('path'))
                != (cookie['name'], cookie.get('domain'), cookie.get('path'))
            ]
            self._cookies.append(dict(cookie))

    async def cookies(self, urls=None):
        return [dict(cookie) for cookie in self._cookies]


class PageEvents:
    """Dispatches events to handlers registered with a mock page's on()."""

    def __init__(self, page):
        self.handlers = defaultdict(list)
        page.on.side_effect = self._on
        page.remove_listener.side_effect = self._remove_listener

    def _on(self, event, handler):
        self.handlers[event].append(handler)

    def _remove_listener(self, event, handler):
        self.handlers[event].remove(handler)

    def emit(self, event, *args):
        for handler in list(self.handlers[event]):
            handler(*args)


@pytest.fixture
def event_log():
    """Fresh event log."""
    return EventLog()


@pytest.fixture
def mock_page():
    """Mock Playwright page."""
    page = AsyncMock()
    page.on = MagicMock()
    page.remove_listener = MagicMock()
    page.url = "https://www.example.com/results.aspx?page=2"
    page.context = MagicMock()
    page.context.cookies = AsyncMock(return_value=[])
    page.context.add_cookies = AsyncMock()
    return page


@pytest.fixture
def sample_cookies():
    """Cookies as reported by Playwright's context.cookies()."""
    return [
        {
            'name': 'session_id',
            'value': 'abc123',
            'domain': 'www.example.com',
            'path': '/',
            'expires': -1,
            'httpOnly': True,
            'secure': True,
            'sameSite': 'Lax',
        },
        {
            'name': 'consent',
            'value': 'accepted',
            'domain': '.example.com',
            'path': '/',
            'expires': 1893456000,
            'httpOnly': False,
            'secure': False,
            'sameSite': 'None',
        },
    ]


@pytest.fixture
def mock_playwright():
    """Patch Playwright startup with mocked browser and page."""
    with patch('pagecrawler.browser.factory.async_playwright') as mock_pw:
        playwright_mock = AsyncMock()
        async_pw_instance = AsyncMock()
        async_pw_instance.start = AsyncMock(return_value=playwright_mock)
        mock_pw.return_value = async_pw_instance

        browser_mock = AsyncMock()
        browser_mock.is_connected = MagicMock(return_value=True)
        playwright_mock.chromium.launch.return_value = browser_mock
        playwright_mock.firefox.launch.return_value = browser_mock
        playwright_mock.webkit.launch.return_value = browser_mock
        playwright_mock.chromium.connect_over_cdp.return_value = browser_mock

        page_mock = AsyncMock()
        page_mock.on = MagicMock()
        page_mock.remove_listener = MagicMock()
        page_mock.url = "https://www.example.com/results.aspx"
        page_mock.context = MagicMock()
        page_mock.context.cookies = AsyncMock(return_value=[])
        page_mock.context.add_cookies = AsyncMock()
        browser_mock.new_page.return_value = page_mock

        yield {
            'async_playwright': mock_pw,
            'playwright': playwright_mock,
            'browser': browser_mock,
            'page': page_mock,
        }


@pytest.fixture
def fake_context():
    """Factory for in-memory browser contexts."""
    return FakeBrowserContext


@pytest.fixture
def page_events(mock_page):
    """Event dispatcher wired to mock_page.on()."""
    return PageEvents(mock_page)
