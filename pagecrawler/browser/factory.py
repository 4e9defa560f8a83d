"""Browser factory for launching or connecting to a Playwright browser.

This module provides the BrowserFactory class that owns the Playwright
driver and the browser connection. A browser is either launched locally or
reached over the Chrome DevTools Protocol at a remote endpoint (for example a
browserless container); when both are configured the remote endpoint wins.
"""

import logging
from typing import Any, Dict, Optional

from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    async_playwright,
)

logger = logging.getLogger(__name__)


class BrowserEngineType:
    """Supported browser engine types."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class BrowserConfig:
    """Configuration for browser launch/connect and page setup."""

    def __init__(
        self,
        remote_endpoint: Optional[str] = None,
        executable_path: Optional[str] = None,
        engine: str = BrowserEngineType.CHROMIUM,
        headless: bool = True,
        slow_mo: int = 0,
        viewport: Optional[Dict[str, int]] = None,
        user_agent: Optional[str] = None,
        extra_headers: Optional[Dict[str, str]] = None,
        ignore_https_errors: bool = False,
        locale: Optional[str] = None,
        **kwargs
    ):
        """Initialize browser configuration.

        Args:
            remote_endpoint: CDP endpoint of an already running browser
            executable_path: Local browser binary (only used when launching)
            engine: Browser engine to launch (chromium, firefox, webkit)
            headless: Run launched browser in headless mode
            slow_mo: Slow down operations by specified milliseconds
            viewport: Viewport size dict with 'width' and 'height'
            user_agent: Custom User-Agent string
            extra_headers: Additional HTTP headers for all requests
            ignore_https_errors: Ignore SSL/TLS certificate errors
            locale: Locale for the page context
        """
        self.remote_endpoint = remote_endpoint
        self.executable_path = executable_path
        self.engine = engine
        self.headless = headless
        self.slow_mo = slow_mo
        self.viewport = viewport or {'width': 1920, 'height': 1080}
        self.user_agent = user_agent
        self.extra_headers = extra_headers or {}
        self.ignore_https_errors = ignore_https_errors
        self.locale = locale
        self.extra_options = kwargs

    @property
    def connects_remotely(self) -> bool:
        """Whether the session connects instead of launching."""
        return bool(self.remote_endpoint)

    def to_launch_options(self) -> Dict[str, Any]:
        """Convert to Playwright browser launch options."""
        options = {
            'headless': self.headless,
            'slow_mo': self.slow_mo,
        }

        if self.executable_path:
            options['executable_path'] = self.executable_path

        options.update(self.extra_options)

        return options

    def to_connect_options(self) -> Dict[str, Any]:
        """Convert to Playwright connect_over_cdp options."""
        options = {'endpoint_url': self.remote_endpoint}

        if self.slow_mo:
            options['slow_mo'] = self.slow_mo

        return options

    def to_context_options(self) -> Dict[str, Any]:
        """Convert to Playwright page/context options."""
        options = {}

        if self.viewport:
            options['viewport'] = self.viewport

        if self.user_agent:
            options['user_agent'] = self.user_agent

        if self.extra_headers:
            options['extra_http_headers'] = self.extra_headers

        if self.ignore_https_errors:
            options['ignore_https_errors'] = True

        if self.locale:
            options['locale'] = self.locale

        return options

    def __repr__(self) -> str:
        target = f"remote={self.remote_endpoint}" if self.connects_remotely else f"engine={self.engine}"
        return f"BrowserConfig({target}, headless={self.headless})"


class BrowserFactory:
    """Factory owning the Playwright driver and one browser connection."""

    def __init__(self, config: BrowserConfig):
        """Initialize browser factory with configuration.

        Args:
            config: Browser configuration object
        """
        self.config = config
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    async def start(self) -> Browser:
        """Start Playwright and connect to or launch the browser.

        Returns:
            Connected browser

        Raises:
            Exception: Any Playwright error raised while starting
        """
        if self.browser is not None:
            logger.warning("Browser factory already started")
            return self.browser

        try:
            self.playwright = await async_playwright().start()

            if self.config.connects_remotely:
                # CDP connections are only available for Chromium
                logger.info(f"Connecting to remote browser at {self.config.remote_endpoint}")
                self.browser = await self.playwright.chromium.connect_over_cdp(
                    **self.config.to_connect_options()
                )
            else:
                browser_type = self._select_browser_type()
                logger.info(
                    f"Launching {self.config.engine} browser "
                    f"(headless={self.config.headless}, executable={self.config.executable_path})"
                )
                self.browser = await browser_type.launch(**self.config.to_launch_options())

            logger.info("Browser ready")
            return self.browser

        except Exception as e:
            logger.error(f"Failed to start browser: {e}")
            await self.stop()
            raise

    def _select_browser_type(self):
        if self.config.engine == BrowserEngineType.FIREFOX:
            return self.playwright.firefox
        if self.config.engine == BrowserEngineType.WEBKIT:
            return self.playwright.webkit
        return self.playwright.chromium

    async def new_page(self) -> Page:
        """Open a page with the configured context options.

        Raises:
            RuntimeError: If browser factory not started
        """
        if not self.browser:
            raise RuntimeError("Browser factory not started. Call start() first.")

        page = await self.browser.new_page(**self.config.to_context_options())
        logger.debug("Page opened")
        return page

    async def stop(self) -> None:
        """Close the browser connection and stop Playwright.

        Playwright is stopped even if closing the browser fails.
        """
        try:
            if self.browser:
                await self.browser.close()
        finally:
            self.browser = None
            if self.playwright:
                await self.playwright.stop()
                self.playwright = None

        logger.info("Browser factory stopped")

    @property
    def is_running(self) -> bool:
        """Check if the browser is connected."""
        if self.browser is None:
            return False
        return self.browser.is_connected()

    def __repr__(self) -> str:
        return f"BrowserFactory(config={self.config!r}, running={self.is_running})"
