"""Crawl runner performing one complete session.

``run`` drives the capability services in a fixed order against a single
page and returns the session's event log. Errors from fatal steps
(navigation, missing instances, unknown service names) propagate to the
caller; the browser is closed either way.
"""

import logging
from typing import Optional

from .browser.manager import SessionManager
from .config import CrawlConfig
from .listeners.registry import ListenerName
from .models.state import EventLog, SessionState
from .services.navigation import WaitStrategy
from .services.registry import ServiceName

logger = logging.getLogger(__name__)


async def run(config: CrawlConfig, manager: Optional[SessionManager] = None) -> EventLog:
    """Crawl the configured page and export the event log.

    Steps: replay stored cookies, navigate, dismiss the consent overlay,
    discover pagination, collect metrics, record cookies, screenshot, capture
    content, export the snapshot.

    Args:
        config: Crawl configuration
        manager: Session manager to use (a new one by default)

    Returns:
        The session event log
    """
    manager = manager or SessionManager()

    logger.info(f"Starting crawl of {config.target_url}")
    await manager.initialize(config.browser.to_browser_config())

    try:
        navigation = manager.get(ServiceName.NAVIGATION)
        cookies = manager.get(ServiceName.COOKIES)

        stored_cookies = await cookies.load_from_storage(config.snapshot_path)
        await cookies.set_cookies(stored_cookies)

        await navigation.navigate(
            config.target_url,
            {'wait_until': WaitStrategy.NETWORKIDLE, 'timeout': config.navigation_timeout_ms}
        )
        await cookies.close(config.consent_element_id)

        await manager.get(ServiceName.PAGINATION).discover(
            config.pagination_selector,
            config.link_suffix
        )
        await manager.get(ServiceName.METRICS).get_results()

        # Record the cookies for the next run
        await cookies.get_cookies()

        await manager.get(ServiceName.SCREENSHOT).screenshot(config.screenshot_path)
        await manager.get(ServiceName.CONTENT).get_content()

        await manager.export_state(config.snapshot_path)

    finally:
        if manager.state is SessionState.INITIALIZED:
            await manager.close()

    requests = manager.event_log.by_source(ListenerName.REQUEST_INTERCEPTOR.value)
    responses = manager.event_log.by_source(ListenerName.RESPONSE_INTERCEPTOR.value)
    logger.info(
        f"Crawl finished with {len(manager.event_log)} records "
        f"({len(requests)} requests, {len(responses)} responses)"
    )
    return manager.event_log
