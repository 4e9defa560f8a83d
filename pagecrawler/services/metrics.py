"""Page metadata and performance metrics service."""

import logging
from typing import Any, Dict, List

from playwright.async_api import Error as PlaywrightError

from .base import PageService

logger = logging.getLogger(__name__)

COLLECT_META_JS = """
() => Array.from(document.getElementsByTagName("meta"))
    .map(({ name, content }) => ({ name, content }))
    .filter(({ name }) => name.length > 0)
"""

NAVIGATION_TIMING_JS = """
() => {
    const navigation = performance.getEntriesByType('navigation')[0];
    return navigation ? {
        dns_lookup: navigation.domainLookupEnd - navigation.domainLookupStart,
        connect_time: navigation.connectEnd - navigation.connectStart,
        request_time: navigation.responseStart - navigation.requestStart,
        response_time: navigation.responseEnd - navigation.responseStart,
        dom_interactive: navigation.domInteractive,
        dom_complete: navigation.domComplete,
        load_event: navigation.loadEventEnd,
        transfer_size: navigation.transferSize,
    } : {};
}
"""


class MetricsService(PageService):
    """Collects page metadata and browser performance metrics."""

    name = "metrics"

    async def get_results(self) -> Dict[str, Any]:
        """Record title, URL, meta tags and performance metrics as one record.

        Returns:
            The recorded ``{metadata, metrics}`` dict
        """
        title = await self.page.title()
        url = self.page.url
        meta = await self.page.evaluate(COLLECT_META_JS) or []

        results = {
            'metadata': {
                'title': title,
                'url': url,
                'meta': [entry for entry in meta if entry.get('name')],
            },
            'metrics': await self._performance_metrics(),
        }

        self.record("extracted metadata", results)
        return results

    async def _performance_metrics(self) -> Dict[str, float]:
        """Read DevTools performance metrics, falling back to navigation timing."""
        try:
            client = await self.page.context.new_cdp_session(self.page)
            try:
                await client.send("Performance.enable")
                response = await client.send("Performance.getMetrics")
            finally:
                await client.detach()
            return self._flatten(response.get('metrics', []))

        except PlaywrightError as e:
            logger.debug(f"DevTools metrics unavailable, using navigation timing: {e}")

        try:
            return await self.page.evaluate(NAVIGATION_TIMING_JS) or {}
        except PlaywrightError as e:
            logger.warning(f"Failed to collect performance metrics: {e}")
            return {}

    @staticmethod
    def _flatten(metrics: List[Dict[str, Any]]) -> Dict[str, float]:
        return {metric['name']: metric['value'] for metric in metrics if 'name' in metric}
