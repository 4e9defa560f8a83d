"""Pagination discovery service.

Discovery runs in two passes. The anchors of the pagination container are
read from the page and normalized into PaginationLink records (page number
from the label, original position, decomposed query string). Independently,
every same-origin anchor whose URL ends with a site-specific suffix is
collected as a result link.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import parse_qsl, urlsplit

from .base import PageService
from ..models.pagination import PaginationLink, PaginationResult

logger = logging.getLogger(__name__)

DEFAULT_PAGINATION_SELECTOR = "#pagination a"
DEFAULT_LINK_SUFFIX = ".aspx"

_LEADING_INTEGER = re.compile(r'^[+-]?[0-9]+')

COLLECT_PAGINATION_ANCHORS_JS = """
(selector) => Array.from(document.querySelectorAll(selector)).map((anchor) => ({
    text: anchor.textContent,
    href: anchor.href,
}))
"""

COLLECT_DOCUMENT_LINKS_JS = """
() => ({
    origin: window.location.origin,
    hrefs: Array.from(document.querySelectorAll("a")).map((anchor) => anchor.href),
})
"""


def parse_page_label(label: Optional[str]) -> Optional[int]:
    """Parse a link label into a page number.

    Follows JavaScript ``parseInt(label, 10)``: leading whitespace is ignored,
    an optional sign and the leading run of ASCII digits are used, anything after
    them is ignored. Labels without leading digits ("Next", "...") give None.
    """
    match = _LEADING_INTEGER.match((label or "").strip())
    if not match:
        return None
    return int(match.group(0))


def extract_query_params(href: str) -> Optional[Dict[str, str]]:
    """Decompose a URL's query string into a lower-cased key mapping.

    Later duplicates of a key win and blank values are kept. Any URL with a
    scheme decomposes, so ``javascript:`` pager links give an empty mapping.

    Returns:
        Parameter mapping, or None if the href is not an absolute URL
    """
    try:
        parts = urlsplit(href)
    except ValueError:
        return None

    if not parts.scheme:
        return None

    params = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        params[key.lower()] = value
    return params


def build_pagination_links(anchors: Iterable[Dict[str, Any]]) -> List[PaginationLink]:
    """Normalize raw pagination anchors into PaginationLink records.

    Anchors whose label is not a number, whose page number is negative or
    whose href is blank are dropped.
    """
    links = []
    for position, anchor in enumerate(anchors):
        href = anchor.get('href') or ""
        page = parse_page_label(anchor.get('text'))

        if page is None or page < 0 or not href.strip():
            continue

        links.append(PaginationLink(
            page=page,
            href=href,
            position=position,
            query_params=extract_query_params(href),
        ))

    # Positions are ascending already, so this never reorders
    links.sort(key=lambda link: link.position)
    return links


def _origin(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def filter_result_links(origin: str, hrefs: Iterable[str], suffix: str = DEFAULT_LINK_SUFFIX) -> List[str]:
    """Keep unique same-origin hrefs ending with a suffix.

    Args:
        origin: Origin of the current page (scheme://host[:port])
        hrefs: Candidate anchor URLs
        suffix: Required URL ending

    Returns:
        Matching URLs, each listed once
    """
    page_origin = _origin(origin)
    if page_origin is None:
        return []

    unique = {}
    for href in hrefs:
        if not href or not href.endswith(suffix):
            continue
        if _origin(href) != page_origin:
            continue
        unique[href] = None
    return list(unique)


class PaginationService(PageService):
    """Discovers pagination and result links on the current page."""

    name = "pagination"

    async def discover(
        self,
        selector: str = DEFAULT_PAGINATION_SELECTOR,
        link_suffix: str = DEFAULT_LINK_SUFFIX
    ) -> PaginationResult:
        """Discover pagination links and result links.

        Args:
            selector: Selector of the anchors inside the pagination container
            link_suffix: URL ending that identifies result links

        Returns:
            Combined pagination result
        """
        anchors = await self.page.evaluate(COLLECT_PAGINATION_ANCHORS_JS, selector)
        pages = build_pagination_links(anchors or [])

        document_links = await self.page.evaluate(COLLECT_DOCUMENT_LINKS_JS) or {}
        links = filter_result_links(
            document_links.get('origin', ""),
            document_links.get('hrefs', []),
            link_suffix
        )

        result = PaginationResult(links=links, pages=pages)
        self.record(
            f"links discovered ({len(links)} links, {len(pages)} pages)",
            result.to_payload()
        )
        return result
