"""Pagination walker: follows a listing's "next page" link until it disappears."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from catcrawl.config import settings
from catcrawl.scraper.extractor import find_next_page
from catcrawl.scraper.fetcher import build_url, fetch_page, new_client
from catcrawl.scraper.models import Page, RawPage

logger = logging.getLogger(__name__)

PageLoader = Callable[[Page], RawPage]


def _walk(
    start: Page,
    load: PageLoader,
    selector: str,
    marker: str,
    max_pages: int,
) -> Iterator[Page]:
    seen = {start}
    current = start
    while not max_pages or len(seen) < max_pages:
        raw = load(current)
        next_page = find_next_page(raw.html, selector, marker)
        if next_page is None:
            return
        if next_page in seen:
            logger.warning("pagination loops back from %s to %s; stopping", current, next_page)
            return
        seen.add(next_page)
        logger.info("next page after %s: %s", current, next_page)
        yield next_page
        current = next_page
    logger.info("page limit %d reached at %s", max_pages, current)


def enumerate_pages(
    start: Page,
    load: Optional[PageLoader] = None,
    selector: Optional[str] = None,
    marker: Optional[str] = None,
    max_pages: Optional[int] = None,
) -> Iterator[Page]:
    """Lazily yield every page that follows *start* in a paginated listing.

    *start* itself is not yielded.  Each step loads the current page, takes
    the single node matched by the next-page selector and follows its href
    only when the node's text is exactly the marker (``"next page"`` by
    default).  The walk also stops if a link points back to a page already
    seen, or once *max_pages* pages (counting *start*) have been reached;
    ``0`` means no limit.

    Args:
        start: Relative path of the first listing page.
        load: Callable returning the :class:`RawPage` for a relative path.
            Defaults to fetching through a client owned by this walk.
        selector: Overrides ``settings.next_page_selector``.
        marker: Overrides ``settings.next_page_text``.
        max_pages: Overrides ``settings.max_pages``.

    Raises:
        FetchError, NotFoundError: Propagated from *load*.
    """
    selector = settings.next_page_selector if selector is None else selector
    marker = settings.next_page_text if marker is None else marker
    max_pages = settings.max_pages if max_pages is None else max_pages

    if load is not None:
        yield from _walk(start, load, selector, marker, max_pages)
        return

    with new_client() as client:
        yield from _walk(
            start,
            lambda page: fetch_page(build_url(page), client=client),
            selector,
            marker,
            max_pages,
        )
