"""Category crawler — walk every page of a listing and merge its items.

``crawl`` orchestrates the full pipeline for one category:

    enumerate pages → fetch each page once → extract items → dedup

A fixed politeness delay (``settings.page_delay``) separates consecutive page
fetches; there is no wait after the last page.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple, TypeVar

import httpx

from catcrawl.config import settings
from catcrawl.crawler.pagination import enumerate_pages
from catcrawl.scraper.errors import CrawlError
from catcrawl.scraper.extractor import extract_items
from catcrawl.scraper.fetcher import build_url, fetch_page, new_client
from catcrawl.scraper.models import Item, Page, PageResult, RawPage, SelectorRule

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dedupe(items: Iterable[Item]) -> Set[Item]:
    """Collapse items that are equal in every field."""
    return set(items)


def walk_category(
    start: Page,
    extract: Callable[[str], T],
    client: httpx.Client,
    delay: Optional[float] = None,
) -> Iterator[Tuple[Page, Optional[T], Optional[CrawlError]]]:
    """Yield ``(page, extracted, error)`` for each page of the listing at *start*.

    Every page is downloaded once; the pagination walker reads the same
    document to find the next link.  A failed page is yielded with its error
    and ends the walk, since its next link cannot be discovered.
    """
    delay = settings.page_delay if delay is None else delay

    # Only the page currently being processed is kept.
    documents: Dict[Page, RawPage] = {}

    def load(page: Page) -> RawPage:
        if page not in documents:
            raw = fetch_page(build_url(page), client=client)
            documents.clear()
            documents[page] = raw
        return documents[page]

    pages = itertools.chain([start], enumerate_pages(start, load))
    for index, page in enumerate(pages):
        if index:
            time.sleep(delay)
        try:
            raw = load(page)
        except CrawlError as exc:
            logger.warning("page %d (%s) failed: %s", index + 1, page, exc)
            yield page, None, exc
            return
        yield page, extract(raw.html), None


def crawl_pages(
    start: Page,
    rule: SelectorRule,
    delay: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> Iterator[PageResult]:
    """Lazily yield one :class:`PageResult` per page of the category.

    Unlike :func:`crawl` this never raises for a fetch failure: the failing
    page is reported through ``PageResult.error`` and the walk ends there,
    leaving the items of earlier pages with the caller.
    """
    if client is None:
        with new_client() as own_client:
            yield from crawl_pages(start, rule, delay=delay, client=own_client)
        return

    for page, items, error in walk_category(
        start, lambda html: extract_items(html, rule), client, delay=delay
    ):
        if error is not None:
            yield PageResult(page=page, error=error)
        else:
            logger.info("%s: %d item(s)", page, len(items))
            yield PageResult(page=page, items=items)


def crawl(
    start: Page,
    rule: SelectorRule,
    delay: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> Set[Item]:
    """Crawl every page of the category at *start* and return its unique items.

    Args:
        start: Relative path of the first listing page.
        rule: CSS selector for the nodes to collect on each page.
        delay: Seconds to wait between page fetches.  Defaults to
            ``settings.page_delay``.
        client: Optional ``httpx.Client``; a private one is opened otherwise.

    Returns:
        The set of items found across all pages, deduplicated by full
        structural equality.

    Raises:
        FetchError, NotFoundError: On the first page that cannot be fetched.
            No partial result is returned.
    """
    collected: List[Item] = []
    for result in crawl_pages(start, rule, delay=delay, client=client):
        if result.error is not None:
            raise result.error
        collected.extend(result.items)

    unique = dedupe(collected)
    logger.info("%s: %d unique item(s) from %d scraped", start, len(unique), len(collected))
    return unique
