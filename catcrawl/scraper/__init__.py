"""Scraper package — page fetch & selector-based item extraction."""

from catcrawl.scraper.errors import CrawlError, FetchError, NotFoundError
from catcrawl.scraper.extractor import extract_items, find_next_page
from catcrawl.scraper.fetcher import build_url, fetch_items, fetch_page, try_fetch_items
from catcrawl.scraper.models import FetchResult, Item, PageResult, RawPage

__all__ = [
    "build_url",
    "fetch_page",
    "fetch_items",
    "try_fetch_items",
    "extract_items",
    "find_next_page",
    "Item",
    "RawPage",
    "FetchResult",
    "PageResult",
    "CrawlError",
    "FetchError",
    "NotFoundError",
]
