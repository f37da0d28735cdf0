"""catcrawl — crawl paginated category listings into deduplicated items."""

from catcrawl.crawler import crawl, crawl_pages, crawl_tree, enumerate_pages
from catcrawl.scraper import (
    CrawlError,
    FetchError,
    FetchResult,
    Item,
    NotFoundError,
    PageResult,
    fetch_items,
    try_fetch_items,
)

__all__ = [
    "crawl",
    "crawl_pages",
    "crawl_tree",
    "enumerate_pages",
    "fetch_items",
    "try_fetch_items",
    "Item",
    "FetchResult",
    "PageResult",
    "CrawlError",
    "FetchError",
    "NotFoundError",
]
