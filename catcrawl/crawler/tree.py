"""Category-tree crawl: a category's items plus those of its sub-categories."""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Set

import httpx

from catcrawl.config import settings
from catcrawl.crawler.category import dedupe, walk_category
from catcrawl.scraper.extractor import extract_items
from catcrawl.scraper.fetcher import new_client
from catcrawl.scraper.models import Item, Page, SelectorRule

logger = logging.getLogger(__name__)


def crawl_tree(
    start: Page,
    parent_rule: SelectorRule,
    child_rule: SelectorRule,
    depth: int = 1,
    delay: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> Set[Item]:
    """Collect *child_rule* items from *start* and its sub-categories.

    Sub-categories are the links matched by *parent_rule*.  They are visited
    breadth-first down to *depth* levels below *start* (``0`` crawls *start*
    alone), each category at most once.  Every category is walked across all
    of its pages, and the politeness delay also separates consecutive
    categories.

    Raises:
        FetchError, NotFoundError: On the first page that cannot be fetched.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if client is None:
        with new_client() as own_client:
            return crawl_tree(start, parent_rule, child_rule, depth=depth, delay=delay, client=own_client)

    delay = settings.page_delay if delay is None else delay

    def extract(html: str):
        return extract_items(html, child_rule), extract_items(html, parent_rule)

    visited = {start}
    frontier: List[Page] = [start]
    collected: List[Item] = []
    first = True

    for level in range(depth + 1):
        next_frontier: List[Page] = []
        for category in frontier:
            if not first:
                time.sleep(delay)
            first = False

            logger.info("category %s (level %d)", category, level)
            for _page, extracted, error in walk_category(category, extract, client, delay=delay):
                if error is not None:
                    raise error
                children, parents = extracted
                collected.extend(children)
                if level == depth:
                    continue
                for sub in parents:
                    if sub.link and sub.link not in visited:
                        visited.add(sub.link)
                        next_frontier.append(sub.link)
        frontier = next_frontier

    return dedupe(collected)
