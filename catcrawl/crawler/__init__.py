"""Crawler package — pagination walking and category-level crawls."""

from catcrawl.crawler.category import crawl, crawl_pages, dedupe
from catcrawl.crawler.pagination import enumerate_pages
from catcrawl.crawler.tree import crawl_tree

__all__ = ["enumerate_pages", "crawl", "crawl_pages", "crawl_tree", "dedupe"]
