"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from catcrawl.scraper.errors import CrawlError

# A relative URL path such as ``/wiki/Category:Films``.
Page = str

# An opaque CSS selector handed to the document-query layer.
SelectorRule = str


@dataclass(frozen=True)
class Item:
    """One scraped listing entry.

    Equality is structural over both fields; titles are kept exactly as
    rendered, so ``"Title"`` and ``"Title "`` are different items.
    """

    title: str
    link: Optional[str]


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class FetchResult:
    """Outcome of a single non-raising fetch: either items or an error."""

    url: str
    items: List[Item] = field(default_factory=list)
    error: Optional[CrawlError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PageResult:
    """Outcome for one page of a category walk."""

    page: Page
    items: List[Item] = field(default_factory=list)
    error: Optional[CrawlError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
