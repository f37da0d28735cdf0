"""Exception types raised by the fetcher and the crawlers."""

from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for every failure surfaced by catcrawl."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchError(CrawlError):
    """Transport failure or a non-2xx response."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(url, message)
        self.status_code = status_code


class NotFoundError(CrawlError):
    """The server confirmed the page does not exist (404 / 410)."""

    def __init__(self, url: str, status_code: int = 404) -> None:
        super().__init__(url, f"{url} not found (HTTP {status_code})")
        self.status_code = status_code
