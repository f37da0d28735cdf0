"""HTTP fetcher: one GET per call, HTTP failures mapped to catcrawl errors."""

from __future__ import annotations

import logging
import re
from typing import List, Optional
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from catcrawl.config import settings
from catcrawl.scraper.errors import CrawlError, FetchError, NotFoundError
from catcrawl.scraper.extractor import extract_items
from catcrawl.scraper.models import FetchResult, Item, RawPage, SelectorRule

logger = logging.getLogger(__name__)

# Characters left untouched in the path; ``%`` stays so existing escapes survive.
_PATH_SAFE = "/:@!$&'()*+,;=%~"
_QUERY_SAFE = _PATH_SAFE + "?"

# A ``%`` that does not start a ``%XX`` escape.
_LONE_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

_NOT_FOUND_CODES = (404, 410)


def build_url(path: str, base_url: Optional[str] = None) -> str:
    """Join *path* onto the site root and percent-encode it.

    Absolute URLs are kept as they are apart from encoding.  Only the path,
    query and fragment are encoded: spaces become ``%20``, non-ASCII
    characters are UTF-8 percent-encoded and a ``%`` that is not already an
    escape becomes ``%25``.  The host is left for httpx to IDNA-encode.
    """
    split = urlsplit(path)
    if split.scheme and split.netloc:
        url = path
    else:
        root = (base_url or settings.base_url).rstrip("/")
        url = f"{root}/{path.lstrip('/')}"

    scheme, netloc, url_path, query, fragment = urlsplit(url)
    return urlunsplit((
        scheme,
        netloc,
        _encode(url_path, _PATH_SAFE),
        _encode(query, _QUERY_SAFE),
        _encode(fragment, _QUERY_SAFE),
    ))


def _encode(part: str, safe: str) -> str:
    return quote(_LONE_PERCENT.sub("%25", part), safe=safe)


def new_client() -> httpx.Client:
    """Return an ``httpx.Client`` configured from :data:`settings`."""
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


def _get(client: httpx.Client, url: str) -> RawPage:
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        if status in _NOT_FOUND_CODES:
            raise NotFoundError(url, status) from exc
        raise FetchError(url, f"{url} returned HTTP {status}", status_code=status) from exc
    except httpx.HTTPError as exc:
        raise FetchError(url, f"{url} could not be fetched: {exc}") from exc

    logger.debug("fetched %s (HTTP %d, %d bytes)", url, response.status_code, len(response.content))
    return RawPage(url=url, html=response.text, status_code=response.status_code)


def fetch_page(url: str, client: Optional[httpx.Client] = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    When *client* is omitted a short-lived client is opened for this one
    request.  Nothing is retried.

    Raises:
        NotFoundError: If the server answers 404 or 410.
        FetchError: On any other non-2xx status or a transport failure.
    """
    if client is not None:
        return _get(client, url)
    with new_client() as own_client:
        return _get(own_client, url)


def fetch_items(url: str, rule: SelectorRule, client: Optional[httpx.Client] = None) -> List[Item]:
    """Download *url* once and return the items matched by *rule*.

    Raises:
        NotFoundError: If the page is confirmed absent.
        FetchError: On any other fetch failure.
    """
    raw = fetch_page(url, client=client)
    return extract_items(raw.html, rule)


def try_fetch_items(url: str, rule: SelectorRule, client: Optional[httpx.Client] = None) -> FetchResult:
    """Like :func:`fetch_items` but returns the failure instead of raising it."""
    try:
        items = fetch_items(url, rule, client=client)
    except CrawlError as exc:
        logger.warning("fetch of %s failed: %s", url, exc)
        return FetchResult(url=url, error=exc)
    return FetchResult(url=url, items=items)
