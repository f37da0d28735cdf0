"""Utilities for rendering crawl results in the CLI."""

from __future__ import annotations

import json
from typing import Iterable, List

from catcrawl.scraper.models import Item


def sort_items(items: Iterable[Item]) -> List[Item]:
    """Stable display order: by title, then by link."""
    return sorted(items, key=lambda item: (item.title, item.link or ""))


def render_items(items: Iterable[Item], as_json: bool = False, keep_order: bool = False) -> str:
    """Render *items* as aligned text lines, or as a JSON array.

    Args:
        items: Items to show.  Crawl results are unordered sets, so they are
            sorted unless *keep_order* is set.
        as_json: Emit ``[{"title": ..., "link": ...}, ...]`` instead.
        keep_order: Keep the given order (e.g. document order of one page).

    Returns:
        The rendered string (no trailing newline).
    """
    rows = list(items) if keep_order else sort_items(items)
    if as_json:
        return json.dumps(
            [{"title": item.title, "link": item.link} for item in rows],
            indent=2,
            ensure_ascii=False,
        )

    if not rows:
        return ""
    width = max(len(item.title) for item in rows)
    return "\n".join(f"  {item.title:<{width}}  {item.link or '-'}" for item in rows)
