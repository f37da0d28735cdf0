"""Selector-driven extraction of listing items and "next page" links."""

from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup

from catcrawl.scraper.models import Item, Page, SelectorRule


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_items(html: str, rule: SelectorRule) -> List[Item]:
    """Return one :class:`Item` per node matched by *rule*, in document order.

    The rule is evaluated once; the visible text and the ``href`` attribute
    are both read from that single node list, so ``items[i].title`` and
    ``items[i].link`` always come from the same element.  A rule that matches
    nothing yields an empty list.
    """
    nodes = _parse(html).select(rule)
    titles = [node.get_text() for node in nodes]
    links = [node.get("href") for node in nodes]
    return [Item(title=title, link=link) for title, link in zip(titles, links)]


def find_next_page(html: str, selector: str, marker: str) -> Optional[Page]:
    """Return the href of the "next page" node, or ``None`` if there is none.

    Only the first node matched by *selector* is considered, and its visible
    text must equal *marker* exactly (case-sensitive).
    """
    node = _parse(html).select_one(selector)
    if node is None or node.get_text() != marker:
        return None
    return node.get("href") or None
