"""catcrawl CLI — entry-point for crawling category listings.

Usage:
    python cli/main.py --help

Commands:
    pages   → list every page of a paginated category
    crawl   → collect the unique items of one category
    tree    → collect items from a category and its sub-categories
    items   → scrape the items of a single page
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from catcrawl.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import List, Optional

import typer

from catcrawl.config import settings
from catcrawl.crawler import crawl, crawl_pages, crawl_tree, dedupe, enumerate_pages
from catcrawl.scraper import CrawlError, Item, build_url, fetch_items
from cli.rendering import render_items

app = typer.Typer(
    name="catcrawl",
    help="Crawl paginated category listings.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every page visited."),
) -> None:
    """Crawl paginated category listings."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(prefix: str, exc: CrawlError) -> None:
    typer.echo(f"[{prefix}] ❌ Error: {exc}")
    raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
@app.command("pages")
def pages(
    start: str = typer.Argument(..., help="Relative path of the first listing page."),
) -> None:
    """Print the first page and every page reached through "next page" links."""
    typer.echo(start)
    try:
        for page in enumerate_pages(start):
            typer.echo(page)
    except CrawlError as exc:
        _fail("pages", exc)


# ---------------------------------------------------------------------------
# Category crawl
# ---------------------------------------------------------------------------
@app.command("crawl")
def crawl_cmd(
    start: str = typer.Argument(..., help="Relative path of the first listing page."),
    rule: str = typer.Option(..., "--rule", help="CSS selector for the items to collect."),
    as_json: bool = typer.Option(False, "--json", help="Print items as JSON."),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="Report a failed page and keep the items found before it."
    ),
    delay: Optional[float] = typer.Option(None, help="Seconds between page fetches."),
) -> None:
    """Crawl every page of a category and print its unique items."""
    if not keep_going:
        try:
            items = crawl(start, rule, delay=delay)
        except CrawlError as exc:
            _fail("crawl", exc)
        if not as_json:
            typer.echo(f"[crawl] {len(items)} unique item(s) from {start!r}")
        typer.echo(render_items(items, as_json=as_json))
        return

    collected: List[Item] = []
    failed = None
    for result in crawl_pages(start, rule, delay=delay):
        if not result.ok:
            failed = result
            break
        collected.extend(result.items)
        if not as_json:
            typer.echo(f"[crawl] {result.page}: {len(result.items)} item(s)")

    items = dedupe(collected)
    if not as_json:
        typer.echo(f"[crawl] {len(items)} unique item(s) from {start!r}")
    typer.echo(render_items(items, as_json=as_json))
    if failed is not None:
        typer.echo(f"[crawl] ⚠️ stopped at {failed.page}: {failed.error}")
        raise typer.Exit(code=1)


@app.command("tree")
def tree_cmd(
    start: str = typer.Argument(..., help="Relative path of the root category."),
    parent_rule: str = typer.Option(..., "--parent-rule", help="CSS selector for sub-category links."),
    child_rule: str = typer.Option(..., "--child-rule", help="CSS selector for terminal item links."),
    depth: int = typer.Option(1, min=0, help="How many sub-category levels to descend."),
    as_json: bool = typer.Option(False, "--json", help="Print items as JSON."),
    delay: Optional[float] = typer.Option(None, help="Seconds between page fetches."),
) -> None:
    """Crawl a category and its sub-categories and print the unique items."""
    try:
        items = crawl_tree(start, parent_rule, child_rule, depth=depth, delay=delay)
    except CrawlError as exc:
        _fail("tree", exc)
    if not as_json:
        typer.echo(f"[tree] {len(items)} unique item(s) under {start!r} (depth={depth})")
    typer.echo(render_items(items, as_json=as_json))


# ---------------------------------------------------------------------------
# Single page
# ---------------------------------------------------------------------------
@app.command("items")
def items_cmd(
    path: str = typer.Argument(..., help="Relative path or absolute URL of the page."),
    rule: str = typer.Option(..., "--rule", help="CSS selector for the items to collect."),
    as_json: bool = typer.Option(False, "--json", help="Print items as JSON."),
) -> None:
    """Scrape the items of a single page, in document order."""
    url = build_url(path)
    try:
        items = fetch_items(url, rule)
    except CrawlError as exc:
        _fail("items", exc)
    if not as_json:
        typer.echo(f"[items] {len(items)} item(s) on {url}")
    typer.echo(render_items(items, as_json=as_json, keep_order=True))


@app.command("config")
def config_cmd() -> None:
    """Show the effective crawler settings."""
    typer.echo(f"base_url           : {settings.base_url}")
    typer.echo(f"page_delay         : {settings.page_delay}")
    typer.echo(f"request_timeout    : {settings.request_timeout}")
    typer.echo(f"next_page_selector : {settings.next_page_selector}")
    typer.echo(f"next_page_text     : {settings.next_page_text!r}")
    typer.echo(f"max_pages          : {settings.max_pages or 'unbounded'}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
