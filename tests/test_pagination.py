"""Tests for the pagination walker.

Most tests drive ``enumerate_pages`` with an in-memory loader built from a
dict of ``path -> html``; the network path is covered with ``respx``.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from catcrawl.crawler.pagination import enumerate_pages
from catcrawl.scraper.errors import FetchError, NotFoundError
from catcrawl.scraper.models import RawPage


def _listing(next_href: str | None = None, next_text: str = "next page", prev_href: str | None = None) -> str:
    nav = ""
    if prev_href:
        nav += f'(<a href="{prev_href}">previous page</a>) '
    if next_href:
        nav += f'(<a href="{next_href}">{next_text}</a>)'
    return (
        "<html><body>"
        f'<div id="mw-pages">{nav}<ul><li><a href="/wiki/X">X</a></li></ul>{nav}</div>'
        "</body></html>"
    )


def _loader(site: dict[str, str], calls: list[str] | None = None):
    def load(page: str) -> RawPage:
        if calls is not None:
            calls.append(page)
        return RawPage(url=page, html=site[page], status_code=200)

    return load


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setattr("catcrawl.config.settings.base_url", "https://wiki.test")
    monkeypatch.setattr("catcrawl.config.settings.next_page_selector", "#mw-pages > a:last-of-type")
    monkeypatch.setattr("catcrawl.config.settings.next_page_text", "next page")
    monkeypatch.setattr("catcrawl.config.settings.max_pages", 0)


class TestEnumeratePages:
    def test_two_page_category(self) -> None:
        site = {"/c/1": _listing("/c/2"), "/c/2": _listing(prev_href="/c/1")}
        assert list(enumerate_pages("/c/1", _loader(site))) == ["/c/2"]

    def test_single_page_category_yields_nothing(self) -> None:
        site = {"/c/1": _listing()}
        assert list(enumerate_pages("/c/1", _loader(site))) == []

    def test_follows_chain_in_order(self) -> None:
        site = {
            "/c/1": _listing("/c/2"),
            "/c/2": _listing("/c/3", prev_href="/c/1"),
            "/c/3": _listing("/c/4", prev_href="/c/2"),
            "/c/4": _listing(prev_href="/c/3"),
        }
        assert list(enumerate_pages("/c/1", _loader(site))) == ["/c/2", "/c/3", "/c/4"]

    def test_different_case_marker_ends_walk(self) -> None:
        site = {"/c/1": _listing("/c/2", next_text="Next Page"), "/c/2": _listing()}
        assert list(enumerate_pages("/c/1", _loader(site))) == []

    def test_is_lazy(self) -> None:
        calls: list[str] = []
        site = {"/c/1": _listing("/c/2"), "/c/2": _listing("/c/3"), "/c/3": _listing()}
        pages = enumerate_pages("/c/1", _loader(site, calls))

        assert calls == []
        assert next(pages) == "/c/2"
        assert calls == ["/c/1"]

    def test_idempotent_on_unchanged_fixture(self) -> None:
        site = {
            "/c/1": _listing("/c/2"),
            "/c/2": _listing("/c/3"),
            "/c/3": _listing(),
        }
        first = list(enumerate_pages("/c/1", _loader(site)))
        second = list(enumerate_pages("/c/1", _loader(site)))
        assert first == second == ["/c/2", "/c/3"]

    def test_cycle_stops_before_revisiting(self) -> None:
        calls: list[str] = []
        site = {"/c/1": _listing("/c/2"), "/c/2": _listing("/c/1")}
        assert list(enumerate_pages("/c/1", _loader(site, calls))) == ["/c/2"]
        assert calls == ["/c/1", "/c/2"]

    def test_max_pages_counts_start(self) -> None:
        site = {
            "/c/1": _listing("/c/2"),
            "/c/2": _listing("/c/3"),
            "/c/3": _listing(),
        }
        assert list(enumerate_pages("/c/1", _loader(site), max_pages=2)) == ["/c/2"]

    def test_custom_selector_and_marker(self) -> None:
        site = {
            "/p/1": '<nav><a class="nxt" href="/p/2">suivant</a></nav>',
            "/p/2": "<nav></nav>",
        }
        pages = enumerate_pages("/p/1", _loader(site), selector="a.nxt", marker="suivant")
        assert list(pages) == ["/p/2"]

    def test_explicit_empty_marker_is_used_as_given(self) -> None:
        site = {"/c/1": '<div id="mw-pages"><a href="/c/2"></a></div>', "/c/2": _listing()}
        assert list(enumerate_pages("/c/1", _loader(site), marker="")) == ["/c/2"]

    def test_none_overrides_fall_back_to_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("catcrawl.config.settings.next_page_selector", "a.nxt")
        monkeypatch.setattr("catcrawl.config.settings.next_page_text", "more")
        site = {"/c/1": '<a class="nxt" href="/c/2">more</a>', "/c/2": "<p></p>"}
        pages = enumerate_pages("/c/1", _loader(site), selector=None, marker=None)
        assert list(pages) == ["/c/2"]

    def test_loader_error_propagates(self) -> None:
        def load(page: str) -> RawPage:
            raise NotFoundError(page)

        with pytest.raises(NotFoundError):
            list(enumerate_pages("/c/1", load))


class TestEnumeratePagesOverHttp:
    def test_fetches_through_httpx(self) -> None:
        with respx.mock:
            first = respx.get("https://wiki.test/wiki/Category:Films").mock(
                return_value=httpx.Response(200, text=_listing("/wiki/Category:Films_2"))
            )
            second = respx.get("https://wiki.test/wiki/Category:Films_2").mock(
                return_value=httpx.Response(200, text=_listing(prev_href="/wiki/Category:Films"))
            )
            pages = list(enumerate_pages("/wiki/Category:Films"))

        assert pages == ["/wiki/Category:Films_2"]
        assert first.call_count == 1
        assert second.call_count == 1

    def test_transport_error_propagates(self) -> None:
        with respx.mock:
            respx.get("https://wiki.test/wiki/Category:Films").mock(
                return_value=httpx.Response(200, text=_listing("/wiki/Category:Films_2"))
            )
            respx.get("https://wiki.test/wiki/Category:Films_2").mock(
                side_effect=httpx.ConnectError("refused")
            )
            pages = enumerate_pages("/wiki/Category:Films")
            assert next(pages) == "/wiki/Category:Films_2"
            with pytest.raises(FetchError):
                next(pages)
