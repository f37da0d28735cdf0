"""Crawler settings: target site, HTTP client options and pagination rules.

Every field reads a ``CATCRAWL_*`` environment variable and falls back to a
default tuned for English Wikipedia category pages.  A ``.env`` file next to
the package is read at import time; variables already set in the process
environment take precedence over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Project-root .env; process environment wins over file values.
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Remote site
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get("CATCRAWL_BASE_URL", "https://en.wikipedia.org")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "CATCRAWL_USER_AGENT",
            "Mozilla/5.0 (compatible; catcrawl/0.1; +https://github.com/catcrawl)",
        )
    )

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("CATCRAWL_REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Crawler
    # ------------------------------------------------------------------
    page_delay: float = field(
        default_factory=lambda: float(os.environ.get("CATCRAWL_PAGE_DELAY", "0.5"))
    )
    next_page_selector: str = field(
        default_factory=lambda: os.environ.get(
            "CATCRAWL_NEXT_PAGE_SELECTOR", "#mw-pages > a:last-of-type"
        )
    )
    next_page_text: str = field(
        default_factory=lambda: os.environ.get("CATCRAWL_NEXT_PAGE_TEXT", "next page")
    )
    # 0 means no bound on the number of pages walked
    max_pages: int = field(
        default_factory=lambda: int(os.environ.get("CATCRAWL_MAX_PAGES", "0"))
    )


# Shared instance read by the fetcher, walker and CLI.
settings = Settings()
