"""Shared HTTP fetching for the HTML scrapers.

Pages are fetched with a ``requests.Session`` carrying a browser-like
User-Agent and cached by absolute URL. There is no retry: an HTTP or network
error propagates to the caller, which decides whether to skip the item.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from ..config import DEFAULT_USER_AGENT
from ..logging_utils import get_logger
from .cache import TTLCache

log = get_logger("asa_service.scrapers")


class ScraperError(RuntimeError):
    """Raised when a page cannot be fetched or does not look like the expected page."""


class BaseScraper:
    default_ttl = 12 * 60 * 60

    def __init__(
        self,
        base_url: str,
        cache: Optional[TTLCache] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else TTLCache(self.default_ttl)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            }
        )

    def absolute_url(self, href: Optional[str]) -> Optional[str]:
        if not href:
            return None
        if href.startswith("//"):
            return "https:" + href
        return urljoin(self.base_url + "/", href)

    def fetch(self, path_or_url: str) -> str:
        """Return page HTML, from cache when fresh."""
        url = path_or_url if path_or_url.startswith("http") else self.absolute_url(path_or_url)
        cached = self.cache.get(url)
        if cached is not None:
            log.debug(event="scrape_cache_hit", url=url)
            return cached
        log.info(event="scrape_fetch", url=url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            log.warn(event="scrape_fetch_failed", url=url, error=str(exc))
            raise ScraperError(f"Failed to fetch {url}: {exc}") from exc
        html = resp.text
        self.cache.set(url, html)
        return html

    def soup(self, path_or_url: str) -> BeautifulSoup:
        return BeautifulSoup(self.fetch(path_or_url), "html.parser")
