"""Application state shared by the blueprints.

Each blueprint factory receives the ``AppContext`` for its app instead of
reaching for module globals, so several apps (e.g. a SQL-backed and a mock
test app) can live in one process.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from .config import Settings
from .repositories import MockRepository, Repository
from .scrapers import DododexScraper, TTLCache, WikiScraper
from .scrapers.cache import HOUR
from .services import DataPopulationService, JobQueue


@dataclass
class AppContext:
    settings: Settings
    repository: Repository
    jobs: Optional[JobQueue] = None
    initializer: Optional[object] = None
    database_status: str = "not_configured"
    started_at: float = field(default_factory=time.time)
    wiki_cache: TTLCache = field(default_factory=lambda: TTLCache(24 * HOUR))
    dododex_cache: TTLCache = field(default_factory=lambda: TTLCache(12 * HOUR))

    @property
    def is_mock(self) -> bool:
        return self.repository.is_mock

    def wiki(self) -> WikiScraper:
        return WikiScraper(
            self.settings.wiki_base_url,
            cache=self.wiki_cache,
            timeout=self.settings.scraper_timeout,
            user_agent=self.settings.scraper_user_agent,
        )

    def dododex(self) -> DododexScraper:
        return DododexScraper(
            self.settings.dododex_base_url,
            cache=self.dododex_cache,
            timeout=self.settings.scraper_timeout,
            user_agent=self.settings.scraper_user_agent,
        )

    def population(self) -> DataPopulationService:
        return DataPopulationService(self.wiki(), self.dododex())

    def use_mock(self, reason: str = "fallback") -> None:
        """Serve mock data from now on (database unavailable)."""
        if self.jobs is not None:
            self.jobs.shutdown(timeout=1.0)
        self.repository = MockRepository()
        self.jobs = None
        self.initializer = None
        self.database_status = reason

    def uptime(self) -> float:
        return round(time.time() - self.started_at, 1)
