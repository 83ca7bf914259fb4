"""Environment-driven settings for the ASA service.

Values come from process environment variables (optionally populated from a
``.env`` file by python-dotenv). ``Settings.from_env`` is the only place that
reads the environment; everything else receives a ``Settings`` instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

TRUTHY = ("1", "true", "TRUE", "True", "yes", "on")

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ASA-Service/1.2; +https://github.com/asa-service/asa-service)"


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default) in TRUTHY


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _database_url_from_parts() -> str:
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "")
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "asa_service")
    auth = quote_plus(user)
    if password:
        auth += ":" + quote_plus(password)
    return f"postgresql+psycopg2://{auth}@{host}:{port}/{name}"


@dataclass
class Settings:
    """Runtime configuration.

    Attributes:
        environment: ``development`` | ``test`` | ``production``.
        database_url: SQLAlchemy URI, or None when the database is skipped.
        skip_database: Serve mock data only, never touch a database.
        skip_data_sync: Do not scrape/populate on an empty database.
        drop_existing_db: Drop all tables before creating the schema.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    database_url: Optional[str] = None
    skip_database: bool = False
    skip_data_sync: bool = False
    drop_existing_db: bool = False
    rate_limit_window_ms: int = 15 * 60 * 1000
    rate_limit_max_requests: int = 1000
    enable_rate_limiting: bool = False
    cors_origin: str = "*"
    log_level: str = "info"
    log_file: str = "logs/app.log"
    log_json: bool = False
    wiki_base_url: str = "https://ark.wiki.gg"
    dododex_base_url: str = "https://www.dododex.com"
    scraper_timeout: int = 30
    scraper_user_agent: str = DEFAULT_USER_AGENT
    default_page_size: int = 20
    max_page_size: int = 100

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def use_mock_data(self) -> bool:
        return self.skip_database or not self.database_url

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Settings":
        # .env never overrides variables already exported in the shell
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        skip_database = _flag("SKIP_DATABASE")
        database_url = None
        if not skip_database:
            database_url = os.getenv("DATABASE_URL") or _database_url_from_parts()
            # Heroku-style scheme is rejected by SQLAlchemy 2.x
            if database_url.startswith("postgres://"):
                database_url = "postgresql://" + database_url[len("postgres://") :]

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int("PORT", 3000),
            environment=os.getenv("APP_ENV") or os.getenv("NODE_ENV", "development"),
            database_url=database_url,
            skip_database=skip_database,
            skip_data_sync=_flag("SKIP_DATA_SYNC"),
            drop_existing_db=_flag("DROP_EXISTING_DB"),
            rate_limit_window_ms=_int("RATE_LIMIT_WINDOW_MS", 15 * 60 * 1000),
            rate_limit_max_requests=_int("RATE_LIMIT_MAX_REQUESTS", 1000),
            enable_rate_limiting=_flag("ENABLE_RATE_LIMITING"),
            cors_origin=os.getenv("CORS_ORIGIN", "*"),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
            log_file=os.getenv("LOG_FILE", "logs/app.log"),
            log_json=_flag("LOG_JSON"),
            wiki_base_url=os.getenv("WIKI_BASE_URL", "https://ark.wiki.gg").rstrip("/"),
            dododex_base_url=os.getenv("DODODEX_BASE_URL", "https://www.dododex.com").rstrip("/"),
            scraper_timeout=_int("SCRAPER_TIMEOUT", 30),
            scraper_user_agent=os.getenv("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT),
        )
