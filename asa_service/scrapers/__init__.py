from .base import BaseScraper, ScraperError  # noqa: F401 re-export
from .cache import TTLCache  # noqa: F401
from .dododex import DododexScraper  # noqa: F401
from .regions import REGION_PARSERS, Region, RegionParser, parser_for  # noqa: F401
from .wiki import WikiScraper  # noqa: F401

__all__ = [
    "BaseScraper",
    "DododexScraper",
    "REGION_PARSERS",
    "Region",
    "RegionParser",
    "ScraperError",
    "TTLCache",
    "WikiScraper",
    "parser_for",
]
