"""Offline stand-ins for the scrapers plus small HTML/HTTP helpers.

Usage examples:
    from tests.factories import FakeWiki, FakeDododex, FakeSession

    service = DataPopulationService(FakeWiki(), FakeDododex(), sleep=lambda s: None)
    scraper = WikiScraper("https://wiki.test", session=FakeSession({"/wiki/Creatures": html}))
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

import requests

from asa_service.scrapers import Region, ScraperError

WIKI_CREATURES = [
    {
        "name": "Rex", "slug": "rex", "wiki_url": "https://wiki.test/wiki/Rex", "image_url": None,
        "is_tameable": True, "is_rideable": True, "is_breedable": True,
        "taming_method": "knockout", "temperament": "aggressive", "biomes": [],
    },
    {
        "name": "Dodo", "slug": "dodo", "wiki_url": "https://wiki.test/wiki/Dodo", "image_url": None,
        "is_tameable": True, "is_rideable": False, "is_breedable": True,
        "taming_method": "knockout", "temperament": "passive", "biomes": [],
    },
    {
        "name": "Dragon", "slug": "dragon", "wiki_url": "https://wiki.test/wiki/Dragon", "image_url": None,
        "is_tameable": False, "is_rideable": False, "is_breedable": False,
        "taming_method": None, "temperament": "aggressive", "biomes": [],
    },
]

DODODEX_DETAILS = {
    "rex": {
        "slug": "rex",
        "name": "Rex",
        "description": "Apex predator of the island",
        "image_url": "https://dododex.test/rex.png",
        "stats": {
            "health": {"base": 1100.0, "wild": 220.0},
            "melee_damage": {"base": 60.0, "wild": 3.0},
        },
        "taming": {
            "tameable": True,
            "method": "knockout",
            "foods": [
                {"name": "Raw Meat", "effectiveness": 70.0, "quantity": 34, "time": "1h 34min"},
                {"name": "Exceptional Kibble", "effectiveness": 100.0, "quantity": 10, "time": "32min"},
            ],
            "kibble": "Exceptional Kibble",
            "unconscious_time": "3h",
        },
        "spawns": [{"map": "The Island", "rarity": "common"}, {"map": "Atlantis", "rarity": "rare"}],
    },
    "dodo": {
        "slug": "dodo",
        "name": "Dodo",
        "description": "A slow flightless bird",
        "image_url": None,
        "stats": {"health": {"base": 40.0, "wild": 8.0}},
        "taming": {
            "tameable": True,
            "method": "knockout",
            "foods": [{"name": "Mejoberry", "effectiveness": 80.0, "quantity": 9, "time": "8min"}],
            "kibble": "Basic Kibble",
            "unconscious_time": None,
        },
        "spawns": [{"map": "the-island", "rarity": "very common"}],
    },
}

REGIONS = {
    "the-island": [
        Region(name="Snowy Mountains", category="snow", description="Snowy Mountains region on The Island"),
        Region(name="Redwood Forest", category="forest", description="Redwood Forest region on The Island"),
    ],
    "genesis-1": [
        Region(name="Frozen Spires", category="arctic", description="Frozen Spires in the Arctic biome", biome="Arctic"),
    ],
}

CAVES = {
    "The_Island": [
        {"name": "Lava Cave", "map": "The_Island", "type": "lava"},
        {"name": "Artifact of the Hunter Cave", "map": "The_Island", "type": "artifact"},
    ],
}


class FakeWiki:
    def __init__(self, creatures=None, regions=None, caves=None, failing_maps: Iterable[str] = ()):
        self.creatures = WIKI_CREATURES if creatures is None else creatures
        self.regions = REGIONS if regions is None else regions
        self.caves = CAVES if caves is None else caves
        self.failing_maps = set(failing_maps)
        self.region_calls = []

    def fetch_all_creatures(self):
        return [dict(c) for c in self.creatures]

    def get_map_regions(self, map_slug, wiki_page, map_label=None):
        self.region_calls.append(map_slug)
        if map_slug in self.failing_maps:
            raise ScraperError(f"Failed to fetch /wiki/{wiki_page}: 503")
        return list(self.regions.get(map_slug, []))

    def get_cave_data(self, wiki_page):
        return list(self.caves.get(wiki_page, []))


class FakeDododex:
    def __init__(self, details: Optional[Dict] = None, failing: Iterable[str] = ()):
        self.details = DODODEX_DETAILS if details is None else details
        self.failing = set(failing)

    def get_all_creatures(self):
        return [{"name": d["name"], "slug": slug, "image_url": None, "dododex_url": None} for slug, d in self.details.items()]

    def get_creature_details(self, slug):
        if slug in self.failing:
            raise ScraperError(f"Failed to fetch /dinosaur/{slug}: timeout")
        return self.details[slug]


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200, url: str = ""):
        self.text = text
        self.status_code = status_code
        self.url = url

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}")


class FakeSession:
    """Minimal ``requests.Session`` replacement keyed by URL path."""

    def __init__(self, pages: Dict[str, str], base_url: str = "https://wiki.test"):
        self.pages = pages
        self.base_url = base_url
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        if path not in self.pages:
            return FakeResponse("not found", 404, url)
        page = self.pages[path]
        if isinstance(page, Exception):
            raise page
        return FakeResponse(page, 200, url)
