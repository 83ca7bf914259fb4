"""ARK wiki (ark.wiki.gg) scraper.

Extracts the creature catalogue, map regions and cave listings. Region
layout differs per map; see ``asa_service.scrapers.regions`` for the parser
registry.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from .base import BaseScraper, ScraperError, log
from .cache import HOUR
from .regions import Region, categorize_region, parser_for

CREATURE_CATEGORIES = [
    "Land_Creatures",
    "Flying_Creatures",
    "Aquatic_Creatures",
    "Boss_Creatures",
    "Event_Creatures",
]

CATEGORY_BIOMES = {
    "Flying_Creatures": ["mountains", "cliffs", "sky"],
    "Aquatic_Creatures": ["ocean", "rivers", "lakes"],
    "Land_Creatures": ["forest", "plains", "jungle"],
}

NON_CREATURE_TERMS = (
    "category",
    "template",
    "file:",
    "special:",
    "help:",
    "user:",
    "talk:",
    "mod:",
    "expansion",
    "dlc",
    "map",
    "region",
    "cave",
    "artifact",
    "item",
    "structure",
    "weapon",
    "armor",
    "saddle",
)

AGGRESSIVE_HINTS = ("alpha", "boss", "rex", "giga", "carno", "raptor", "spino")
PASSIVE_HINTS = ("dodo", "parasaur", "trike", "bronto", "diplo")


def create_slug(name: str) -> str:
    slug = re.sub(r"[^a-z0-9\s-]", "", (name or "").lower())
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def determine_taming_method(text: str) -> str:
    text = (text or "").lower()
    if "passive" in text:
        return "passive"
    if "knockout" in text or "yes" in text:
        return "knockout"
    if "breeding" in text:
        return "breeding"
    if "special" in text:
        return "special"
    if "no" in text or "untameable" in text:
        return "untameable"
    return "knockout"


def determine_temperament(name: str) -> str:
    lowered = (name or "").lower()
    if any(h in lowered for h in AGGRESSIVE_HINTS):
        return "aggressive"
    if any(h in lowered for h in PASSIVE_HINTS):
        return "passive"
    return "neutral"


def determine_cave_type(name: str) -> str:
    lowered = (name or "").lower()
    if "artifact" in lowered:
        return "artifact"
    if "supply" in lowered:
        return "supply"
    if "ice" in lowered or "snow" in lowered:
        return "ice"
    if "lava" in lowered or "magma" in lowered:
        return "lava"
    if "underwater" in lowered or "water" in lowered:
        return "underwater"
    if "tek" in lowered:
        return "tek"
    return "standard"


def is_creature_page(name: str, href: str) -> bool:
    lowered_name, lowered_href = (name or "").lower(), (href or "").lower()
    if any(t in lowered_name or t in lowered_href for t in NON_CREATURE_TERMS):
        return False
    return 2 < len(name or "") < 50


class WikiScraper(BaseScraper):
    default_ttl = 24 * HOUR

    # -- creatures ---------------------------------------------------------
    def fetch_all_creatures(self) -> List[Dict]:
        """Creature catalogue from the main table plus category pages, unique by slug.

        Each source fails independently; an unreachable page contributes nothing.
        """
        creatures: List[Dict] = []
        try:
            creatures.extend(self.fetch_creatures_list())
        except ScraperError as exc:
            log.warn(event="wiki_creature_list_failed", error=str(exc))
        for category in CREATURE_CATEGORIES:
            try:
                creatures.extend(self.fetch_creature_category(category))
            except ScraperError as exc:
                log.warn(event="wiki_category_failed", category=category, error=str(exc))

        unique: Dict[str, Dict] = {}
        for creature in creatures:
            if creature["slug"] and creature["slug"] not in unique:
                unique[creature["slug"]] = creature
        return list(unique.values())

    def fetch_creatures_list(self) -> List[Dict]:
        soup = self.soup("/wiki/Creatures")
        creatures = []
        for row in soup.select("table.wikitable tr"):
            cells = row.find_all("td")
            if len(cells) < 4:
                continue
            name_cell, image_cell, taming_cell, riding_cell = cells[:4]
            link = name_cell.find("a")
            name = (link.get_text(" ", strip=True) if link else "") or name_cell.get_text(" ", strip=True)
            if not name or name == "Name":
                continue
            img = image_cell.find("img")
            taming_text = taming_cell.get_text(" ", strip=True).lower()
            riding_text = riding_cell.get_text(" ", strip=True).lower()
            creatures.append(
                {
                    "name": name,
                    "slug": create_slug(name),
                    "wiki_url": self.absolute_url(link.get("href") if link else None),
                    "image_url": self.absolute_url(img.get("src") if img else None),
                    "is_tameable": "yes" in taming_text or "passive" in taming_text,
                    "is_rideable": "yes" in riding_text,
                    "is_breedable": None,
                    "taming_method": determine_taming_method(taming_text),
                    "temperament": determine_temperament(name),
                    "biomes": [],
                }
            )
        return creatures

    def fetch_creature_category(self, category: str) -> List[Dict]:
        soup = self.soup(f"/wiki/Category:{category}")
        is_boss = "Boss" in category
        is_event = "Event" in category
        creatures = []
        for link in soup.select(".mw-category-group ul li a"):
            name = link.get_text(" ", strip=True)
            href = link.get("href")
            if not name or not href or "Category:" in name or not is_creature_page(name, href):
                continue
            creatures.append(
                {
                    "name": name,
                    "slug": create_slug(name),
                    "wiki_url": self.absolute_url(href),
                    "image_url": None,
                    "is_tameable": not is_boss,
                    "is_rideable": False,
                    "is_breedable": not is_boss and not is_event,
                    "taming_method": None,
                    "temperament": determine_temperament(name),
                    "biomes": CATEGORY_BIOMES.get(category, ["various"]),
                }
            )
        return creatures

    # -- maps --------------------------------------------------------------
    def get_map_regions(self, map_slug: str, wiki_page: str, map_label: Optional[str] = None) -> List[Region]:
        html = self.fetch(f"/wiki/{wiki_page}")
        parser = parser_for(map_slug, self.base_url, map_label or wiki_page.replace("_", " "), wiki_page)
        regions = parser.parse(html)
        log.info(event="wiki_regions_parsed", map=map_slug, parser=type(parser).__name__, count=len(regions))
        return regions

    def get_cave_data(self, wiki_page: str) -> List[Dict]:
        soup = self.soup(f"/wiki/{wiki_page}")
        caves: Dict[str, Dict] = {}
        for element in soup.select("table tr, li"):
            text = element.get_text(" ", strip=True)
            lowered = text.lower()
            if not any(k in lowered for k in ("cave", "cavern", "grotto")):
                continue
            link = element.find("a")
            name = (link.get_text(" ", strip=True) if link else "") or text
            if 3 < len(name) < 100 and name not in caves:
                caves[name] = {"name": name, "map": wiki_page, "type": determine_cave_type(name)}
        return list(caves.values())


__all__ = [
    "WikiScraper",
    "categorize_region",
    "create_slug",
    "determine_cave_type",
    "determine_taming_method",
    "determine_temperament",
    "is_creature_page",
]
