"""Dododex (dododex.com) scraper for taming data."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from .base import BaseScraper
from .cache import HOUR

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def _number(text: str, default: float = 0) -> float:
    match = _NUMBER.search((text or "").replace(",", ""))
    return float(match.group()) if match else default


def _text(node, selector: str) -> str:
    found = node.select_one(selector)
    return found.get_text(" ", strip=True) if found else ""


class DododexScraper(BaseScraper):
    default_ttl = 12 * HOUR

    def get_all_creatures(self) -> List[Dict]:
        soup = self.soup("/dinosaurs")
        creatures: List[Dict] = []
        for card in soup.select(".dino-card, .creature-card, .tame-card"):
            link = card.find("a")
            if link is None or not link.get("href"):
                continue
            name = _text(link, ".name, .creature-name, h3, h4") or link.get_text(" ", strip=True)
            img = card.find("img")
            image = (img.get("src") or img.get("data-src")) if img else None
            if name:
                creatures.append(self._listing(name, link["href"], image))

        if not creatures:
            for link in soup.select('a[href*="/dinosaur/"]'):
                name = link.get_text(" ", strip=True)
                if 2 < len(name) < 50:
                    creatures.append(self._listing(name, link["href"], None))

        unique: Dict[str, Dict] = {}
        for c in creatures:
            unique.setdefault(c["name"], c)
        return list(unique.values())

    def _listing(self, name: str, href: str, image: Optional[str]) -> Dict:
        slug = href.rstrip("/").split("/dinosaur/")[-1].strip("/")
        return {
            "name": name,
            "slug": slug,
            "image_url": self.absolute_url(image),
            "dododex_url": self.absolute_url(href),
        }

    def get_creature_details(self, slug: str) -> Dict:
        soup = self.soup(f"/dinosaur/{slug}")
        img = soup.select_one(".creature-image img, .dino-image img, .main-image img")
        image = (img.get("src") or img.get("data-src")) if img else None

        stats: Dict[str, Dict[str, float]] = {}
        for row in soup.select(".stat-row, .stats-table tr"):
            name = _text(row, ".stat-name, td:nth-of-type(1)").lower()
            base = _text(row, ".base-value, .stat-base, td:nth-of-type(2)")
            wild = _text(row, ".wild-value, .stat-wild, td:nth-of-type(3)")
            if name and base:
                stats[re.sub(r"\s+", "_", name)] = {"base": _number(base), "wild": _number(wild)}

        spawns = []
        for spawn in soup.select(".spawn-map, .map-spawn"):
            map_name = _text(spawn, ".map-name, .spawn-map-name")
            if map_name:
                spawns.append({"map": map_name, "rarity": _text(spawn, ".rarity, .spawn-rarity") or "unknown"})

        return {
            "slug": slug,
            "name": _text(soup, ".creature-title, .dino-name, h1"),
            "description": _text(soup, ".description, .creature-description"),
            "image_url": self.absolute_url(image),
            "stats": stats,
            "taming": self.extract_taming_data(soup),
            "spawns": spawns,
        }

    def extract_taming_data(self, soup: BeautifulSoup) -> Dict:
        taming = {"tameable": True, "method": "knockout", "foods": [], "kibble": None, "unconscious_time": None}
        if soup.select_one(".not-tameable, .cannot-tame"):
            taming["tameable"] = False
            return taming
        if soup.select_one(".passive-tame, .hand-feed"):
            taming["method"] = "passive"
        elif soup.select_one(".special-tame"):
            taming["method"] = "special"

        taming["kibble"] = _text(soup, ".kibble-type, .preferred-kibble") or None
        taming["unconscious_time"] = _text(soup, ".unconscious-time, .torpor-time") or None

        for item in soup.select(".food-item, .taming-food"):
            food = _text(item, ".food-name, .name")
            if not food:
                continue
            taming["foods"].append(
                {
                    "name": food,
                    "effectiveness": _number(_text(item, ".effectiveness, .eff")),
                    "quantity": int(_number(_text(item, ".quantity, .qty"))),
                    "time": _text(item, ".time, .taming-time"),
                }
            )
        return taming
