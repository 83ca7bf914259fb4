"""Region parsers for map pages on the wiki.

Every map page lays out its regions differently, so each map slug is bound to
a ``RegionParser`` in ``REGION_PARSERS``. ``parser_for`` looks the slug up and
falls back to ``GenericRegionParser`` for maps without a dedicated layout.

Parsers are pure: they take page HTML and return ``Region`` records, leaving
fetching and caching to ``WikiScraper``.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

# Keyword order matters: the first matching group wins.
REGION_CATEGORIES = [
    ("caves", ("cave", "grotto", "cavern")),
    ("ocean", ("ocean", "sea", "water", "lake")),
    ("mountains", ("mountain", "peak", "ridge", "cliff")),
    ("forest", ("forest", "jungle", "woods", "grove")),
    ("desert", ("desert", "dune", "oasis", "badland")),
    ("swamp", ("swamp", "bog", "marsh", "wetland")),
    ("snow", ("snow", "ice", "frozen", "arctic", "tundra")),
    ("volcanic", ("volcano", "lava", "magma")),
    ("coastal", ("beach", "shore", "coast", "bay")),
    ("islands", ("island", "isle")),
    ("plains", ("plain", "field", "meadow", "grassland")),
    ("canyons", ("canyon", "gorge", "valley")),
    ("structures", ("ruin", "temple", "castle", "structure")),
]

_IMAGE_EXT = re.compile(r"\.(jpg|jpeg|png|webp)$", re.IGNORECASE)


def categorize_region(name: str) -> str:
    lowered = (name or "").lower()
    for category, keywords in REGION_CATEGORIES:
        if any(k in lowered for k in keywords):
            return category
    return "other"


@dataclass
class Region:
    name: str
    category: str
    description: str
    image_url: Optional[str] = None
    wiki_url: Optional[str] = None
    biome: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


class RegionParser:
    """Turn a map page into region records.

    Subclasses implement ``parse``; ``map_label`` is the human-readable map
    name used in image alt text and descriptions.
    """

    def __init__(self, base_url: str, map_label: str):
        self.base_url = base_url.rstrip("/")
        self.map_label = map_label

    def parse(self, html: str) -> List[Region]:  # pragma: no cover - interface
        raise NotImplementedError

    def _absolute(self, href: Optional[str]) -> Optional[str]:
        if not href:
            return None
        if href.startswith("//"):
            return "https:" + href
        return urljoin(self.base_url + "/", href)

    @staticmethod
    def _soup(html: str) -> BeautifulSoup:
        return BeautifulSoup(html or "", "html.parser")

    @staticmethod
    def _dedupe(regions: List[Region]) -> List[Region]:
        seen = set()
        out = []
        for r in regions:
            if r.name in seen:
                continue
            seen.add(r.name)
            out.append(r)
        return out


class ImageAltRegionParser(RegionParser):
    """Regions shown as a gallery whose image alt text reads ``Name (Map Label)``.

    Used for Lost Island and Crystal Isles. With ``require_link`` the image
    must sit inside an anchor (the anchor target becomes ``wiki_url``).
    """

    def __init__(self, base_url: str, map_label: str, require_link: bool = False):
        super().__init__(base_url, map_label)
        self.require_link = require_link

    def parse(self, html: str) -> List[Region]:
        soup = self._soup(html)
        suffix = f"({self.map_label})"
        regions = []
        for img in soup.select(f'img[alt*="{suffix}"]'):
            src, alt = img.get("src"), img.get("alt")
            if not src or not alt:
                continue
            name = _IMAGE_EXT.sub("", alt.replace(f" {suffix}", "").replace(suffix, "")).strip()
            link = img.find_parent("a")
            href = link.get("href") if link else None
            if not name or (self.require_link and not href):
                continue
            regions.append(
                Region(
                    name=name,
                    category=categorize_region(name),
                    description=f"{name} region on {self.map_label}",
                    image_url=self._absolute(src),
                    wiki_url=self._absolute(href),
                )
            )
        return self._dedupe(regions)


class ContentImageRegionParser(RegionParser):
    """Images inside the article body whose alt text mentions the map (Valguero)."""

    def parse(self, html: str) -> List[Region]:
        soup = self._soup(html)
        pattern = re.compile(r"\s*\(" + re.escape(self.map_label) + r"\)")
        regions = []
        for img in soup.select(f'.mw-content-text img[alt*="{self.map_label}"], #mw-content-text img[alt*="{self.map_label}"]'):
            src, alt = img.get("src"), img.get("alt")
            if not src or not alt:
                continue
            name = _IMAGE_EXT.sub("", pattern.sub("", alt)).strip()
            if not name or name == self.map_label:
                continue
            regions.append(
                Region(
                    name=name,
                    category=categorize_region(name),
                    description=f"{name} region on {self.map_label}",
                    image_url=self._absolute(src),
                )
            )
        return self._dedupe(regions)


class BiomeSectionRegionParser(RegionParser):
    """Genesis-style pages: one heading per biome followed by a list of regions.

    Region category is the lowercased biome rather than the keyword heuristic.
    """

    def __init__(self, base_url: str, map_label: str, biomes: List[str]):
        super().__init__(base_url, map_label)
        self.biomes = list(biomes)

    def parse(self, html: str) -> List[Region]:
        soup = self._soup(html)
        regions = []
        for biome in self.biomes:
            heading = next(
                (h for h in soup.find_all(["h2", "h3"]) if biome.lower() in h.get_text(" ", strip=True).lower()),
                None,
            )
            if heading is None:
                continue
            section = heading.find_next_sibling()
            if section is None:
                continue
            for li in section.find_all("li"):
                name = li.get_text(" ", strip=True)
                if not name:
                    continue
                regions.append(
                    Region(
                        name=name,
                        category=biome.lower(),
                        description=f"{name} in the {biome} biome",
                        biome=biome,
                    )
                )
        return self._dedupe(regions)


class GenericRegionParser(RegionParser):
    """Fallback: any image whose alt or src mentions the map name."""

    def __init__(self, base_url: str, map_label: str, page_name: Optional[str] = None):
        super().__init__(base_url, map_label)
        self.page_name = page_name or map_label.replace(" ", "_")

    def parse(self, html: str) -> List[Region]:
        soup = self._soup(html)
        pattern = re.compile(r"\s*\((" + re.escape(self.map_label) + "|" + re.escape(self.page_name) + r")\)")
        regions = []
        selector = f'img[alt*="{self.map_label}"], img[src*="{self.page_name}"]'
        for img in soup.select(selector):
            src, alt = img.get("src"), img.get("alt")
            if not src or not alt:
                continue
            name = _IMAGE_EXT.sub("", pattern.sub("", alt)).strip()
            if len(name) <= 2 or name == self.map_label:
                continue
            regions.append(
                Region(
                    name=name,
                    category=categorize_region(name),
                    description=f"{name} region on {self.map_label}",
                    image_url=self._absolute(src),
                )
            )
        return self._dedupe(regions)


ParserFactory = Callable[[str], RegionParser]

GENESIS_1_BIOMES = ["Arctic", "Bog", "Lunar", "Ocean", "Volcano"]
GENESIS_2_BIOMES = ["Eden", "Rockwell's Innards", "Canyon", "Ocean", "Space"]

REGION_PARSERS: Dict[str, ParserFactory] = {
    "lost-island": lambda base: ImageAltRegionParser(base, "Lost Island", require_link=True),
    "crystal-isles": lambda base: ImageAltRegionParser(base, "Crystal Isles"),
    "valguero": lambda base: ContentImageRegionParser(base, "Valguero"),
    "genesis-1": lambda base: BiomeSectionRegionParser(base, "Genesis: Part 1", GENESIS_1_BIOMES),
    "genesis-2": lambda base: BiomeSectionRegionParser(base, "Genesis: Part 2", GENESIS_2_BIOMES),
}


def parser_for(map_slug: str, base_url: str, map_label: str, page_name: Optional[str] = None) -> RegionParser:
    factory = REGION_PARSERS.get(map_slug)
    if factory is None:
        return GenericRegionParser(base_url, map_label, page_name)
    return factory(base_url)
