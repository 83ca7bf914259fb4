"""
project: ASA Service
module: population.py
https://github.com/asa-service/asa-service
License: MIT

Data population pipeline.

Fills the reference tables from a static map list and the two scrapers. Every
write is an upsert keyed on the table's natural key, so running a step twice
converges on the same rows (last scrape wins) instead of duplicating them.

Failure policy:
  * A row that fails to write is rolled back, logged and skipped.
  * A page that fails to fetch skips that map/creature only.
  * Anything else escaping a step aborts ``populate_all_data``, which records
    ``error`` in ``system_status`` and re-raises.

External sites are paced with fixed sleeps (per creature and per map); the
sleep function is injectable so tests run instantly.
"""

from __future__ import annotations

import re
import time
from datetime import date
from typing import Callable, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..logging_utils import get_logger
from ..models import (
    CORE_TABLES,
    Cave,
    Creature,
    CreatureSpawn,
    CreatureStat,
    Map,
    MapRegion,
    Obelisk,
    Resource,
    SupplyDrop,
    SystemStatus,
    TamingData,
    TamingFood,
    WikiUpdateLog,
)
from ..scrapers import ScraperError
from .upsert import upsert

log = get_logger("asa_service.population")

SERVICE_NAME = "data_population"

MAPS = [
    dict(name="The Island", slug="the-island", wiki_page="The_Island", map_type="official", is_expansion=False,
         release_date=date(2015, 6, 2), size_km=144,
         description="The original ARK map featuring diverse biomes from beaches to mountains"),
    dict(name="The Center", slug="the-center", wiki_page="The_Center", map_type="official", is_expansion=False,
         release_date=date(2016, 5, 17), size_km=120,
         description="Community-created map with floating islands and underground biomes"),
    dict(name="Scorched Earth", slug="scorched-earth", wiki_page="Scorched_Earth", map_type="expansion",
         is_expansion=True, release_date=date(2016, 9, 1), size_km=100,
         description="Desert expansion with extreme heat and unique creatures"),
    dict(name="Ragnarok", slug="ragnarok", wiki_page="Ragnarok", map_type="official", is_expansion=False,
         release_date=date(2017, 6, 12), size_km=144,
         description="Norse-themed map with diverse landscapes and dungeons"),
    dict(name="Aberration", slug="aberration", wiki_page="Aberration", map_type="expansion", is_expansion=True,
         release_date=date(2017, 12, 12), size_km=225,
         description="Underground map with radiation zones and unique mechanics"),
    dict(name="Extinction", slug="extinction", wiki_page="Extinction", map_type="expansion", is_expansion=True,
         release_date=date(2018, 11, 6), size_km=163,
         description="Post-apocalyptic Earth with corrupted creatures and titans"),
    dict(name="Valguero", slug="valguero", wiki_page="Valguero", map_type="official", is_expansion=False,
         release_date=date(2019, 6, 18), size_km=81,
         description="Nordic-inspired map with underground aberration zone"),
    dict(name="Genesis Part 1", slug="genesis-1", wiki_page="Genesis:_Part_1", map_type="expansion",
         is_expansion=True, release_date=date(2020, 2, 25), size_km=None,
         description="Simulation-based map with five distinct biomes"),
    dict(name="Crystal Isles", slug="crystal-isles", wiki_page="Crystal_Isles", map_type="official",
         is_expansion=False, release_date=date(2020, 6, 11), size_km=150,
         description="Fantasy map with floating islands and crystal formations"),
    dict(name="Genesis Part 2", slug="genesis-2", wiki_page="Genesis:_Part_2", map_type="expansion",
         is_expansion=True, release_date=date(2021, 6, 3), size_km=None,
         description="Space-based map with biome rings and starship exploration"),
    dict(name="Lost Island", slug="lost-island", wiki_page="Lost_Island", map_type="official", is_expansion=False,
         release_date=date(2021, 12, 14), size_km=150,
         description="Tropical paradise with diverse biomes and unique creatures"),
    dict(name="Fjordur", slug="fjordur", wiki_page="Fjordur", map_type="official", is_expansion=False,
         release_date=date(2022, 6, 12), size_km=140,
         description="Norse mythology map with multiple realms and boss encounters"),
]

RESOURCE_TYPES = [
    "Metal", "Crystal", "Obsidian", "Oil", "Pearl", "Sulfur", "Salt",
    "Polymer", "Element", "Aberrant_Gem", "Blue_Gem", "Red_Gem", "Green_Gem",
]

OBELISK_COLORS = ["Red", "Blue", "Green"]

SUPPLY_DROP_LEVELS = {"white": 3, "green": 15, "blue": 30, "purple": 45, "yellow": 60, "red": 70}

_HOURS = re.compile(r"(\d+(?:\.\d+)?)\s*h")
_MINUTES = re.compile(r"(\d+(?:\.\d+)?)\s*m")
_SECONDS = re.compile(r"(\d+(?:\.\d+)?)\s*s")


def parse_time(text: Optional[str]) -> Optional[int]:
    """'1h 30min 10s' -> 90 (minutes, rounded). None when nothing parses."""
    if not text:
        return None
    lowered = text.lower()
    hours = _HOURS.search(lowered)
    minutes = _MINUTES.search(lowered)
    seconds = _SECONDS.search(lowered)
    if not (hours or minutes or seconds):
        return None
    total = 0.0
    if hours:
        total += float(hours.group(1)) * 60
    if minutes:
        total += float(minutes.group(1))
    if seconds:
        total += float(seconds.group(1)) / 60
    return int(round(total))


class DataPopulationService:
    def __init__(
        self,
        wiki,
        dododex,
        sleep: Callable[[float], None] = time.sleep,
        creature_delay: float = 0.2,
        map_delay: float = 1.0,
    ):
        self.wiki = wiki
        self.dododex = dododex
        self.sleep = sleep
        self.creature_delay = creature_delay
        self.map_delay = map_delay

    # -- orchestration -----------------------------------------------------
    def steps(self) -> Dict[str, Callable[[], int]]:
        return {
            "maps": self.populate_maps,
            "creatures": self.populate_creatures,
            "taming": self.populate_taming_data,
            "regions": self.populate_regions,
            "caves": self.populate_caves,
            "resources": self.populate_resources,
            "obelisks": self.populate_obelisks_and_supply_drops,
        }

    def run(self, kind: str = "all") -> Dict[str, int]:
        """Run one step (or everything for ``all``); returns rows written per step."""
        if kind == "all":
            return self.populate_all_data()
        step = self.steps()[kind]
        self.update_system_status("running", f"Populating {kind}")
        try:
            written = step()
        except Exception as exc:
            self._record_failure(exc)
            raise
        self.update_system_status("complete", f"Populated {kind}: {written} rows")
        return {kind: written}

    def populate_all_data(self) -> Dict[str, int]:
        log.info(event="population_start", type="all")
        self.update_system_status("running", "Population in progress")
        results: Dict[str, int] = {}
        try:
            for name, step in self.steps().items():
                results[name] = step()
        except Exception as exc:
            self._record_failure(exc)
            raise
        self.update_system_status("complete", "Population completed successfully")
        log.info(event="population_complete", **results)
        return results

    def _record_failure(self, exc: Exception) -> None:
        db.session.rollback()
        log.error(event="population_failed", error=str(exc))
        self.update_system_status("error", f"Population failed: {exc}")

    def _write(self, label: str, fn: Callable[[], None]) -> bool:
        """Run one row's writes in its own transaction; False if it failed."""
        try:
            fn()
            db.session.commit()
            return True
        except SQLAlchemyError as exc:
            db.session.rollback()
            log.warn(event="population_row_failed", row=label, error=str(exc).splitlines()[0])
            return False

    def _maps(self) -> List[Map]:
        return Map.query.order_by(Map.name).all()

    # -- steps ---------------------------------------------------------------
    def populate_maps(self) -> int:
        written = 0
        for row in MAPS:
            values = dict(row, is_official=True)
            if self._write(row["slug"], lambda v=values: upsert(Map, v, ["slug"])):
                written += 1
        self.log_update("maps", written, "Maps populated successfully")
        return written

    def populate_creatures(self) -> int:
        """Creature catalogue from the wiki (names, flags, links)."""
        creatures = self.wiki.fetch_all_creatures()
        log.info(event="wiki_creatures_found", count=len(creatures))
        written = 0
        for c in creatures:
            values = {
                k: c.get(k)
                for k in (
                    "name",
                    "slug",
                    "wiki_url",
                    "image_url",
                    "is_tameable",
                    "is_rideable",
                    "is_breedable",
                    "taming_method",
                    "temperament",
                )
                if c.get(k) is not None
            }
            if self._write(c["slug"], lambda v=values: upsert(Creature, v, ["slug"])):
                written += 1
        self.log_update("creatures", written, f"Wiki catalogue: {written} of {len(creatures)} creatures")
        return written

    def populate_taming_data(self) -> int:
        """Stats, taming summary, per-food costs and spawns from Dododex."""
        listing = self.dododex.get_all_creatures()
        log.info(event="dododex_creatures_found", count=len(listing))
        written = errors = 0
        for entry in listing:
            try:
                details = self.dododex.get_creature_details(entry["slug"])
            except ScraperError as exc:
                errors += 1
                log.warn(event="dododex_details_failed", creature=entry["slug"], error=str(exc))
                continue
            if self._write(entry["slug"], lambda e=entry, d=details: self._store_creature_details(e, d)):
                written += 1
            else:
                errors += 1
            self.sleep(self.creature_delay)
        self.log_update("creature_taming", written, f"Processed {written} creatures with {errors} errors")
        return written

    def _store_creature_details(self, entry: Dict, details: Dict) -> None:
        taming = details.get("taming") or {}
        values = {
            "name": details.get("name") or entry["name"],
            "slug": entry["slug"],
            "dododex_id": entry["slug"],
            "is_tameable": bool(taming.get("tameable", True)),
            "taming_method": taming.get("method") or "knockout",
        }
        if details.get("description"):
            values["description"] = details["description"]
        if details.get("image_url") or entry.get("image_url"):
            values["image_url"] = details.get("image_url") or entry.get("image_url")
        stats = details.get("stats") or {}
        for key, column in (("health", "health"), ("stamina", "stamina"), ("oxygen", "oxygen"), ("food", "food"),
                            ("weight", "weight"), ("melee_damage", "melee_damage"), ("movement_speed", "movement_speed")):
            if key in stats:
                values[column] = stats[key]["base"]
        creature_id = upsert(Creature, values, ["slug"])

        for stat_name, stat in stats.items():
            upsert(
                CreatureStat,
                {
                    "creature_id": creature_id,
                    "stat_name": stat_name,
                    "base_value": stat["base"],
                    "per_level_wild": stat["wild"],
                    "per_level_tamed": stat["wild"] * 0.5,
                },
                ["creature_id", "stat_name"],
            )

        foods = sorted(taming.get("foods") or [], key=lambda f: f["effectiveness"], reverse=True)
        if taming.get("tameable", True):
            upsert(
                TamingData,
                {
                    "creature_id": creature_id,
                    "taming_method": values["taming_method"],
                    "preferred_foods": [f["name"] for f in foods],
                    "kibble_type": taming.get("kibble"),
                    "unconscious_time": taming.get("unconscious_time"),
                },
                ["creature_id"],
            )
        for food in foods:
            upsert(
                TamingFood,
                {
                    "creature_id": creature_id,
                    "food_name": food["name"],
                    "effectiveness": food["effectiveness"],
                    "quantity_for_level_1": food["quantity"],
                    "taming_time_minutes": parse_time(food.get("time")) or 0,
                },
                ["creature_id", "food_name"],
            )

        for spawn in details.get("spawns") or []:
            map_row = Map.query.filter(
                or_(func.lower(Map.name) == spawn["map"].lower(), func.lower(Map.slug) == spawn["map"].lower())
            ).first()
            if map_row is None:
                continue
            upsert(
                CreatureSpawn,
                {"creature_id": creature_id, "map_id": map_row.id, "rarity": spawn.get("rarity")},
                ["creature_id", "map_id"],
            )

    def populate_regions(self) -> int:
        written = 0
        for map_row in self._maps():
            try:
                regions = self.wiki.get_map_regions(map_row.slug, map_row.wiki_page or map_row.name, map_row.name)
            except ScraperError as exc:
                log.warn(event="regions_fetch_failed", map=map_row.slug, error=str(exc))
                continue
            for region in regions:
                values = {
                    "map_id": map_row.id,
                    "name": region.name,
                    "category": region.category,
                    "biome": region.biome,
                    "description": region.description,
                    "image_url": region.image_url,
                    "wiki_url": region.wiki_url,
                }
                if self._write(f"{map_row.slug}/{region.name}", lambda v=values: upsert(MapRegion, v, ["map_id", "name"])):
                    written += 1
            log.info(event="regions_populated", map=map_row.slug, count=len(regions))
            self.sleep(self.map_delay)
        self.log_update("map_regions", written, "Regions populated for all maps")
        return written

    def populate_caves(self) -> int:
        written = 0
        for map_row in self._maps():
            try:
                caves = self.wiki.get_cave_data(map_row.wiki_page or map_row.name)
            except ScraperError as exc:
                log.warn(event="caves_fetch_failed", map=map_row.slug, error=str(exc))
                continue
            for cave in caves:
                values = {
                    "map_id": map_row.id,
                    "name": cave["name"],
                    "cave_type": cave["type"],
                    "difficulty": "medium",
                    "has_artifact": cave["type"] == "artifact" or "artifact" in cave["name"].lower(),
                    "description": f"{cave['name']} cave on {map_row.name}",
                }
                if self._write(f"{map_row.slug}/{cave['name']}", lambda v=values: upsert(Cave, v, ["map_id", "name"])):
                    written += 1
        self.log_update("caves", written, "Caves populated for all maps")
        return written

    def populate_resources(self) -> int:
        written = 0
        for map_row in self._maps():
            for resource_type in RESOURCE_TYPES:
                label = resource_type.replace("_", " ")
                values = {
                    "map_id": map_row.id,
                    "name": f"{label} Node",
                    "resource_type": resource_type.lower(),
                    "quality": "normal",
                    "description": f"{label} resource node on {map_row.name}",
                }
                if self._write(values["name"], lambda v=values: upsert(Resource, v, ["map_id", "name"])):
                    written += 1
        self.log_update("resources", written, "Base resource types populated")
        return written

    def populate_obelisks_and_supply_drops(self) -> int:
        written = 0
        for map_row in self._maps():
            for color in OBELISK_COLORS:
                values = {
                    "map_id": map_row.id,
                    "name": f"{color} Obelisk",
                    "color": color.lower(),
                    "description": f"{color} Obelisk on {map_row.name}",
                }
                if self._write(values["name"], lambda v=values: upsert(Obelisk, v, ["map_id", "name"])):
                    written += 1
            for quality, level in SUPPLY_DROP_LEVELS.items():
                values = {
                    "map_id": map_row.id,
                    "quality": quality,
                    "level_requirement": level,
                    "description": f"{quality} supply drop on {map_row.name}",
                }
                if self._write(quality, lambda v=values: upsert(SupplyDrop, v, ["map_id", "quality"])):
                    written += 1
        self.log_update("obelisks", written, "Obelisks and supply drops populated")
        return written

    # -- bookkeeping ---------------------------------------------------------
    def log_update(self, table_name: str, record_count: int, notes: str) -> None:
        self._write(
            f"wiki_update_log/{table_name}",
            lambda: db.session.add(WikiUpdateLog(table_name=table_name, record_count=record_count, notes=notes)),
        )

    def update_system_status(self, status: str, message: str) -> None:
        self._write(
            "system_status",
            lambda: upsert(
                SystemStatus,
                {"service_name": SERVICE_NAME, "status": status, "message": message},
                ["service_name"],
            ),
        )

    def get_population_status(self) -> Dict:
        counts = {name: model.query.count() for name, model in CORE_TABLES.items()}
        row = SystemStatus.query.filter_by(service_name=SERVICE_NAME).populate_existing().first()
        status = row.to_dict() if row else {"status": "not_started", "message": "Data population not started"}
        return {"counts": counts, "status": status}
