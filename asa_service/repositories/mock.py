"""In-memory repository over ``asa_service.mock_data``.

Filtering mirrors the SQL repository: case-insensitive equality for string
filters, exact match for booleans, the same sort keys and the same search
ranking.
"""

from __future__ import annotations

import copy
import itertools
from typing import Any, Dict, List, Optional, Tuple

from .. import mock_data
from ..validation import (
    CreatureListQuery,
    LocationQuery,
    MapChildQuery,
    MapListQuery,
    RegionListQuery,
    SearchQuery,
    UserLocationRequest,
)
from .base import Page, Repository, creature_match_rank, search_result

_CHILD_ROWS = {
    "regions": "REGIONS",
    "caves": "CAVES",
    "resources": "RESOURCES",
    "obelisks": "OBELISKS",
    "supply-drops": "SUPPLY_DROPS",
    "base-spots": "BASE_SPOTS",
}

_CHILD_ORDER = {
    "regions": (lambda r: r["name"], False),
    "caves": (lambda r: r["name"], False),
    "resources": (lambda r: r["name"], False),
    "obelisks": (lambda r: r["name"], False),
    "supply-drops": (lambda r: r["quality"], False),
    "base-spots": (lambda r: r["rating"] or 0, True),
}


def _ieq(value: Any, wanted: str) -> bool:
    return value is not None and str(value).lower() == wanted.lower()


class MockRepository(Repository):
    is_mock = True

    def __init__(self):
        # Private copies so user-location writes never leak across app instances
        self.maps = copy.deepcopy(mock_data.MAPS)
        self.creatures = copy.deepcopy(mock_data.CREATURES)
        self.user_locations: List[Dict[str, Any]] = []
        self._ids = itertools.count(1)

    # creatures -----------------------------------------------------------
    def list_creatures(self, query: CreatureListQuery) -> Page:
        rows = list(self.creatures)
        if query.tameable is not None:
            rows = [r for r in rows if r["is_tameable"] == query.tameable]
        if query.rideable is not None:
            rows = [r for r in rows if r["is_rideable"] == query.rideable]
        if query.temperament:
            rows = [r for r in rows if _ieq(r["temperament"], query.temperament)]
        if query.sort == "health":
            rows.sort(key=lambda r: (r["health"] is None, -(r["health"] or 0)))
        elif query.sort == "damage":
            rows.sort(key=lambda r: (r["melee_damage"] is None, -(r["melee_damage"] or 0)))
        else:
            rows.sort(key=lambda r: r["name"])
        return Page.slice(rows, query.paging)

    def search_creatures(self, q: str, limit: int) -> List[Dict[str, Any]]:
        ranked = []
        for row in self.creatures:
            rank = creature_match_rank(row, q)
            if rank is not None:
                ranked.append((rank, row["name"], row))
        ranked.sort(key=lambda t: (t[0], t[1]))
        return [row for _, _, row in ranked[:limit]]

    def _creature(self, slug: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.creatures if c["slug"] == slug), None)

    def get_creature(self, slug: str) -> Optional[Dict[str, Any]]:
        creature = self._creature(slug)
        if creature is None:
            return None
        out = dict(creature)
        out["stats"] = sorted(mock_data.CREATURE_STATS.get(slug, []), key=lambda s: s["stat_name"])
        out["taming"] = mock_data.TAMING.get(slug)
        out["taming_foods"] = mock_data.TAMING_FOODS.get(slug, [])
        return out

    # maps ------------------------------------------------------------------
    def list_maps(self, query: MapListQuery) -> Page:
        rows = list(self.maps)
        if query.map_type:
            rows = [m for m in rows if _ieq(m["type"], query.map_type)]
        if query.official is not None:
            rows = [m for m in rows if m["is_official"] == query.official]
        if query.expansion is not None:
            rows = [m for m in rows if m["is_expansion"] == query.expansion]
        rows.sort(key=lambda m: m["name"])
        return Page.slice(rows, query.paging)

    def get_map(self, slug: str) -> Optional[Dict[str, Any]]:
        return next((m for m in self.maps if m["slug"] == slug), None)

    def list_map_children(self, slug: str, query: MapChildQuery) -> Optional[List[Dict[str, Any]]]:
        if self.get_map(slug) is None:
            return None
        rows = [r for r in getattr(mock_data, _CHILD_ROWS[query.kind]) if r["map_slug"] == slug]
        for name, wanted in query.filters.items():
            rows = [r for r in rows if _ieq(r.get(name), wanted)]
        if query.rating_min is not None:
            rows = [r for r in rows if (r.get("rating") or 0) >= query.rating_min]
        key, reverse = _CHILD_ORDER[query.kind]
        return sorted(rows, key=key, reverse=reverse)

    # regions ---------------------------------------------------------------
    def _resolve_map(self, slug: Optional[str], map_id: Optional[int]) -> Optional[Dict[str, Any]]:
        if slug:
            return self.get_map(slug)
        return next((m for m in self.maps if m["id"] == map_id), None)

    def list_regions(self, query: RegionListQuery) -> Optional[Page]:
        map_row = self._resolve_map(query.map_slug, query.map_id)
        if map_row is None:
            return None
        rows = [r for r in mock_data.REGIONS if r["map_slug"] == map_row["slug"]]
        if query.biome:
            rows = [r for r in rows if _ieq(r["biome"], query.biome) or _ieq(r["category"], query.biome)]
        rows.sort(key=lambda r: r["name"])
        return Page.slice(rows, query.paging)

    def get_region(self, region_id: int) -> Optional[Dict[str, Any]]:
        region = next((r for r in mock_data.REGIONS if r["id"] == region_id), None)
        if region is None:
            return None
        out = dict(region)
        map_row = self.get_map(region["map_slug"])
        out["map_name"] = map_row["name"] if map_row else None
        return out

    # search ----------------------------------------------------------------
    def search(self, query: SearchQuery) -> Page:
        needle = query.q.lower()
        results = []
        if query.type in ("all", "creature"):
            for c in sorted(self.creatures, key=lambda r: r["name"]):
                haystack = " ".join(str(c.get(k) or "") for k in ("name", "description", "temperament")).lower()
                if needle in haystack:
                    results.append(search_result("creature", c, temperament=c["temperament"]))
        if query.type in ("all", "map"):
            for m in sorted(self.maps, key=lambda r: r["name"]):
                if needle in f"{m['name']} {m['description'] or ''}".lower():
                    results.append(search_result("map", m, type=m["type"]))
        if query.type in ("all", "region"):
            for r in sorted(mock_data.REGIONS, key=lambda r: r["name"]):
                haystack = f"{r['name']} {r['description'] or ''} {r['category']}".lower()
                if needle in haystack:
                    results.append(search_result("region", r, map_slug=r["map_slug"], category=r["category"]))
        return Page.slice(results, query.paging)

    # taming ----------------------------------------------------------------
    def list_tameable(self) -> List[Dict[str, Any]]:
        rows = []
        for c in sorted(self.creatures, key=lambda r: r["name"]):
            if not c["is_tameable"]:
                continue
            taming = mock_data.TAMING.get(c["slug"]) or {}
            rows.append(
                {
                    "name": c["name"],
                    "slug": c["slug"],
                    "taming_method": taming.get("method") or c["taming_method"],
                    "kibble": taming.get("kibble"),
                    "preferred_foods": taming.get("preferred_foods", []),
                }
            )
        return rows

    def get_taming(self, slug: str) -> Optional[Dict[str, Any]]:
        creature = self._creature(slug)
        if creature is None:
            return None
        return {
            "creature": slug,
            "name": creature["name"],
            "tameable": creature["is_tameable"],
            "taming": mock_data.TAMING.get(slug),
            "foods": mock_data.TAMING_FOODS.get(slug, []),
        }

    def find_taming_food(self, slug: str, food: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        creature = self._creature(slug)
        if creature is None:
            return None, None
        match = next((f for f in mock_data.TAMING_FOODS.get(slug, []) if _ieq(f["food_name"], food)), None)
        return creature, match

    # interactive maps ------------------------------------------------------
    def list_locations(self, slug: str, query: LocationQuery) -> Optional[List[Dict[str, Any]]]:
        if self.get_map(slug) is None:
            return None
        rows = [r for r in mock_data.MAP_LOCATIONS if r["map_slug"] == slug]
        if query.category:
            rows = [r for r in rows if _ieq(r["category"], query.category)]
        for name, wanted in query.filters.items():
            rows = [r for r in rows if _ieq(r.get(name), wanted)]
        return sorted(rows, key=lambda r: (r["category"], r["name"]))

    def list_user_locations(self, slug: str, user_id: Optional[str]) -> Optional[List[Dict[str, Any]]]:
        map_row = self.get_map(slug)
        if map_row is None:
            return None
        return [
            u
            for u in self.user_locations
            if u["map_id"] == map_row["id"] and (u["is_public"] or (user_id and u["user_id"] == user_id))
        ]

    def list_routes(self, slug: str) -> Optional[List[Dict[str, Any]]]:
        return None if self.get_map(slug) is None else []

    def add_user_location(self, slug: str, request: UserLocationRequest) -> Optional[Dict[str, Any]]:
        map_row = self.get_map(slug)
        if map_row is None:
            return None
        row = {
            "id": next(self._ids),
            "map_id": map_row["id"],
            "user_id": request.user_id,
            "name": request.name,
            "category": request.category,
            "latitude": request.latitude,
            "longitude": request.longitude,
            "notes": request.notes,
            "is_public": request.is_public,
        }
        self.user_locations.append(row)
        return row

    def counts(self) -> Dict[str, int]:
        return {
            "maps": len(self.maps),
            "creatures": len(self.creatures),
            "map_regions": len(mock_data.REGIONS),
            "caves": len(mock_data.CAVES),
            "resources": len(mock_data.RESOURCES),
            "obelisks": len(mock_data.OBELISKS),
            "supply_drops": len(mock_data.SUPPLY_DROPS),
            "creature_stats": sum(len(v) for v in mock_data.CREATURE_STATS.values()),
        }
