"""SQLAlchemy-backed repository.

All filters are bound parameters built through the ORM; string filters are
case-insensitive (``lower(col) = lower(:value)``) and text search uses
``ILIKE`` (``lower() LIKE`` on SQLite) with wildcards escaped.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func, or_

from .. import db
from ..models import (
    CORE_TABLES,
    BaseSpot,
    Cave,
    Creature,
    Map,
    MapLocation,
    MapRegion,
    MapRoute,
    Obelisk,
    Resource,
    SupplyDrop,
    TamingFood,
    UserLocation,
)
from ..validation import (
    CreatureListQuery,
    LocationQuery,
    MapChildQuery,
    MapListQuery,
    RegionListQuery,
    SearchQuery,
    UserLocationRequest,
)
from .base import Page, Repository, search_result

# Upper bound on rows pulled per entity type for combined search results.
SEARCH_FETCH_CAP = 500


def _ieq(column, value: str):
    return func.lower(column) == value.lower()


def _child_spec(kind: str):
    """(model, {param: column}, order_by) for a map sub-resource."""
    return {
        "regions": (MapRegion, {"category": MapRegion.category}, [MapRegion.name]),
        "caves": (Cave, {"type": Cave.cave_type, "difficulty": Cave.difficulty}, [Cave.name]),
        "resources": (Resource, {"type": Resource.resource_type, "quality": Resource.quality}, [Resource.name]),
        "obelisks": (Obelisk, {}, [Obelisk.name]),
        "supply-drops": (SupplyDrop, {"quality": SupplyDrop.quality}, [SupplyDrop.quality]),
        "base-spots": (BaseSpot, {}, [BaseSpot.rating.desc(), BaseSpot.name]),
    }[kind]


class SqlRepository(Repository):
    is_mock = False

    def _paged(self, query, paging, to_dict=lambda row: row.to_dict()) -> Page:
        total = query.order_by(None).count()
        rows = query.offset(paging.offset).limit(paging.limit).all()
        return Page(items=[to_dict(r) for r in rows], total=total, paging=paging)

    # creatures -----------------------------------------------------------
    def list_creatures(self, query: CreatureListQuery) -> Page:
        q = Creature.query
        if query.tameable is not None:
            q = q.filter(Creature.is_tameable.is_(query.tameable))
        if query.rideable is not None:
            q = q.filter(Creature.is_rideable.is_(query.rideable))
        if query.temperament:
            q = q.filter(_ieq(Creature.temperament, query.temperament))
        if query.sort == "health":
            q = q.order_by(Creature.health.desc().nulls_last(), Creature.name)
        elif query.sort == "damage":
            q = q.order_by(Creature.melee_damage.desc().nulls_last(), Creature.name)
        else:
            q = q.order_by(Creature.name)
        return self._paged(q, query.paging)

    def search_creatures(self, q: str, limit: int) -> List[Dict[str, Any]]:
        rank = case(
            (Creature.name.istartswith(q, autoescape=True), 1),
            (Creature.name.icontains(q, autoescape=True), 2),
            else_=3,
        )
        rows = (
            Creature.query.filter(
                or_(Creature.name.icontains(q, autoescape=True), Creature.description.icontains(q, autoescape=True))
            )
            .order_by(rank, Creature.name)
            .limit(limit)
            .all()
        )
        return [r.to_dict() for r in rows]

    def get_creature(self, slug: str) -> Optional[Dict[str, Any]]:
        creature = Creature.query.filter_by(slug=slug).first()
        if creature is None:
            return None
        out = creature.to_dict()
        out["stats"] = [s.to_dict() for s in creature.stats]
        out["taming"] = creature.taming.to_dict() if creature.taming else None
        out["taming_foods"] = [f.to_dict() for f in creature.taming_foods]
        return out

    # maps ------------------------------------------------------------------
    def list_maps(self, query: MapListQuery) -> Page:
        q = Map.query
        if query.map_type:
            q = q.filter(_ieq(Map.map_type, query.map_type))
        if query.official is not None:
            q = q.filter(Map.is_official.is_(query.official))
        if query.expansion is not None:
            q = q.filter(Map.is_expansion.is_(query.expansion))
        return self._paged(q.order_by(Map.name), query.paging)

    def get_map(self, slug: str) -> Optional[Dict[str, Any]]:
        row = Map.query.filter_by(slug=slug).first()
        return row.to_dict() if row else None

    def list_map_children(self, slug: str, query: MapChildQuery) -> Optional[List[Dict[str, Any]]]:
        map_row = Map.query.filter_by(slug=slug).first()
        if map_row is None:
            return None
        model, columns, order = _child_spec(query.kind)
        q = model.query.filter(model.map_id == map_row.id)
        for name, wanted in query.filters.items():
            q = q.filter(_ieq(columns[name], wanted))
        if query.rating_min is not None:
            q = q.filter(BaseSpot.rating >= query.rating_min)
        return [r.to_dict() for r in q.order_by(*order).all()]

    # regions ---------------------------------------------------------------
    def list_regions(self, query: RegionListQuery) -> Optional[Page]:
        if query.map_slug:
            map_row = Map.query.filter_by(slug=query.map_slug).first()
        else:
            map_row = db.session.get(Map, query.map_id)
        if map_row is None:
            return None
        q = MapRegion.query.filter(MapRegion.map_id == map_row.id)
        if query.biome:
            q = q.filter(or_(_ieq(MapRegion.biome, query.biome), _ieq(MapRegion.category, query.biome)))

        def _row(region):
            out = region.to_dict()
            out["map_slug"] = map_row.slug
            return out

        return self._paged(q.order_by(MapRegion.name), query.paging, _row)

    def get_region(self, region_id: int) -> Optional[Dict[str, Any]]:
        row = (
            db.session.query(MapRegion, Map.name, Map.slug)
            .join(Map, Map.id == MapRegion.map_id)
            .filter(MapRegion.id == region_id)
            .first()
        )
        if row is None:
            return None
        region, map_name, map_slug = row
        out = region.to_dict()
        out.update(map_name=map_name, map_slug=map_slug)
        return out

    # search ----------------------------------------------------------------
    def search(self, query: SearchQuery) -> Page:
        term = query.q
        results = []
        if query.type in ("all", "creature"):
            rows = (
                Creature.query.filter(
                    or_(
                        Creature.name.icontains(term, autoescape=True),
                        Creature.description.icontains(term, autoescape=True),
                        Creature.temperament.icontains(term, autoescape=True),
                    )
                )
                .order_by(Creature.name)
                .limit(SEARCH_FETCH_CAP)
            )
            results += [search_result("creature", c.to_dict(), temperament=c.temperament) for c in rows]
        if query.type in ("all", "map"):
            rows = (
                Map.query.filter(
                    or_(Map.name.icontains(term, autoescape=True), Map.description.icontains(term, autoescape=True))
                )
                .order_by(Map.name)
                .limit(SEARCH_FETCH_CAP)
            )
            results += [search_result("map", m.to_dict(), type=m.map_type) for m in rows]
        if query.type in ("all", "region"):
            rows = (
                db.session.query(MapRegion, Map.slug)
                .join(Map, Map.id == MapRegion.map_id)
                .filter(
                    or_(
                        MapRegion.name.icontains(term, autoescape=True),
                        MapRegion.description.icontains(term, autoescape=True),
                        MapRegion.category.icontains(term, autoescape=True),
                    )
                )
                .order_by(MapRegion.name)
                .limit(SEARCH_FETCH_CAP)
            )
            results += [
                search_result("region", r.to_dict(), map_slug=map_slug, category=r.category) for r, map_slug in rows
            ]
        return Page.slice(results, query.paging)

    # taming ----------------------------------------------------------------
    def list_tameable(self) -> List[Dict[str, Any]]:
        rows = []
        for c in Creature.query.filter(Creature.is_tameable.is_(True)).order_by(Creature.name).all():
            taming = c.taming
            rows.append(
                {
                    "name": c.name,
                    "slug": c.slug,
                    "taming_method": (taming.taming_method if taming else None) or c.taming_method,
                    "kibble": taming.kibble_type if taming else None,
                    "preferred_foods": (taming.preferred_foods if taming else None) or [],
                }
            )
        return rows

    def get_taming(self, slug: str) -> Optional[Dict[str, Any]]:
        creature = Creature.query.filter_by(slug=slug).first()
        if creature is None:
            return None
        return {
            "creature": slug,
            "name": creature.name,
            "tameable": creature.is_tameable,
            "taming": creature.taming.to_dict() if creature.taming else None,
            "foods": [f.to_dict() for f in creature.taming_foods],
        }

    def find_taming_food(self, slug: str, food: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        creature = Creature.query.filter_by(slug=slug).first()
        if creature is None:
            return None, None
        row = TamingFood.query.filter(TamingFood.creature_id == creature.id, _ieq(TamingFood.food_name, food)).first()
        return creature.to_dict(), (row.to_dict() if row else None)

    # interactive maps ------------------------------------------------------
    def list_locations(self, slug: str, query: LocationQuery) -> Optional[List[Dict[str, Any]]]:
        map_row = Map.query.filter_by(slug=slug).first()
        if map_row is None:
            return None
        q = MapLocation.query.filter(MapLocation.map_id == map_row.id)
        if query.category:
            q = q.filter(_ieq(MapLocation.category, query.category))
        for name, wanted in query.filters.items():
            q = q.filter(_ieq(getattr(MapLocation, name), wanted))
        return [r.to_dict() for r in q.order_by(MapLocation.category, MapLocation.name).all()]

    def list_user_locations(self, slug: str, user_id: Optional[str]) -> Optional[List[Dict[str, Any]]]:
        map_row = Map.query.filter_by(slug=slug).first()
        if map_row is None:
            return None
        visible = UserLocation.is_public.is_(True)
        if user_id:
            visible = or_(visible, UserLocation.user_id == user_id)
        rows = UserLocation.query.filter(UserLocation.map_id == map_row.id, visible).order_by(UserLocation.id)
        return [r.to_dict() for r in rows.all()]

    def list_routes(self, slug: str) -> Optional[List[Dict[str, Any]]]:
        map_row = Map.query.filter_by(slug=slug).first()
        if map_row is None:
            return None
        return [r.to_dict() for r in MapRoute.query.filter_by(map_id=map_row.id).order_by(MapRoute.name).all()]

    def add_user_location(self, slug: str, request: UserLocationRequest) -> Optional[Dict[str, Any]]:
        map_row = Map.query.filter_by(slug=slug).first()
        if map_row is None:
            return None
        row = UserLocation(
            map_id=map_row.id,
            user_id=request.user_id,
            name=request.name,
            category=request.category,
            latitude=request.latitude,
            longitude=request.longitude,
            notes=request.notes,
            is_public=request.is_public,
        )
        db.session.add(row)
        db.session.commit()
        return row.to_dict()

    def counts(self) -> Dict[str, int]:
        return {name: model.query.count() for name, model in CORE_TABLES.items()}
