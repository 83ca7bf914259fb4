"""Repository interface shared by the SQL and mock backends.

Route handlers only talk to a ``Repository``; which one is active is decided
once at startup (``AppContext.repository``). Anything both backends compute
the same way (pagination maths, search ranking) lives here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..validation import (
    CreatureListQuery,
    LocationQuery,
    MapChildQuery,
    MapListQuery,
    PageQuery,
    RegionListQuery,
    SearchQuery,
    UserLocationRequest,
)


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    offset = (page - 1) * limit
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if limit else 0,
        "hasNext": offset + limit < total,
        "hasPrev": page > 1,
    }


@dataclass
class Page:
    items: List[Dict[str, Any]]
    total: int
    paging: PageQuery = field(default_factory=PageQuery)

    @property
    def pagination(self) -> Dict[str, Any]:
        return build_pagination(self.paging.page, self.paging.limit, self.total)

    @classmethod
    def slice(cls, rows: List[Dict[str, Any]], paging: PageQuery) -> "Page":
        return cls(items=rows[paging.offset : paging.offset + paging.limit], total=len(rows), paging=paging)


def creature_match_rank(row: Dict[str, Any], q: str) -> Optional[int]:
    """1: name prefix, 2: name contains, 3: description contains, None: no match."""
    needle = q.lower()
    name = (row.get("name") or "").lower()
    if name.startswith(needle):
        return 1
    if needle in name:
        return 2
    if needle in (row.get("description") or "").lower():
        return 3
    return None


def search_result(result_type: str, row: Dict[str, Any], **extra) -> Dict[str, Any]:
    out = {
        "result_type": result_type,
        "id": row.get("id"),
        "name": row.get("name"),
        "slug": row.get("slug"),
        "description": row.get("description"),
    }
    out.update(extra)
    return out


class Repository:
    """Read/write operations used by the HTTP layer.

    Methods returning ``None`` signal that the parent resource (map or
    creature) does not exist so the caller can answer 404.
    """

    is_mock = False

    # creatures
    def list_creatures(self, query: CreatureListQuery) -> Page:
        raise NotImplementedError

    def search_creatures(self, q: str, limit: int) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_creature(self, slug: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    # maps
    def list_maps(self, query: MapListQuery) -> Page:
        raise NotImplementedError

    def get_map(self, slug: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def list_map_children(self, slug: str, query: MapChildQuery) -> Optional[List[Dict[str, Any]]]:
        raise NotImplementedError

    # regions
    def list_regions(self, query: RegionListQuery) -> Optional[Page]:
        raise NotImplementedError

    def get_region(self, region_id: int) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    # search
    def search(self, query: SearchQuery) -> Page:
        raise NotImplementedError

    # taming
    def list_tameable(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_taming(self, slug: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def find_taming_food(self, slug: str, food: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        raise NotImplementedError

    # interactive maps
    def list_locations(self, slug: str, query: LocationQuery) -> Optional[List[Dict[str, Any]]]:
        raise NotImplementedError

    def list_user_locations(self, slug: str, user_id: Optional[str]) -> Optional[List[Dict[str, Any]]]:
        raise NotImplementedError

    def list_routes(self, slug: str) -> Optional[List[Dict[str, Any]]]:
        raise NotImplementedError

    def add_user_location(self, slug: str, request: UserLocationRequest) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    # bookkeeping
    def counts(self) -> Dict[str, int]:
        raise NotImplementedError
