"""Request validation for the HTTP API.

Each endpoint parses its query string or JSON body into a small dataclass
through a ``from_args`` / ``from_json`` classmethod. Parsing either returns a
fully-typed request object or raises ``ValidationError``, which the app turns
into a 400 response:

    {"success": false, "error": "<message>", "field": "<name>", "code": "<code>"}

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_PAGE = 10_000
# Largest id the INTEGER primary keys can hold
MAX_ID = 2**31 - 1
MIN_SEARCH_LENGTH = 2

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")


class ValidationError(Exception):
    def __init__(self, field: str, message: str, code: str = "invalid"):
        super().__init__(message)
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "field": self.field, "code": self.code}


def _int_arg(
    args: Mapping, name: str, default: int, minimum: int = 1, maximum: Optional[int] = None, clamp: bool = True
) -> int:
    raw = args.get(name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValidationError(name, f"{name} must be an integer", "type")
    if value < minimum:
        raise ValidationError(name, f"{name} must be at least {minimum}", "min")
    if maximum is not None and value > maximum:
        if not clamp:
            raise ValidationError(name, f"{name} must be at most {maximum}", "max")
        value = maximum
    return value


def _float_arg(args: Mapping, name: str, required: bool = False, default: Optional[float] = None) -> Optional[float]:
    raw = args.get(name)
    if raw is None or str(raw).strip() == "":
        if required:
            raise ValidationError(name, f"{name} is required", "required")
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ValidationError(name, f"{name} must be a number", "type")


def _bool_arg(args: Mapping, name: str) -> Optional[bool]:
    raw = args.get(name)
    if raw is None or raw == "":
        return None
    lowered = str(raw).strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValidationError(name, f"{name} must be 'true' or 'false'", "type")


def _str_arg(args: Mapping, name: str, max_len: int = 120) -> Optional[str]:
    raw = args.get(name)
    if raw is None:
        return None
    value = str(raw).strip()
    if not value:
        return None
    if len(value) > max_len:
        raise ValidationError(name, f"{name} is too long", "max_len")
    return value


def _choice_arg(args: Mapping, name: str, choices: Tuple[str, ...], default: str) -> str:
    value = (_str_arg(args, name) or default).lower()
    if value not in choices:
        raise ValidationError(name, f"{name} must be one of: {', '.join(choices)}", "choice")
    return value


def _search_term(args: Mapping) -> str:
    q = (args.get("q") or "").strip()
    if len(q) < MIN_SEARCH_LENGTH:
        raise ValidationError("q", f"Search query must be at least {MIN_SEARCH_LENGTH} characters long", "min_len")
    if len(q) > 100:
        raise ValidationError("q", "Search query is too long", "max_len")
    return q


@dataclass
class PageQuery:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_args(cls, args: Mapping) -> "PageQuery":
        return cls(
            page=_int_arg(args, "page", 1, maximum=MAX_PAGE, clamp=False),
            limit=_int_arg(args, "limit", DEFAULT_PAGE_SIZE, maximum=MAX_PAGE_SIZE),
        )


CREATURE_SORTS = ("name", "health", "damage")


@dataclass
class CreatureListQuery:
    paging: PageQuery
    tameable: Optional[bool] = None
    rideable: Optional[bool] = None
    temperament: Optional[str] = None
    sort: str = "name"

    @classmethod
    def from_args(cls, args: Mapping) -> "CreatureListQuery":
        return cls(
            paging=PageQuery.from_args(args),
            tameable=_bool_arg(args, "tameable"),
            rideable=_bool_arg(args, "rideable"),
            temperament=_str_arg(args, "temperament", 40),
            sort=_choice_arg(args, "sort", CREATURE_SORTS, "name"),
        )


@dataclass
class CreatureSearchQuery:
    q: str
    limit: int = 10

    @classmethod
    def from_args(cls, args: Mapping) -> "CreatureSearchQuery":
        return cls(q=_search_term(args), limit=_int_arg(args, "limit", 10, maximum=50))


@dataclass
class MapListQuery:
    paging: PageQuery
    map_type: Optional[str] = None
    official: Optional[bool] = None
    expansion: Optional[bool] = None

    @classmethod
    def from_args(cls, args: Mapping) -> "MapListQuery":
        return cls(
            paging=PageQuery.from_args(args),
            map_type=_str_arg(args, "type", 20),
            official=_bool_arg(args, "official"),
            expansion=_bool_arg(args, "expansion"),
        )


# Query parameters accepted by each map sub-resource; names match the row keys.
MAP_CHILD_FILTERS: Dict[str, Tuple[str, ...]] = {
    "regions": ("category",),
    "caves": ("type", "difficulty"),
    "resources": ("type", "quality"),
    "obelisks": (),
    "supply-drops": ("quality",),
    "base-spots": (),
}


@dataclass
class MapChildQuery:
    kind: str
    filters: Dict[str, str] = field(default_factory=dict)
    rating_min: Optional[float] = None

    @classmethod
    def from_args(cls, kind: str, args: Mapping) -> "MapChildQuery":
        if kind not in MAP_CHILD_FILTERS:
            raise ValidationError("kind", f"Unknown map resource '{kind}'", "choice")
        filters = {}
        for name in MAP_CHILD_FILTERS[kind]:
            value = _str_arg(args, name, 40)
            if value:
                filters[name] = value
        rating_min = _float_arg(args, "rating_min") if kind == "base-spots" else None
        return cls(kind=kind, filters=filters, rating_min=rating_min)


@dataclass
class RegionListQuery:
    paging: PageQuery
    map_slug: Optional[str] = None
    map_id: Optional[int] = None
    biome: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping) -> "RegionListQuery":
        map_slug = _str_arg(args, "map", 120)
        map_id = _int_arg(args, "map_id", 0, minimum=1, maximum=MAX_ID, clamp=False) if args.get("map_id") else None
        if not map_slug and not map_id:
            raise ValidationError(
                "map",
                "Map parameter is required (map or map_id). Example: /api/regions?map=the-island",
                "required",
            )
        return cls(
            paging=PageQuery.from_args(args),
            map_slug=map_slug,
            map_id=map_id,
            biome=_str_arg(args, "biome", 40),
        )


SEARCH_TYPES = ("all", "creature", "map", "region")


@dataclass
class SearchQuery:
    q: str
    type: str
    paging: PageQuery

    @classmethod
    def from_args(cls, args: Mapping) -> "SearchQuery":
        return cls(
            q=_search_term(args),
            type=_choice_arg(args, "type", SEARCH_TYPES, "all"),
            paging=PageQuery.from_args(args),
        )


MAX_CREATURE_LEVEL = 500


@dataclass
class TamingCalculationRequest:
    creature: str
    level: int
    food: str

    @classmethod
    def from_json(cls, payload: Any) -> "TamingCalculationRequest":
        if not isinstance(payload, dict):
            raise ValidationError("__root__", "Request body must be a JSON object", "type")
        missing = [k for k in ("creature", "level", "food") if payload.get(k) in (None, "")]
        if missing:
            raise ValidationError(missing[0], "Missing required fields: creature, level, food", "required")
        creature, food, level = payload["creature"], payload["food"], payload["level"]
        if not isinstance(creature, str) or not isinstance(food, str):
            raise ValidationError("creature", "creature and food must be strings", "type")
        if isinstance(level, bool):
            raise ValidationError("level", "level must be an integer", "type")
        if isinstance(level, float) and not level.is_integer():
            raise ValidationError("level", "level must be an integer", "type")
        try:
            level = int(level)
        except (TypeError, ValueError):
            raise ValidationError("level", "level must be an integer", "type")
        if not 1 <= level <= MAX_CREATURE_LEVEL:
            raise ValidationError("level", f"level must be between 1 and {MAX_CREATURE_LEVEL}", "range")
        return cls(creature=creature.strip().lower(), level=level, food=food.strip())


LOCATION_FILTERS = ("subcategory", "rarity", "difficulty")


@dataclass
class LocationQuery:
    category: Optional[str] = None
    filters: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_args(cls, args: Mapping, category: Optional[str] = None) -> "LocationQuery":
        filters = {}
        for name in LOCATION_FILTERS:
            value = _str_arg(args, name, 40)
            if value:
                filters[name] = value
        return cls(category=category or _str_arg(args, "category", 40), filters=filters)


@dataclass
class NearestQuery:
    lat: float
    lng: float
    radius: float = 10.0
    category: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping) -> "NearestQuery":
        if args.get("lat") in (None, "") or args.get("lng") in (None, ""):
            raise ValidationError("lat", "Latitude and longitude are required", "required")
        radius = _float_arg(args, "radius", default=10.0)
        if radius <= 0:
            raise ValidationError("radius", "radius must be positive", "min")
        return cls(
            lat=_float_arg(args, "lat", required=True),
            lng=_float_arg(args, "lng", required=True),
            radius=radius,
            category=_str_arg(args, "category", 40),
        )


@dataclass
class UserLocationRequest:
    user_id: str
    name: str
    latitude: float
    longitude: float
    category: str = "custom"
    notes: Optional[str] = None
    is_public: bool = False

    @classmethod
    def from_json(cls, payload: Any) -> "UserLocationRequest":
        if not isinstance(payload, dict):
            raise ValidationError("__root__", "Request body must be a JSON object", "type")
        for key in ("user_id", "name", "latitude", "longitude"):
            if payload.get(key) in (None, ""):
                raise ValidationError(key, "Missing required fields: user_id, name, latitude, longitude", "required")
        name = str(payload["name"]).strip()
        if len(name) > 200:
            raise ValidationError("name", "name is too long", "max_len")
        return cls(
            user_id=str(payload["user_id"]).strip(),
            name=name,
            latitude=_float_arg(payload, "latitude", required=True),
            longitude=_float_arg(payload, "longitude", required=True),
            category=_str_arg(payload, "category", 40) or "custom",
            notes=_str_arg(payload, "notes", 2000),
            is_public=bool(_bool_arg(payload, "is_public")),
        )


TRAVEL_MODES = ("walking", "flying", "swimming", "vehicle")


@dataclass
class RouteRequest:
    start: Tuple[float, float]
    end: Tuple[float, float]
    travel_mode: str = "walking"

    @classmethod
    def from_json(cls, payload: Any) -> "RouteRequest":
        if not isinstance(payload, dict):
            raise ValidationError("__root__", "Request body must be a JSON object", "type")
        points = []
        for key in ("start", "end"):
            point = payload.get(key)
            if not isinstance(point, dict):
                raise ValidationError(key, "Start and end coordinates are required", "required")
            points.append((_float_arg(point, "lat", required=True), _float_arg(point, "lng", required=True)))
        mode = _choice_arg(payload, "travel_mode", TRAVEL_MODES, "walking")
        return cls(start=points[0], end=points[1], travel_mode=mode)


POPULATION_TYPES = ("all", "maps", "creatures", "taming", "regions", "caves", "resources", "obelisks")


@dataclass
class PopulateRequest:
    type: str = "all"

    @classmethod
    def from_json(cls, payload: Any) -> "PopulateRequest":
        payload = payload if isinstance(payload, dict) else {}
        return cls(type=_choice_arg(payload, "type", POPULATION_TYPES, "all"))
