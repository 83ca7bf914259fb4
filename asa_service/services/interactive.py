"""Distance helpers for the interactive map endpoints.

Coordinates are the in-game lat/lng grid (0-100), so plain Euclidean distance
is used; there is no earth curvature to account for.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

NEAREST_LIMIT = 20

# Minutes per grid unit
TRAVEL_MULTIPLIERS = {"walking": 2.0, "flying": 0.5, "swimming": 1.5, "vehicle": 0.8}


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def nearest(
    locations: List[Dict[str, Any]],
    lat: float,
    lng: float,
    radius: float,
    category: Optional[str] = None,
    limit: int = NEAREST_LIMIT,
) -> List[Dict[str, Any]]:
    ranked = []
    for loc in locations:
        if category and (loc.get("category") or "").lower() != category.lower():
            continue
        d = distance((lat, lng), (loc["latitude"], loc["longitude"]))
        if d <= radius:
            ranked.append(dict(loc, distance=round(d, 2)))
    ranked.sort(key=lambda r: r["distance"])
    return ranked[:limit]


def route_difficulty(dist: float) -> str:
    if dist > 20:
        return "hard"
    if dist > 10:
        return "medium"
    return "easy"


def plan_route(start: Tuple[float, float], end: Tuple[float, float], travel_mode: str = "walking") -> Dict[str, Any]:
    dist = distance(start, end)
    return {
        "start": {"lat": start[0], "lng": start[1]},
        "end": {"lat": end[0], "lng": end[1]},
        "travel_mode": travel_mode,
        "distance": round(dist, 2),
        "estimated_minutes": round(dist * TRAVEL_MULTIPLIERS[travel_mode]),
        "difficulty": route_difficulty(dist),
        "waypoints": [
            {"lat": start[0], "lng": start[1], "name": "Start"},
            {"lat": end[0], "lng": end[1], "name": "Destination"},
        ],
    }
