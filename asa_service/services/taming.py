"""Taming cost estimates.

The level scaling below is an approximation: base costs are stored for a
level-30 equivalent and scaled by ``(level / 30) ** 0.85``. It has not been
checked against in-game numbers, so every result carries
``formula_verified: False`` and clients should present it as an estimate.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

REFERENCE_LEVEL = 30
LEVEL_EXPONENT = 0.85
NARCOTIC_MINUTES = 5


def level_multiplier(level: int) -> float:
    return (level / REFERENCE_LEVEL) ** LEVEL_EXPONENT


def calculate(creature: Dict[str, Any], food: Dict[str, Any], level: int) -> Dict[str, Any]:
    multiplier = level_multiplier(level)
    base_quantity = food.get("quantity_for_level_1") or 0
    base_time = food.get("taming_time_minutes") or 0
    quantity = math.ceil(base_quantity * multiplier)
    minutes = math.ceil(base_time * multiplier)
    return {
        "creature": creature["name"],
        "level": level,
        "food": food["food_name"],
        "requirements": {
            "quantity": quantity,
            "time_minutes": minutes,
            "narcotics_needed": math.ceil(minutes / NARCOTIC_MINUTES * level / REFERENCE_LEVEL),
            "effectiveness": food.get("effectiveness"),
        },
        "calculations": {
            "level_multiplier": round(multiplier, 4),
            "base_quantity": base_quantity,
            "base_time": base_time,
        },
        "formula_verified": False,
    }


def optimal_foods(foods: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Foods ranked by effectiveness (then faster taming time)."""
    ranked = sorted(
        foods,
        key=lambda f: (-(f.get("effectiveness") or 0), f.get("taming_time_minutes") or 0, f["food_name"]),
    )
    return {
        "recommended": ranked[0] if ranked else None,
        "alternatives": ranked[1:4],
        "total_options": len(ranked),
    }
