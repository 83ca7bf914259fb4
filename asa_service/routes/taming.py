"""Taming endpoints (``/api/taming``)."""

from flask import Blueprint, request

from ..services import taming
from ..validation import TamingCalculationRequest
from .helpers import not_found, ok


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("taming", __name__, url_prefix="/api/taming")

    @bp.route("", methods=["GET"])
    def list_tameable():
        rows = ctx.repository.list_tameable()
        return ok(ctx, rows, count=len(rows))

    @bp.route("/calculate", methods=["POST"])
    def calculate():
        """Estimate food, time and narcotics for a creature level.

        Body: {"creature": "<slug>", "level": 1-500, "food": "<food name>"}
        The estimate is unverified (see ``formula_verified`` in the response).
        """
        req = TamingCalculationRequest.from_json(request.get_json(silent=True))
        creature, food = ctx.repository.find_taming_food(req.creature, req.food)
        if creature is None:
            return not_found(f"Creature '{req.creature}' not found")
        if food is None:
            return not_found(f"No taming data for '{req.food}' on {creature['name']}")
        return ok(ctx, taming.calculate(creature, food, req.level))

    @bp.route("/<slug>", methods=["GET"])
    def get_taming(slug):
        data = ctx.repository.get_taming(slug)
        if data is None:
            return not_found(f"Creature '{slug}' not found")
        if not data["tameable"]:
            return ok(
                ctx,
                {"creature": slug, "name": data["name"], "tameable": False, "message": "This creature cannot be tamed"},
            )
        return ok(ctx, data)

    @bp.route("/<slug>/optimal", methods=["GET"])
    def optimal(slug):
        data = ctx.repository.get_taming(slug)
        if data is None:
            return not_found(f"Creature '{slug}' not found")
        return ok(ctx, dict(taming.optimal_foods(data["foods"]), creature=slug))

    return bp
