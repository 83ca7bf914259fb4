"""Creature catalogue endpoints (``/api/creatures``)."""

from flask import Blueprint, request

from ..validation import CreatureListQuery, CreatureSearchQuery
from .helpers import not_found, ok, paged


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("creatures", __name__, url_prefix="/api/creatures")

    @bp.route("", methods=["GET"])
    def list_creatures():
        query = CreatureListQuery.from_args(request.args)
        return paged(ctx, ctx.repository.list_creatures(query))

    @bp.route("/search", methods=["GET"])
    def search_creatures():
        """Name matches first (prefix before substring), then description matches."""
        query = CreatureSearchQuery.from_args(request.args)
        rows = ctx.repository.search_creatures(query.q, query.limit)
        return ok(ctx, rows, query=query.q, count=len(rows))

    @bp.route("/<slug>", methods=["GET"])
    def get_creature(slug):
        creature = ctx.repository.get_creature(slug)
        if creature is None:
            return not_found(f"Creature '{slug}' not found")
        return ok(ctx, creature)

    return bp
