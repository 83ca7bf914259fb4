"""Interactive map endpoints (``/api/interactive-maps``)."""

from flask import Blueprint, request

from ..services import interactive
from ..validation import LocationQuery, NearestQuery, RouteRequest, UserLocationRequest
from .helpers import not_found, ok


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("interactive_maps", __name__, url_prefix="/api/interactive-maps")

    @bp.route("/<slug>/interactive", methods=["GET"])
    def interactive_map(slug):
        map_row = ctx.repository.get_map(slug)
        if map_row is None:
            return not_found(f"Map '{slug}' not found")
        user_id = (request.args.get("user_id") or "").strip() or None
        locations = ctx.repository.list_locations(slug, LocationQuery(category=request.args.get("category") or None))
        return ok(
            ctx,
            {
                "map": map_row,
                "locations": locations,
                "user_locations": ctx.repository.list_user_locations(slug, user_id),
                "routes": ctx.repository.list_routes(slug),
            },
        )

    @bp.route("/<slug>/locations/<category>", methods=["GET"])
    def locations_by_category(slug, category):
        rows = ctx.repository.list_locations(slug, LocationQuery.from_args(request.args, category))
        if rows is None:
            return not_found(f"Map '{slug}' not found")
        return ok(ctx, rows, category=category, count=len(rows))

    @bp.route("/<slug>/user-locations", methods=["POST"])
    def add_user_location(slug):
        req = UserLocationRequest.from_json(request.get_json(silent=True))
        row = ctx.repository.add_user_location(slug, req)
        if row is None:
            return not_found(f"Map '{slug}' not found")
        return ok(ctx, row, status=201)

    @bp.route("/<slug>/nearest", methods=["GET"])
    def nearest(slug):
        query = NearestQuery.from_args(request.args)
        rows = ctx.repository.list_locations(slug, LocationQuery())
        if rows is None:
            return not_found(f"Map '{slug}' not found")
        found = interactive.nearest(rows, query.lat, query.lng, query.radius, query.category)
        return ok(ctx, found, center={"lat": query.lat, "lng": query.lng}, radius=query.radius, count=len(found))

    @bp.route("/<slug>/route", methods=["POST"])
    def plan_route(slug):
        req = RouteRequest.from_json(request.get_json(silent=True))
        if ctx.repository.get_map(slug) is None:
            return not_found(f"Map '{slug}' not found")
        return ok(ctx, interactive.plan_route(req.start, req.end, req.travel_mode))

    return bp
