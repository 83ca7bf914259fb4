"""Region endpoints (``/api/regions``)."""

from flask import Blueprint, request

from ..validation import MAX_ID, RegionListQuery
from .helpers import not_found, ok, paged


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("regions", __name__, url_prefix="/api/regions")

    @bp.route("", methods=["GET"])
    def list_regions():
        query = RegionListQuery.from_args(request.args)
        page = ctx.repository.list_regions(query)
        if page is None:
            return not_found(f"Map '{query.map_slug or query.map_id}' not found")
        return paged(ctx, page)

    @bp.route("/<int:region_id>", methods=["GET"])
    def get_region(region_id):
        region = ctx.repository.get_region(region_id) if region_id <= MAX_ID else None
        if region is None:
            return not_found(f"Region with id '{region_id}' not found")
        return ok(ctx, region)

    return bp
