"""Map endpoints (``/api/maps``) and per-map sub-resources."""

from flask import Blueprint, request

from ..validation import MAP_CHILD_FILTERS, MapChildQuery, MapListQuery
from .helpers import not_found, ok, paged


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("maps", __name__, url_prefix="/api/maps")

    @bp.route("", methods=["GET"])
    def list_maps():
        query = MapListQuery.from_args(request.args)
        return paged(ctx, ctx.repository.list_maps(query))

    @bp.route("/<slug>", methods=["GET"])
    def get_map(slug):
        row = ctx.repository.get_map(slug)
        if row is None:
            return not_found(f"Map '{slug}' not found")
        return ok(ctx, row)

    def _children_view(kind: str):
        def view(slug):
            query = MapChildQuery.from_args(kind, request.args)
            rows = ctx.repository.list_map_children(slug, query)
            if rows is None:
                return not_found(f"Map '{slug}' not found")
            return ok(ctx, rows, map=slug, count=len(rows))

        return view

    for kind in MAP_CHILD_FILTERS:
        bp.add_url_rule(
            f"/<slug>/{kind}",
            endpoint=f"map_{kind.replace('-', '_')}",
            view_func=_children_view(kind),
            methods=["GET"],
        )

    return bp
