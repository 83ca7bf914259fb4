"""Cross-entity search (``/api/search``)."""

from flask import Blueprint, request

from ..validation import SearchQuery
from .helpers import ok


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("search", __name__, url_prefix="/api/search")

    @bp.route("", methods=["GET"])
    def search():
        query = SearchQuery.from_args(request.args)
        page = ctx.repository.search(query)
        return ok(ctx, {"query": query.q, "type": query.type, "results": page.items}, pagination=page.pagination)

    return bp
