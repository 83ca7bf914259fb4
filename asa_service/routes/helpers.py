"""Response envelopes shared by the API blueprints."""

from flask import jsonify

from ..mock_data import MOCK_MESSAGE


def envelope(ctx, payload: dict) -> dict:
    out = {"success": True}
    out.update(payload)
    if ctx.is_mock:
        out["message"] = MOCK_MESSAGE
    return out


def ok(ctx, data, status: int = 200, **extra):
    return jsonify(envelope(ctx, dict(data=data, **extra))), status


def paged(ctx, page, **extra):
    return ok(ctx, page.items, pagination=page.pagination, **extra)


def not_found(message: str):
    return jsonify(success=False, error=message), 404


def database_unavailable():
    return jsonify(success=False, error="Database not available"), 503
