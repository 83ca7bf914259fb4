"""Health, docs and root endpoints."""

from datetime import datetime, timezone

from flask import Blueprint, jsonify

from .. import __version__
from .catalog import ENDPOINTS, available_endpoints
from .helpers import envelope


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("health", __name__)

    def _database():
        if ctx.is_mock:
            return {"connected": False, "status": ctx.database_status, "details": None}
        report = ctx.initializer.health_check()
        return {
            "connected": report["healthy"],
            "status": "healthy" if report["healthy"] else "unreachable",
            "details": report,
        }

    @bp.route("/api/health", methods=["GET"])
    def health():
        database = _database()
        degraded = not ctx.is_mock and not database["connected"]
        body = {
            "status": "degraded" if degraded else "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "database": database,
            "services": {
                "api": "running",
                "data_source": "mock" if ctx.is_mock else "database",
                "population_jobs": "disabled" if ctx.jobs is None else "available",
            },
            "uptime": ctx.uptime(),
            "environment": ctx.settings.environment,
        }
        return jsonify(body), 503 if degraded else 200

    @bp.route("/api/docs", methods=["GET"])
    def docs():
        return jsonify(
            envelope(
                ctx,
                {
                    "name": "ASA Service API",
                    "version": __version__,
                    "pagination": "page (default 1), limit (default 20, max 100)",
                    "endpoints": ENDPOINTS,
                },
            )
        )

    @bp.route("/", methods=["GET"])
    def index():
        return jsonify(
            envelope(
                ctx,
                {
                    "name": "ASA Service API",
                    "version": __version__,
                    "description": "ARK: Survival Ascended reference data: creatures, maps, regions and taming",
                    "environment": ctx.settings.environment,
                    "documentation": "/api/docs",
                    "health": "/api/health",
                    "endpoints": available_endpoints(),
                },
            )
        )

    return bp
