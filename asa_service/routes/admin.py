"""Admin routes: population jobs and database maintenance (``/api/admin``).

Population runs in the background: ``populate-data`` and ``sync-data`` queue a
job and answer 202 with its id, which can then be polled under ``jobs/``.
Endpoints that write to the database answer 503 while the service is running
on mock data; validation and index refresh answer from the mock dataset.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import Blueprint, jsonify, request

from ..database import VALIDATED_TABLES
from ..logging_utils import get_logger
from ..validation import PopulateRequest
from .helpers import database_unavailable, not_found, ok

log = get_logger("asa_service.admin")


def build_blueprint(ctx) -> Blueprint:
    bp = Blueprint("admin", __name__, url_prefix="/api/admin")

    def database_required(fn: Callable):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if ctx.is_mock or ctx.jobs is None:
                return database_unavailable()
            return fn(*args, **kwargs)

        return wrapper

    def _queued(job):
        body = {"success": True, "message": f"Population job queued ({job['kind']})", "job_id": job["job_id"], "data": job}
        return jsonify(body), 202

    @bp.route("/population-status", methods=["GET"])
    def population_status():
        if ctx.is_mock:
            status = {"status": "mock", "message": "Database not connected"}
            return ok(ctx, {"counts": ctx.repository.counts(), "status": status})
        return ok(ctx, ctx.population().get_population_status())

    @bp.route("/populate-data", methods=["POST"])
    @database_required
    def populate_data():
        req = PopulateRequest.from_json(request.get_json(silent=True))
        log.info(event="populate_requested", type=req.type, client=request.remote_addr)
        return _queued(ctx.jobs.submit(req.type))

    @bp.route("/sync-data", methods=["POST"])
    @database_required
    def sync_data():
        log.info(event="sync_requested", client=request.remote_addr)
        return _queued(ctx.jobs.submit("all"))

    @bp.route("/jobs", methods=["GET"])
    @database_required
    def list_jobs():
        rows = ctx.jobs.recent()
        return ok(ctx, rows, count=len(rows))

    @bp.route("/jobs/<job_id>", methods=["GET"])
    @database_required
    def get_job(job_id):
        job = ctx.jobs.get(job_id)
        if job is None:
            return not_found(f"Job '{job_id}' not found")
        return ok(ctx, job)

    @bp.route("/validate-database", methods=["POST"])
    def validate_database():
        if ctx.is_mock:
            counts = ctx.repository.counts()
            tables = {name: {"total": counts[name], "valid": counts[name], "issues": 0} for name in VALIDATED_TABLES}
            return ok(ctx, tables, total_records=sum(t["total"] for t in tables.values()))
        report = ctx.initializer.validate_data()
        return ok(ctx, report["tables"], total_records=report["total_records"])

    @bp.route("/stats", methods=["GET"])
    def stats():
        counts = ctx.repository.counts()
        return ok(ctx, counts, total_records=sum(counts.values()))

    @bp.route("/refresh-indexes", methods=["POST"])
    def refresh_indexes():
        if ctx.is_mock:
            return ok(ctx, {"refreshed": False, "note": "Mock data is searched in memory; no indexes to refresh"})
        ctx.initializer.refresh_search_indexes()
        return ok(ctx, None, message="Search indexes refreshed")

    @bp.route("/reset-database", methods=["POST"])
    @database_required
    def reset_database():
        log.warn(event="reset_requested", client=request.remote_addr)
        ctx.initializer.drop_schema()
        ctx.initializer.create_schema()
        maps = ctx.population().populate_maps()
        return ok(ctx, {"maps": maps}, message="Database reset; maps re-seeded")

    return bp
