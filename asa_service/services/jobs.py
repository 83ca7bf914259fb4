"""Background population jobs.

Admin requests enqueue a job and return its id immediately; a single daemon
worker drains the queue so population runs never overlap. Each job's state is
persisted in ``population_jobs`` so it can be polled over HTTP.
"""

from __future__ import annotations

import queue
import threading
import uuid
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..logging_utils import get_logger
from ..models import PopulationJob
from ..models.models import utcnow

log = get_logger("asa_service.jobs")

_STOP = "__exit__"
# Completion events kept for late wait() callers
KEEP_FINISHED = 100


class JobQueue:
    def __init__(self, app, population_factory: Callable[[], object]):
        self.app = app
        self.population_factory = population_factory
        self._queue: "queue.Queue[str]" = queue.Queue()
        self._done: Dict[str, threading.Event] = {}
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(target=self._drain, name="population-worker", daemon=True)
                self._worker.start()

    def submit(self, kind: str) -> Dict:
        job = PopulationJob(job_id=uuid.uuid4().hex, kind=kind, status="queued")
        db.session.add(job)
        db.session.commit()
        with self._lock:
            self._done[job.job_id] = threading.Event()
        self._queue.put(job.job_id)
        self._ensure_worker()
        log.info(event="job_queued", job_id=job.job_id, kind=kind)
        return job.to_dict()

    def get(self, job_id: str) -> Optional[Dict]:
        # The worker commits from its own session; refresh cached rows
        job = PopulationJob.query.filter_by(job_id=job_id).populate_existing().first()
        return job.to_dict() if job else None

    def recent(self, limit: int = 20) -> List[Dict]:
        rows = PopulationJob.query.order_by(PopulationJob.id.desc()).limit(limit).populate_existing().all()
        return [r.to_dict() for r in rows]

    def wait(self, job_id: str, timeout: Optional[float] = None) -> bool:
        """Block until the job finishes; False on timeout or unknown id."""
        event = self._done.get(job_id)
        return bool(event and event.wait(timeout))

    def shutdown(self, timeout: Optional[float] = 5.0) -> None:
        if self._worker is not None and self._worker.is_alive():
            self._queue.put(_STOP)
            self._worker.join(timeout)

    def _drain(self) -> None:
        while True:
            job_id = self._queue.get()
            if job_id == _STOP:
                break
            try:
                with self.app.app_context():
                    try:
                        self._run(job_id)
                    finally:
                        db.session.remove()
            except Exception as exc:
                log.error(event="job_crashed", job_id=job_id, error=str(exc))
                self._mark_crashed(job_id, exc)
            finally:
                self._finished(job_id)

    def _finished(self, job_id: str) -> None:
        with self._lock:
            event = self._done.get(job_id)
            finished = [jid for jid, ev in self._done.items() if ev.is_set() or jid == job_id]
            for jid in finished[: max(len(finished) - KEEP_FINISHED, 0)]:
                del self._done[jid]
            if event is not None:
                event.set()

    def _mark_crashed(self, job_id: str, exc: Exception) -> None:
        with self.app.app_context():
            try:
                self._finish(job_id, status="error", message=str(exc))
            except SQLAlchemyError as db_exc:
                log.error(event="job_state_lost", job_id=job_id, error=str(db_exc).splitlines()[0])
            finally:
                db.session.remove()

    def _finish(self, job_id: str, **fields) -> None:
        # The row disappears when the schema is reset mid-run
        job = PopulationJob.query.filter_by(job_id=job_id).first()
        if job is None:
            log.warn(event="job_missing", job_id=job_id)
            return
        for key, value in fields.items():
            setattr(job, key, value)
        job.finished_at = utcnow()
        db.session.commit()

    def _run(self, job_id: str) -> None:
        job = PopulationJob.query.filter_by(job_id=job_id).first()
        if job is None:
            log.warn(event="job_missing", job_id=job_id)
            return
        kind = job.kind
        job.status = "running"
        job.started_at = utcnow()
        db.session.commit()
        log.info(event="job_started", job_id=job_id, kind=kind)
        try:
            result = self.population_factory().run(kind)
        except Exception as exc:
            db.session.rollback()
            log.error(event="job_failed", job_id=job_id, error=str(exc))
            self._finish(job_id, status="error", message=str(exc))
            return
        log.info(event="job_complete", job_id=job_id, **result)
        self._finish(job_id, status="complete", result=result, message=f"{kind} population finished")
