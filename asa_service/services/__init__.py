from .jobs import JobQueue  # noqa: F401 re-export
from .population import DataPopulationService, parse_time  # noqa: F401
from .upsert import UnsupportedDialect, upsert  # noqa: F401

__all__ = ["DataPopulationService", "JobQueue", "UnsupportedDialect", "parse_time", "upsert"]
