from .base import Page, Repository, build_pagination  # noqa: F401 re-export
from .mock import MockRepository  # noqa: F401
from .sql import SqlRepository  # noqa: F401

__all__ = ["MockRepository", "Page", "Repository", "SqlRepository", "build_pagination"]
