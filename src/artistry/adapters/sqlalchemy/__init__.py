"""SQLAlchemy adapter package for artistry."""

from __future__ import annotations

from .mappings import metadata
from .repositories import (
    SqlAlchemyAliasRepository,
    SqlAlchemyArtistRepository,
    SqlAlchemyScraperConfigRepository,
    SqlAlchemySnapshotRepository,
)
from .unit_of_work import (
    SqlAlchemyReconciliationUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAliasRepository",
    "SqlAlchemyArtistRepository",
    "SqlAlchemyReconciliationUnitOfWork",
    "SqlAlchemyScraperConfigRepository",
    "SqlAlchemySnapshotRepository",
    "StartupError",
    "metadata",
    "shutdown",
    "startup",
]
