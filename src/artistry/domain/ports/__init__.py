"""Domain port definitions for adapters."""

from __future__ import annotations

from .artifacts import ArtifactStore
from .persistence import (
    AliasRepository,
    ArtistLookup,
    ArtistRepository,
    DuplicateScanRepository,
    Repository,
    ScraperConfigRepository,
    SnapshotRepository,
)
from .unit_of_work import (
    ReconciliationRepositories,
    ReconciliationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AliasRepository",
    "ArtifactStore",
    "ArtistLookup",
    "ArtistRepository",
    "DuplicateScanRepository",
    "ReconciliationRepositories",
    "ReconciliationUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "ScraperConfigRepository",
    "SnapshotRepository",
    "UnitOfWork",
]
