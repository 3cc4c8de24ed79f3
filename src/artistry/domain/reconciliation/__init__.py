"""Identity resolution and metadata reconciliation services."""

from __future__ import annotations

from .aliases import AliasNotFoundError, AliasService, ArtistNotFoundError, InvalidAliasError
from .conflict import ConflictCheck, ConflictGuard
from .diff import DiffResult, FieldDiff, diff
from .duplicates import DuplicateDetector, DuplicateGroup
from .field_resolution import FieldResolution, FieldSource, resolve_fields
from .matching import (
    IdentityMatcher,
    InvalidMatchConfigError,
    MatchConfig,
    MatchResult,
)
from .scraper_config import (
    ConfigNotSeededError,
    GlobalScopeResetError,
    ScraperConfigService,
    StoredConfigError,
    merge_configs,
)
from .snapshots import SnapshotNotFoundError, SnapshotStore

__all__ = [
    "AliasNotFoundError",
    "AliasService",
    "ArtistNotFoundError",
    "ConfigNotSeededError",
    "ConflictCheck",
    "ConflictGuard",
    "DiffResult",
    "DuplicateDetector",
    "DuplicateGroup",
    "FieldDiff",
    "FieldResolution",
    "FieldSource",
    "GlobalScopeResetError",
    "IdentityMatcher",
    "InvalidAliasError",
    "InvalidMatchConfigError",
    "MatchConfig",
    "MatchResult",
    "ScraperConfigService",
    "SnapshotNotFoundError",
    "SnapshotStore",
    "StoredConfigError",
    "diff",
    "merge_configs",
    "resolve_fields",
]
