"""Public domain model surface."""

from __future__ import annotations

from artistry.domain.model.artist import (
    IDENTIFIER_ATTRIBUTES,
    Alias,
    CanonicalArtist,
    UnknownProviderError,
    identifier_provider,
)
from artistry.domain.model.audit import Snapshot
from artistry.domain.model.entity import Entity
from artistry.domain.model.enums import (
    DiffStatus,
    FieldCategory,
    FieldName,
    MatchStrategy,
    MatchType,
    Provider,
    category_for,
)
from artistry.domain.model.record import ArtistRecord
from artistry.domain.model.scraper import (
    SCOPE_GLOBAL,
    FallbackChain,
    FieldConfig,
    Overrides,
    ScraperConfig,
    default_config,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # artists
    "CanonicalArtist",
    "Alias",
    "IDENTIFIER_ATTRIBUTES",
    "UnknownProviderError",
    "identifier_provider",
    # records and audit
    "ArtistRecord",
    "Snapshot",
    # scraper configuration
    "SCOPE_GLOBAL",
    "FieldConfig",
    "FallbackChain",
    "ScraperConfig",
    "Overrides",
    "default_config",
    # enums
    "DiffStatus",
    "FieldCategory",
    "FieldName",
    "MatchStrategy",
    "MatchType",
    "Provider",
    "category_for",
]
