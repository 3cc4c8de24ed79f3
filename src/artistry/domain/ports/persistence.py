"""Ports for persisting domain aggregates.

Every method returns fully materialized copies. Implementations must not hand out
lazy result cursors: callers issue follow-up queries on the same connection and the
store only supports one outstanding cursor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from artistry.domain.model import (
        Alias,
        CanonicalArtist,
        Overrides,
        Provider,
        ScraperConfig,
        Snapshot,
    )


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ArtistLookup(Protocol):
    """Read-only artist lookups used by identity matching."""

    def get_by_musicbrainz_id(self, mbid: str) -> CanonicalArtist | None: ...

    def get_by_provider_id(self, provider: Provider | str, value: str) -> CanonicalArtist | None:
        """Raise ``UnknownProviderError`` for providers without an identifier slot."""
        ...

    def find_by_name(self, name: str) -> Sequence[CanonicalArtist]:
        """Artists whose name or any alias equals ``name`` case-insensitively."""
        ...


@runtime_checkable
class DuplicateScanRepository(Protocol):
    """Two-phase duplicate scan queries: key collection, then one query per key."""

    def shared_musicbrainz_ids(self) -> Sequence[str]:
        """MusicBrainz ids held by more than one non-excluded artist, sorted."""
        ...

    def list_by_musicbrainz_id(self, mbid: str) -> Sequence[CanonicalArtist]:
        """Non-excluded artists holding ``mbid``, ordered by name."""
        ...

    def shared_alias_keys(self) -> Sequence[str]:
        """Lowercased alias texts used by at least two distinct artists, sorted."""
        ...

    def list_by_alias_key(self, key: str) -> Sequence[CanonicalArtist]:
        """Distinct artists with an alias equal to ``key`` case-insensitively, by name."""
        ...


@runtime_checkable
class ArtistRepository(
    Repository["CanonicalArtist"], ArtistLookup, DuplicateScanRepository, Protocol
):
    """Persistence contract for canonical artists."""

    def get(self, artist_id: UUID) -> CanonicalArtist | None: ...

    def update(self, artist: CanonicalArtist) -> None: ...


@runtime_checkable
class AliasRepository(Repository["Alias"], Protocol):
    """Persistence contract for artist aliases."""

    def get(self, alias_id: UUID) -> Alias | None: ...

    def remove(self, alias_id: UUID) -> bool: ...

    def list_for_artist(self, artist_id: UUID) -> Sequence[Alias]: ...


@runtime_checkable
class ScraperConfigRepository(Protocol):
    """Persistence contract for scraper configuration rows, keyed uniquely by scope."""

    def get(self, scope: str) -> tuple[ScraperConfig, Overrides] | None: ...

    def exists(self, scope: str) -> bool: ...

    def save(self, config: ScraperConfig, overrides: Overrides | None) -> ScraperConfig:
        """Insert or update the row for ``config.scope`` and return the stored copy."""
        ...

    def delete(self, scope: str) -> bool: ...


@runtime_checkable
class SnapshotRepository(Repository["Snapshot"], Protocol):
    """Append-only persistence contract for snapshots."""

    def get(self, snapshot_id: UUID) -> Snapshot | None: ...

    def list_for_artist(self, artist_id: UUID) -> Sequence[Snapshot]:
        """Snapshots for ``artist_id``, newest first."""
        ...
