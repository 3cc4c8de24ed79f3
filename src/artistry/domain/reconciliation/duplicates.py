"""Exact-key duplicate scans over canonical artists."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from artistry.domain.model import CanonicalArtist
    from artistry.domain.ports.persistence import DuplicateScanRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Artists sharing an exact identifier or alias. Always two or more members."""

    artists: tuple[CanonicalArtist, ...]
    reason: str

    def __post_init__(self) -> None:
        if len(self.artists) < 2:
            raise ValueError("A duplicate group needs at least two artists")


class DuplicateDetector:
    def __init__(self, repository: DuplicateScanRepository) -> None:
        self._repository = repository

    def find_duplicates(self) -> list[DuplicateGroup]:
        groups = [*self._shared_musicbrainz_ids(), *self._shared_aliases()]
        log.info("Duplicate scan found %d group(s)", len(groups))
        return groups

    def _shared_musicbrainz_ids(self) -> list[DuplicateGroup]:
        # keys are fully collected before any per-key query is issued
        mbids = list(self._repository.shared_musicbrainz_ids())
        groups: list[DuplicateGroup] = []
        for mbid in mbids:
            artists = tuple(self._repository.list_by_musicbrainz_id(mbid))
            if len(artists) > 1:
                groups.append(
                    DuplicateGroup(artists=artists, reason=f"shared MusicBrainz ID: {mbid}")
                )
        return groups

    def _shared_aliases(self) -> list[DuplicateGroup]:
        keys = list(self._repository.shared_alias_keys())
        groups: list[DuplicateGroup] = []
        for key in keys:
            artists = _unique(self._repository.list_by_alias_key(key))
            if len(artists) > 1:
                groups.append(DuplicateGroup(artists=artists, reason=f"shared alias: {key}"))
        return groups


def _unique(artists: Iterable[CanonicalArtist]) -> tuple[CanonicalArtist, ...]:
    seen: dict[UUID, CanonicalArtist] = {}
    for artist in artists:
        seen.setdefault(artist.id, artist)
    return tuple(seen.values())
