"""Reconciled artist record as rendered for media servers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(kw_only=True)
class ArtistRecord:
    """One version of a reconciled artist record.

    Multi-valued fields keep provider order; two records listing the same genres in a
    different order are different versions.
    """

    name: str = ""
    sort_name: str = ""
    type: str = ""
    gender: str = ""
    disambiguation: str = ""
    musicbrainz_id: str = ""
    audiodb_id: str = ""
    years_active: str = ""
    born: str = ""
    formed: str = ""
    died: str = ""
    disbanded: str = ""
    biography: str = ""
    genres: list[str] = field(default_factory=list[str])
    styles: list[str] = field(default_factory=list[str])
    moods: list[str] = field(default_factory=list[str])
