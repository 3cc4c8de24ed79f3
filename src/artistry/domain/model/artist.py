"""Canonical artist records and their alternate names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final
from uuid import UUID

from artistry.domain.model.entity import Entity, utcnow
from artistry.domain.model.enums import Provider

if TYPE_CHECKING:
    from datetime import datetime


class UnknownProviderError(ValueError):
    """Raised when a provider name has no identifier slot on canonical artists."""

    def __init__(self, provider: object) -> None:
        self.provider = provider
        super().__init__(f"Unknown provider: {provider}")


IDENTIFIER_ATTRIBUTES: Final[dict[Provider, str]] = {
    Provider.MUSICBRAINZ: "musicbrainz_id",
    Provider.AUDIODB: "audiodb_id",
    Provider.DISCOGS: "discogs_id",
    Provider.WIKIDATA: "wikidata_id",
    Provider.LASTFM: "lastfm_id",
    Provider.DEEZER: "deezer_id",
}


def identifier_provider(name: str | Provider) -> Provider:
    """Validate ``name`` against the closed set of identifier-bearing providers."""

    try:
        provider = Provider(name)
    except ValueError as exc:
        raise UnknownProviderError(name) from exc
    if provider not in IDENTIFIER_ATTRIBUTES:
        raise UnknownProviderError(name)
    return provider


@dataclass(eq=False, kw_only=True)
class CanonicalArtist(Entity):
    """The single reconciled record representing one real-world artist."""

    name: str
    sort_name: str = ""

    musicbrainz_id: str = ""
    audiodb_id: str = ""
    discogs_id: str = ""
    wikidata_id: str = ""
    lastfm_id: str = ""
    deezer_id: str = ""

    is_excluded: bool = False
    exclusion_reason: str = ""

    # field name -> provider that supplied the current value
    metadata_sources: dict[str, str] = field(default_factory=dict[str, str])

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def identifier_for(self, provider: str | Provider) -> str:
        return getattr(self, IDENTIFIER_ATTRIBUTES[identifier_provider(provider)])

    def set_identifier(self, provider: str | Provider, value: str) -> None:
        setattr(self, IDENTIFIER_ATTRIBUTES[identifier_provider(provider)], value.strip())

    @property
    def identifiers(self) -> dict[Provider, str]:
        """Non-empty provider identifiers, keyed by provider."""
        values = {provider: getattr(self, attr) for provider, attr in IDENTIFIER_ATTRIBUTES.items()}
        return {provider: value for provider, value in values.items() if value}

    def exclude(self, reason: str = "") -> None:
        self.is_excluded = True
        self.exclusion_reason = reason

    def include(self) -> None:
        self.is_excluded = False
        self.exclusion_reason = ""


@dataclass(eq=False, kw_only=True)
class Alias(Entity):
    """Alternate name for an artist. Duplicate texts across artists are allowed."""

    artist_id: UUID
    text: str
    source: str = ""
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("Alias text must not be empty")
