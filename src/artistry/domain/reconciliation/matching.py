"""Identity resolution of provider identifiers to canonical artists.

Candidates are searched in a fixed order: provider identifiers from the confidence
table first (first present identifier that resolves wins), then an exact name/alias
match. The configured strategy decides which candidate is offered and whether it
must clear ``min_confidence``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from artistry.domain.model import MatchStrategy, MatchType, Provider

if TYPE_CHECKING:
    from artistry.domain.model import CanonicalArtist
    from artistry.domain.ports.persistence import ArtistLookup

log = logging.getLogger(__name__)

SOURCE_LOCAL_DB: Final[str] = "local_db"
NAME_MATCH_CONFIDENCE: Final[float] = 0.80
DEFAULT_MIN_CONFIDENCE: Final[float] = 0.85


@dataclass(frozen=True, slots=True)
class IdentifierRule:
    provider: Provider
    match_type: MatchType
    confidence: float


# Walked in order; the first present identifier that resolves wins.
IDENTIFIER_RULES: Final[tuple[IdentifierRule, ...]] = (
    IdentifierRule(Provider.MUSICBRAINZ, MatchType.MBID, 1.00),
    IdentifierRule(Provider.AUDIODB, MatchType.AUDIODB, 0.95),
    IdentifierRule(Provider.DISCOGS, MatchType.DISCOGS, 0.90),
    IdentifierRule(Provider.WIKIDATA, MatchType.WIKIDATA, 0.85),
)


class InvalidMatchConfigError(ValueError):
    """Raised for match policies outside the accepted range or vocabulary."""


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Policy for accepting a resolution without operator confirmation."""

    strategy: MatchStrategy = MatchStrategy.PREFER_ID
    min_confidence: float = DEFAULT_MIN_CONFIDENCE

    def __post_init__(self) -> None:
        try:
            strategy = MatchStrategy(self.strategy)
        except ValueError as exc:
            raise InvalidMatchConfigError(f"Unknown match strategy: {self.strategy}") from exc
        object.__setattr__(self, "strategy", strategy)
        if not 0.0 <= self.min_confidence <= 1.0:
            raise InvalidMatchConfigError(
                f"min_confidence must be within [0, 1], got {self.min_confidence}"
            )


@dataclass(frozen=True, slots=True)
class MatchResult:
    artist: CanonicalArtist
    confidence: float
    match_type: MatchType
    source: str = SOURCE_LOCAL_DB


class IdentityMatcher:
    """Resolve provider identifiers and name hints against stored artists."""

    def __init__(self, lookup: ArtistLookup, config: MatchConfig | None = None) -> None:
        self._lookup = lookup
        self._config = config or MatchConfig()

    @property
    def config(self) -> MatchConfig:
        return self._config

    def match_by_exact_id(self, mbid: str) -> MatchResult | None:
        if not mbid:
            return None
        artist = self._lookup.get_by_musicbrainz_id(mbid)
        if artist is None:
            return None
        return MatchResult(artist=artist, confidence=1.0, match_type=MatchType.MBID)

    def match_by_id(self, ids: Mapping[str, str]) -> MatchResult | None:
        if not ids:
            return None
        for rule in IDENTIFIER_RULES:
            value = ids.get(rule.provider.value, "")
            if not value:
                continue
            if rule.provider is Provider.MUSICBRAINZ:
                artist = self._lookup.get_by_musicbrainz_id(value)
            else:
                artist = self._lookup.get_by_provider_id(rule.provider, value)
            if artist is not None:
                log.debug("Resolved %s id %s to artist %s", rule.provider, value, artist.id)
                return MatchResult(
                    artist=artist, confidence=rule.confidence, match_type=rule.match_type
                )
        return None

    def match_by_name(self, name_hint: str) -> MatchResult | None:
        """Exact, case-insensitive name or alias match; ambiguous hits yield ``None``."""

        hint = name_hint.strip()
        if not hint:
            return None
        candidates = {artist.id: artist for artist in self._lookup.find_by_name(hint)}
        if len(candidates) != 1:
            if candidates:
                log.debug("Name %r is ambiguous across %d artists", hint, len(candidates))
            return None
        (artist,) = candidates.values()
        return MatchResult(
            artist=artist, confidence=NAME_MATCH_CONFIDENCE, match_type=MatchType.NAME
        )

    def match(
        self,
        ids: Mapping[str, str],
        name_hint: str = "",
        config: MatchConfig | None = None,
    ) -> MatchResult | None:
        """Return the candidate the strategy accepts, or ``None`` when nothing qualifies."""

        policy = config or self._config
        if policy.strategy is MatchStrategy.PREFER_NAME:
            return self._prefer_name(ids, name_hint, policy)

        candidate = self.match_by_id(ids) or self.match_by_name(name_hint)
        if candidate is None:
            return None
        if policy.strategy is MatchStrategy.ALWAYS_PROMPT:
            return candidate
        if candidate.confidence < policy.min_confidence:
            log.debug(
                "Rejected %s match at %.2f below threshold %.2f",
                candidate.match_type,
                candidate.confidence,
                policy.min_confidence,
            )
            return None
        return candidate

    def _prefer_name(
        self, ids: Mapping[str, str], name_hint: str, policy: MatchConfig
    ) -> MatchResult | None:
        by_name = self.match_by_name(name_hint)
        if by_name is not None and by_name.confidence >= policy.min_confidence:
            return by_name
        by_id = self.match_by_id(ids)
        if by_id is not None and by_id.confidence >= policy.min_confidence:
            return by_id
        return None
