from __future__ import annotations

import pytest

from artistry.domain.model import MatchStrategy, MatchType
from artistry.domain.reconciliation.matching import (
    IDENTIFIER_RULES,
    IdentityMatcher,
    InvalidMatchConfigError,
    MatchConfig,
)
from tests.helpers.artists import make_alias, make_artist
from tests.helpers.fakes import FakeAliasRepository, FakeArtistRepository, InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def artists(store: InMemoryStore) -> FakeArtistRepository:
    return FakeArtistRepository(store)


@pytest.fixture
def matcher(artists: FakeArtistRepository) -> IdentityMatcher:
    return IdentityMatcher(artists)


def test_match_by_exact_id_returns_full_confidence(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    radiohead = make_artist("Radiohead", musicbrainz_id="a74b1b7f")
    artists.add(radiohead)

    result = matcher.match_by_exact_id("a74b1b7f")

    assert result is not None
    assert result.artist == radiohead
    assert result.confidence == 1.0
    assert result.match_type is MatchType.MBID
    assert result.source == "local_db"


def test_match_by_exact_id_skips_lookup_for_empty_id(
    store: InMemoryStore, matcher: IdentityMatcher
) -> None:
    assert matcher.match_by_exact_id("") is None
    assert store.lookups == []


def test_match_by_id_falls_through_to_next_provider(
    store: InMemoryStore, artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    artists.add(make_artist("Radiohead", audiodb_id="111239"))

    result = matcher.match_by_id({"musicbrainz": "unknown-mbid", "audiodb": "111239"})

    assert result is not None
    assert result.match_type is MatchType.AUDIODB
    assert result.confidence == 0.95
    assert store.lookups == ["musicbrainz:unknown-mbid", "audiodb:111239"]


def test_match_by_id_prefers_highest_priority_provider(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    by_mbid = make_artist("Radiohead", musicbrainz_id="mbid-1")
    by_discogs = make_artist("Radiohead (dupe)", discogs_id="3840")
    artists.add(by_mbid)
    artists.add(by_discogs)

    # mapping order must not matter
    result = matcher.match_by_id({"discogs": "3840", "musicbrainz": "mbid-1"})

    assert result is not None
    assert result.artist == by_mbid
    assert result.match_type is MatchType.MBID


def test_match_by_id_ignores_unknown_keys_and_empty_input(
    store: InMemoryStore, matcher: IdentityMatcher
) -> None:
    assert matcher.match_by_id({}) is None
    assert matcher.match_by_id({"spotify": "abc", "deezer": "42"}) is None
    assert store.lookups == []


def test_identifier_rules_are_strictly_ordered_by_confidence() -> None:
    confidences = [rule.confidence for rule in IDENTIFIER_RULES]

    assert confidences == sorted(confidences, reverse=True)
    assert len(set(confidences)) == len(confidences)
    assert [rule.match_type for rule in IDENTIFIER_RULES] == [
        MatchType.MBID,
        MatchType.AUDIODB,
        MatchType.DISCOGS,
        MatchType.WIKIDATA,
    ]


def test_match_by_name_matches_alias_case_insensitively(
    store: InMemoryStore, artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    prince = make_artist("Prince")
    artists.add(prince)
    FakeAliasRepository(store).add(make_alias(prince, "The Artist Formerly Known as Prince"))

    result = matcher.match_by_name("the artist formerly known as prince")

    assert result is not None
    assert result.artist == prince
    assert result.confidence == 0.80
    assert result.match_type is MatchType.NAME


def test_match_by_name_rejects_ambiguous_names(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    artists.add(make_artist("Nirvana", musicbrainz_id="uk-band"))
    artists.add(make_artist("Nirvana", musicbrainz_id="us-band"))

    assert matcher.match_by_name("Nirvana") is None


def test_match_by_name_blank_hint_does_not_query(
    store: InMemoryStore, matcher: IdentityMatcher
) -> None:
    assert matcher.match_by_name("   ") is None
    assert store.lookups == []


def test_prefer_id_rejects_candidates_below_threshold(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    artists.add(make_artist("Björk"))

    result = matcher.match({}, "Björk", MatchConfig(strategy=MatchStrategy.PREFER_ID))

    assert result is None


def test_prefer_id_accepts_name_match_when_threshold_lowered(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    bjork = make_artist("Björk")
    artists.add(bjork)

    result = matcher.match({}, "Björk", MatchConfig(min_confidence=0.8))

    assert result is not None
    assert result.artist == bjork


def test_prefer_id_uses_id_before_name(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    by_id = make_artist("Portishead", wikidata_id="Q191352")
    by_name = make_artist("Portishead (Bristol)")
    artists.add(by_id)
    artists.add(by_name)

    result = matcher.match({"wikidata": "Q191352"}, "Portishead (Bristol)", MatchConfig())

    assert result is not None
    assert result.artist == by_id
    assert result.confidence == 0.85


def test_always_prompt_returns_low_confidence_candidates(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    artists.add(make_artist("Massive Attack"))
    config = MatchConfig(strategy=MatchStrategy.ALWAYS_PROMPT, min_confidence=1.0)

    result = matcher.match({}, "massive attack", config)

    assert result is not None
    assert result.confidence == 0.80


def test_prefer_name_lets_name_win_over_id(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    by_id = make_artist("Tricky", musicbrainz_id="mbid-tricky")
    by_name = make_artist("Adrian Thaws")
    artists.add(by_id)
    artists.add(by_name)
    config = MatchConfig(strategy=MatchStrategy.PREFER_NAME, min_confidence=0.5)

    result = matcher.match({"musicbrainz": "mbid-tricky"}, "Adrian Thaws", config)

    assert result is not None
    assert result.artist == by_name
    assert result.match_type is MatchType.NAME


def test_prefer_name_falls_back_to_id_when_name_fails_threshold(
    artists: FakeArtistRepository, matcher: IdentityMatcher
) -> None:
    by_id = make_artist("Tricky", musicbrainz_id="mbid-tricky")
    artists.add(by_id)
    artists.add(make_artist("Adrian Thaws"))
    config = MatchConfig(strategy=MatchStrategy.PREFER_NAME)

    result = matcher.match({"musicbrainz": "mbid-tricky"}, "Adrian Thaws", config)

    assert result is not None
    assert result.artist == by_id
    assert result.match_type is MatchType.MBID


def test_match_uses_matcher_default_config() -> None:
    store = InMemoryStore()
    artists = FakeArtistRepository(store)
    artists.add(make_artist("Goldfrapp"))
    matcher = IdentityMatcher(artists, MatchConfig(strategy=MatchStrategy.ALWAYS_PROMPT))

    assert matcher.match({}, "Goldfrapp") is not None


@pytest.mark.parametrize("value", [-0.01, 1.01])
def test_match_config_rejects_out_of_range_confidence(value: float) -> None:
    with pytest.raises(InvalidMatchConfigError):
        MatchConfig(min_confidence=value)


def test_match_config_rejects_unknown_strategy() -> None:
    with pytest.raises(InvalidMatchConfigError):
        MatchConfig(strategy="prefer_vibes")  # type: ignore[arg-type]


def test_match_config_defaults() -> None:
    config = MatchConfig()

    assert config.strategy is MatchStrategy.PREFER_ID
    assert config.min_confidence == 0.85
