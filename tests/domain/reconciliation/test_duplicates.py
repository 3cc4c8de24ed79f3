from __future__ import annotations

import pytest

from artistry.domain.reconciliation.duplicates import DuplicateDetector, DuplicateGroup
from tests.helpers.artists import make_alias, make_artist
from tests.helpers.fakes import FakeAliasRepository, FakeArtistRepository, InMemoryStore


def test_find_duplicates_groups_shared_musicbrainz_ids() -> None:
    store = InMemoryStore()
    artists = FakeArtistRepository(store)
    zeta = make_artist("Zeta", musicbrainz_id="X")
    alpha = make_artist("Alpha", musicbrainz_id="X")
    artists.add(zeta)
    artists.add(alpha)
    artists.add(make_artist("Solo", musicbrainz_id="Y"))

    groups = DuplicateDetector(artists).find_duplicates()

    assert len(groups) == 1
    assert groups[0].reason == "shared MusicBrainz ID: X"
    assert [artist.name for artist in groups[0].artists] == ["Alpha", "Zeta"]


def test_find_duplicates_ignores_excluded_artists_for_identifier_scan() -> None:
    store = InMemoryStore()
    artists = FakeArtistRepository(store)
    artists.add(make_artist("Alpha", musicbrainz_id="X"))
    excluded = make_artist("Beta", musicbrainz_id="X")
    excluded.exclude("various artists placeholder")
    artists.add(excluded)

    assert DuplicateDetector(artists).find_duplicates() == []


def test_find_duplicates_groups_shared_aliases_once_per_artist() -> None:
    store = InMemoryStore()
    artists = FakeArtistRepository(store)
    aliases = FakeAliasRepository(store)
    first = make_artist("Prince")
    second = make_artist("Symbol")
    artists.add(first)
    artists.add(second)
    aliases.add(make_alias(first, "TAFKAP"))
    aliases.add(make_alias(first, "tafkap"))
    aliases.add(make_alias(second, "Tafkap"))

    groups = DuplicateDetector(artists).find_duplicates()

    assert len(groups) == 1
    assert groups[0].reason == "shared alias: tafkap"
    assert [artist.name for artist in groups[0].artists] == ["Prince", "Symbol"]


def test_find_duplicates_lists_identifier_groups_before_alias_groups() -> None:
    store = InMemoryStore()
    artists = FakeArtistRepository(store)
    aliases = FakeAliasRepository(store)
    a = make_artist("A", musicbrainz_id="m-2")
    b = make_artist("B", musicbrainz_id="m-2")
    c = make_artist("C", musicbrainz_id="m-1")
    d = make_artist("D", musicbrainz_id="m-1")
    for artist in (a, b, c, d):
        artists.add(artist)
    aliases.add(make_alias(a, "shared"))
    aliases.add(make_alias(d, "Shared"))

    reasons = [group.reason for group in DuplicateDetector(artists).find_duplicates()]

    assert reasons == [
        "shared MusicBrainz ID: m-1",
        "shared MusicBrainz ID: m-2",
        "shared alias: shared",
    ]


def test_find_duplicates_single_alias_owner_is_not_a_group() -> None:
    store = InMemoryStore()
    artists = FakeArtistRepository(store)
    lone = make_artist("Lone")
    artists.add(lone)
    FakeAliasRepository(store).add(make_alias(lone, "Only Me"))

    assert DuplicateDetector(artists).find_duplicates() == []


def test_duplicate_group_requires_two_artists() -> None:
    with pytest.raises(ValueError, match="at least two"):
        DuplicateGroup(artists=(make_artist("Alone"),), reason="shared alias: alone")
