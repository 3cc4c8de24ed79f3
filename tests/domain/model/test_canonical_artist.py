from __future__ import annotations

import pytest

from artistry.domain.model import (
    Alias,
    CanonicalArtist,
    Provider,
    UnknownProviderError,
    identifier_provider,
)
from tests.helpers.artists import make_artist


def test_artists_compare_by_identity() -> None:
    first = make_artist("Portishead")
    renamed = CanonicalArtist(id=first.id, name="Portishead (band)")

    assert first == renamed
    assert first != make_artist("Portishead")
    assert len({first, renamed}) == 1


def test_identifiers_only_lists_non_empty_values() -> None:
    artist = make_artist("Björk", musicbrainz_id="87c5dedd", discogs_id="")

    assert artist.identifiers == {Provider.MUSICBRAINZ: "87c5dedd"}


def test_set_identifier_trims_and_routes_to_provider_slot() -> None:
    artist = make_artist("Björk")

    artist.set_identifier("wikidata", "  Q42455 ")

    assert artist.wikidata_id == "Q42455"
    assert artist.identifier_for(Provider.WIKIDATA) == "Q42455"


@pytest.mark.parametrize("name", ["fanarttv", "spotify", "name; DROP TABLE artist"])
def test_identifier_provider_rejects_unknown_names(name: str) -> None:
    with pytest.raises(UnknownProviderError) as excinfo:
        identifier_provider(name)

    assert excinfo.value.provider == name


def test_exclude_and_include_toggle_reason() -> None:
    artist = make_artist("Various Artists")

    artist.exclude("compilation placeholder")
    assert artist.is_excluded is True
    assert artist.exclusion_reason == "compilation placeholder"

    artist.include()
    assert artist.is_excluded is False
    assert artist.exclusion_reason == ""


def test_alias_rejects_blank_text() -> None:
    artist = make_artist("Prince")

    with pytest.raises(ValueError, match="empty"):
        Alias(artist_id=artist.id, text="  ")
