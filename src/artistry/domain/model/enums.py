"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class Provider(StrEnum):
    MUSICBRAINZ = "musicbrainz"
    FANARTTV = "fanarttv"
    AUDIODB = "audiodb"
    DISCOGS = "discogs"
    LASTFM = "lastfm"
    WIKIDATA = "wikidata"
    DEEZER = "deezer"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: Final[dict[Provider, str]] = {
    Provider.MUSICBRAINZ: "MusicBrainz",
    Provider.FANARTTV: "Fanart.tv",
    Provider.AUDIODB: "TheAudioDB",
    Provider.DISCOGS: "Discogs",
    Provider.LASTFM: "Last.fm",
    Provider.WIKIDATA: "Wikidata",
    Provider.DEEZER: "Deezer",
}


class MatchStrategy(StrEnum):
    """How the identity matcher weighs id-based against name-based signals."""

    PREFER_ID = "prefer_id"
    PREFER_NAME = "prefer_name"
    ALWAYS_PROMPT = "always_prompt"


class MatchType(StrEnum):
    """Which identifier class produced a resolution."""

    MBID = "mbid"
    AUDIODB = "audiodb"
    DISCOGS = "discogs"
    WIKIDATA = "wikidata"
    NAME = "name"


class FieldCategory(StrEnum):
    METADATA = "metadata"
    IMAGES = "images"


class FieldName(StrEnum):
    """Scrapeable metadata and image fields, in display order."""

    BIOGRAPHY = "biography"
    GENRES = "genres"
    STYLES = "styles"
    MOODS = "moods"
    MEMBERS = "members"
    FORMED = "formed"
    BORN = "born"
    DIED = "died"
    DISBANDED = "disbanded"
    THUMB = "thumb"
    FANART = "fanart"
    LOGO = "logo"
    BANNER = "banner"

    @property
    def category(self) -> FieldCategory:
        return category_for(self)


_IMAGE_FIELDS: Final[frozenset[FieldName]] = frozenset(
    {FieldName.THUMB, FieldName.FANART, FieldName.LOGO, FieldName.BANNER}
)


def category_for(field: FieldName) -> FieldCategory:
    """Return the fixed category a field belongs to."""

    if field in _IMAGE_FIELDS:
        return FieldCategory.IMAGES
    return FieldCategory.METADATA


class DiffStatus(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"
