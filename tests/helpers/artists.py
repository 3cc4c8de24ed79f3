from __future__ import annotations

from datetime import UTC, datetime, timedelta

from artistry.domain.model import Alias, CanonicalArtist

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


def make_artist(name: str, **kwargs: object) -> CanonicalArtist:
    return CanonicalArtist(name=name, **kwargs)  # type: ignore[arg-type]


def make_alias(artist: CanonicalArtist, text: str, source: str = "test") -> Alias:
    return Alias(artist_id=artist.id, text=text, source=source)


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self._current = start

    def __call__(self) -> datetime:
        value = self._current
        self._current = value + timedelta(seconds=1)
        return value
