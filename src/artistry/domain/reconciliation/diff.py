"""Field-level comparison of two versions of a reconciled artist record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from artistry.domain.model import DiffStatus

if TYPE_CHECKING:
    from artistry.domain.model import ArtistRecord

# label, attribute
DIFF_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("Name", "name"),
    ("Sort Name", "sort_name"),
    ("Type", "type"),
    ("Gender", "gender"),
    ("Disambiguation", "disambiguation"),
    ("MusicBrainz ID", "musicbrainz_id"),
    ("AudioDB ID", "audiodb_id"),
    ("Years Active", "years_active"),
    ("Born", "born"),
    ("Formed", "formed"),
    ("Died", "died"),
    ("Disbanded", "disbanded"),
    ("Biography", "biography"),
    ("Genres", "genres"),
    ("Styles", "styles"),
    ("Moods", "moods"),
)

LIST_SEPARATOR: Final[str] = ", "


@dataclass(frozen=True, slots=True)
class FieldDiff:
    field: str
    old_value: str
    new_value: str
    status: DiffStatus


@dataclass(frozen=True, slots=True)
class DiffResult:
    fields: tuple[FieldDiff, ...]

    @property
    def has_diff(self) -> bool:
        return any(entry.status is not DiffStatus.UNCHANGED for entry in self.fields)

    @property
    def changed(self) -> tuple[FieldDiff, ...]:
        return tuple(entry for entry in self.fields if entry.status is not DiffStatus.UNCHANGED)


def _render(record: ArtistRecord | None, attribute: str) -> str:
    if record is None:
        return ""
    value = getattr(record, attribute)
    if isinstance(value, list):
        return LIST_SEPARATOR.join(value)
    return value


def _classify(old: str, new: str) -> DiffStatus:
    if old == new:
        return DiffStatus.UNCHANGED
    if not old:
        return DiffStatus.ADDED
    if not new:
        return DiffStatus.REMOVED
    return DiffStatus.CHANGED


def diff(old: ArtistRecord | None, new: ArtistRecord | None) -> DiffResult:
    """Compare every tracked field; a missing record counts as all fields empty."""

    entries = []
    for label, attribute in DIFF_FIELDS:
        old_value = _render(old, attribute)
        new_value = _render(new, attribute)
        entries.append(
            FieldDiff(
                field=label,
                old_value=old_value,
                new_value=new_value,
                status=_classify(old_value, new_value),
            )
        )
    return DiffResult(fields=tuple(entries))
