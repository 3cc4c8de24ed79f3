from __future__ import annotations

from artistry.domain.model import ArtistRecord, DiffStatus
from artistry.domain.reconciliation.diff import DIFF_FIELDS, diff


def _record(**kwargs: object) -> ArtistRecord:
    return ArtistRecord(**kwargs)  # type: ignore[arg-type]


def test_diff_identical_records_has_no_diff() -> None:
    record = _record(name="Radiohead", genres=["Alternative Rock", "Art Rock"])

    result = diff(record, record)

    assert result.has_diff is False
    assert all(entry.status is DiffStatus.UNCHANGED for entry in result.fields)
    assert [entry.field for entry in result.fields] == [label for label, _ in DIFF_FIELDS]


def test_diff_from_nothing_marks_values_added() -> None:
    result = diff(None, _record(name="Radiohead", biography="Formed 1985."))

    by_field = {entry.field: entry for entry in result.fields}
    assert result.has_diff is True
    assert by_field["Name"].status is DiffStatus.ADDED
    assert by_field["Biography"].status is DiffStatus.ADDED
    assert by_field["Genres"].status is DiffStatus.UNCHANGED


def test_diff_classifies_removed_and_changed_fields() -> None:
    old = _record(name="Radiohead", born="1985", genres=["Rock"])
    new = _record(name="Radiohead", genres=["Rock", "Electronic"])

    changed = {entry.field: entry for entry in diff(old, new).changed}

    assert set(changed) == {"Born", "Genres"}
    assert changed["Born"].status is DiffStatus.REMOVED
    assert changed["Genres"].status is DiffStatus.CHANGED
    assert changed["Genres"].old_value == "Rock"
    assert changed["Genres"].new_value == "Rock, Electronic"


def test_diff_multi_valued_order_matters() -> None:
    old = _record(styles=["Trip Hop", "Downtempo"])
    new = _record(styles=["Downtempo", "Trip Hop"])

    assert diff(old, new).has_diff is True


def test_diff_both_missing_has_no_diff() -> None:
    assert diff(None, None).has_diff is False
