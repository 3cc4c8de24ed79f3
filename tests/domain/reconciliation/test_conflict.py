from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest

from artistry.domain.reconciliation.conflict import ConflictGuard
from tests.helpers.fakes import FakeArtifactStore

WRITTEN_AT = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


def test_check_missing_artifact_has_no_conflict() -> None:
    result = ConflictGuard(FakeArtifactStore()).check("Radiohead/artist.nfo", WRITTEN_AT)

    assert result.has_conflict is False
    assert result.last_modified is None


def test_check_reports_modification_after_reference() -> None:
    modified = WRITTEN_AT + timedelta(minutes=5)
    store = FakeArtifactStore({"Radiohead/artist.nfo": modified})

    result = ConflictGuard(store).check("Radiohead/artist.nfo", WRITTEN_AT)

    assert result.has_conflict is True
    assert result.reason == "modified externally since last write"
    assert result.last_modified == modified
    assert result.external_writer is None


def test_check_equal_timestamp_is_not_a_conflict() -> None:
    store = FakeArtifactStore({"artist.nfo": WRITTEN_AT})

    result = ConflictGuard(store).check("artist.nfo", WRITTEN_AT)

    assert result.has_conflict is False
    assert result.last_modified == WRITTEN_AT


def test_check_logs_and_ignores_stat_failures(caplog: pytest.LogCaptureFixture) -> None:
    store = FakeArtifactStore({"artist.nfo": PermissionError("denied")})

    with caplog.at_level(logging.WARNING, logger="artistry.domain.reconciliation.conflict"):
        result = ConflictGuard(store).check("artist.nfo", WRITTEN_AT)

    assert result.has_conflict is False
    assert "artist.nfo" in caplog.text


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        (datetime(2025, 3, 1, 9, 0), True),  # noqa: DTZ001
        (datetime(2025, 3, 1, 10, 0), False),  # noqa: DTZ001
    ],
)
def test_check_treats_naive_reference_as_utc(reference: datetime, expected: bool) -> None:
    store = FakeArtifactStore({"artist.nfo": WRITTEN_AT})

    result = ConflictGuard(store).check("artist.nfo", reference)

    assert result.has_conflict is expected
    assert result.last_modified == WRITTEN_AT
