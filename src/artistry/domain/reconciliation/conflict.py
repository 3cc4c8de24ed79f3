"""Detection of external edits to previously written artifacts.

This is a timestamp heuristic: a write between ``check`` and the caller's own write
is not detected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

    from artistry.domain.ports.artifacts import ArtifactStore

log = logging.getLogger(__name__)

REASON_MODIFIED_EXTERNALLY: Final[str] = "modified externally since last write"


@dataclass(frozen=True, slots=True)
class ConflictCheck:
    has_conflict: bool
    reason: str | None = None
    last_modified: datetime | None = None
    external_writer: str | None = None


class ConflictGuard:
    def __init__(self, artifact_store: ArtifactStore) -> None:
        self._store = artifact_store

    def check(self, ref: str, reference_time: datetime) -> ConflictCheck:
        """Report whether ``ref`` changed after ``reference_time`` (naive means UTC)."""

        if reference_time.tzinfo is None:
            reference_time = reference_time.replace(tzinfo=UTC)

        try:
            modified = self._store.stat(ref)
        except OSError as exc:
            log.warning("Could not stat %s for conflict check: %s", ref, exc)
            return ConflictCheck(has_conflict=False)

        if modified is None:
            return ConflictCheck(has_conflict=False)
        if modified > reference_time:
            log.info("Artifact %s modified at %s after %s", ref, modified, reference_time)
            return ConflictCheck(
                has_conflict=True, reason=REASON_MODIFIED_EXTERNALLY, last_modified=modified
            )
        return ConflictCheck(has_conflict=False, last_modified=modified)
