"""Append-only history of rendered artist records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artistry.domain.model import Snapshot
from artistry.domain.model.entity import utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from artistry.domain.ports.unit_of_work import ReconciliationUnitOfWork

log = logging.getLogger(__name__)


class SnapshotNotFoundError(LookupError):
    def __init__(self, snapshot_id: UUID) -> None:
        self.snapshot_id = snapshot_id
        super().__init__(f"Snapshot not found: {snapshot_id}")


class SnapshotStore:
    """Record and read back captures of an artist's rendered content."""

    def __init__(
        self,
        unit_of_work_factory: Callable[[], ReconciliationUnitOfWork],
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    def save(self, artist_id: UUID, content: str) -> Snapshot:
        snapshot = Snapshot(artist_id=artist_id, content=content, created_at=self._clock())
        with self._uow_factory() as uow:
            uow.repositories.snapshots.add(snapshot)
            uow.commit()
        log.debug("Stored snapshot %s for artist %s", snapshot.id, artist_id)
        return snapshot

    def list(self, artist_id: UUID) -> list[Snapshot]:
        """Snapshots for ``artist_id``, newest first."""

        with self._uow_factory() as uow:
            return list(uow.repositories.snapshots.list_for_artist(artist_id))

    def get_by_id(self, snapshot_id: UUID) -> Snapshot:
        with self._uow_factory() as uow:
            snapshot = uow.repositories.snapshots.get(snapshot_id)
        if snapshot is None:
            raise SnapshotNotFoundError(snapshot_id)
        return snapshot
