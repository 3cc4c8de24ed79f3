"""Filesystem-backed artifact metadata."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING


class FileSystemArtifactStore:
    """Resolve artifact references as paths, relative to ``root`` when given."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root

    def resolve(self, ref: str) -> Path:
        path = Path(ref).expanduser()
        if self._root is not None and not path.is_absolute():
            path = self._root / path
        return path

    def stat(self, ref: str) -> datetime | None:
        try:
            result = self.resolve(ref).stat()
        except FileNotFoundError:
            return None
        return datetime.fromtimestamp(result.st_mtime, tz=UTC)


if TYPE_CHECKING:
    from artistry.domain.ports.artifacts import ArtifactStore

    _store_check: ArtifactStore = FileSystemArtifactStore()
