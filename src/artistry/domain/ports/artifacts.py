"""Ports for inspecting previously written artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@runtime_checkable
class ArtifactStore(Protocol):
    """Metadata access to rendered artifacts (for example ``artist.nfo`` files)."""

    def stat(self, ref: str) -> datetime | None:
        """Return the artifact's last modification time, or ``None`` if it does not exist.

        Failures other than absence raise ``OSError``.
        """
        ...


__all__ = ["ArtifactStore"]
