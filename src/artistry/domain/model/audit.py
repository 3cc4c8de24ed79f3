"""Audit records of rendered artist content."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artistry.domain.model.entity import Entity, utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Snapshot(Entity):
    """Capture of an artist's rendered record content. Never updated once stored."""

    artist_id: UUID
    content: str
    created_at: datetime = field(default_factory=utcnow)
