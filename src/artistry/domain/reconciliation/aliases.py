"""Alias management for canonical artists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artistry.domain.model import Alias

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from artistry.domain.ports.unit_of_work import ReconciliationUnitOfWork

log = logging.getLogger(__name__)


class InvalidAliasError(ValueError):
    """Raised for alias text that is empty after trimming."""


class ArtistNotFoundError(LookupError):
    def __init__(self, artist_id: UUID) -> None:
        self.artist_id = artist_id
        super().__init__(f"Artist not found: {artist_id}")


class AliasNotFoundError(LookupError):
    def __init__(self, alias_id: UUID) -> None:
        self.alias_id = alias_id
        super().__init__(f"Alias not found: {alias_id}")


class AliasService:
    def __init__(self, unit_of_work_factory: Callable[[], ReconciliationUnitOfWork]) -> None:
        self._uow_factory = unit_of_work_factory

    def add_alias(self, artist_id: UUID, text: str, source: str = "") -> Alias:
        text = text.strip()
        if not text:
            raise InvalidAliasError("Alias text must not be empty")
        with self._uow_factory() as uow:
            if uow.repositories.artists.get(artist_id) is None:
                raise ArtistNotFoundError(artist_id)
            alias = Alias(artist_id=artist_id, text=text, source=source)
            uow.repositories.aliases.add(alias)
            uow.commit()
        log.debug("Added alias %r to artist %s", text, artist_id)
        return alias

    def remove_alias(self, alias_id: UUID) -> None:
        with self._uow_factory() as uow:
            if not uow.repositories.aliases.remove(alias_id):
                raise AliasNotFoundError(alias_id)
            uow.commit()

    def list_aliases(self, artist_id: UUID) -> list[Alias]:
        """Aliases of ``artist_id`` ordered by text."""

        with self._uow_factory() as uow:
            return list(uow.repositories.aliases.list_for_artist(artist_id))
