"""Repository implementations backed by SQLAlchemy sessions.

Rows are translated into fresh domain objects on every call and every query is
fully materialized before returning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from pydantic import ValidationError
from sqlalchemy import delete, func, select, update

from artistry.adapters.schema import OverridesPayload, ScraperConfigBody
from artistry.adapters.sqlalchemy.mappings import (
    artifact_snapshot_table,
    artist_alias_table,
    artist_table,
    scraper_config_table,
)
from artistry.domain.model import (
    IDENTIFIER_ATTRIBUTES,
    Alias,
    CanonicalArtist,
    Overrides,
    ScraperConfig,
    Snapshot,
    identifier_provider,
)
from artistry.domain.model.entity import utcnow
from artistry.domain.reconciliation.scraper_config import StoredConfigError

if TYPE_CHECKING:
    import uuid

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from artistry.domain.model import Provider


def _blank_to_none(value: str) -> str | None:
    stripped = value.strip()
    return stripped or None


def _artist_values(artist: CanonicalArtist) -> dict[str, Any]:
    values: dict[str, Any] = {
        "id": artist.id,
        "name": artist.name,
        "sort_name": artist.sort_name,
        "is_excluded": artist.is_excluded,
        "exclusion_reason": artist.exclusion_reason,
        "metadata_sources": dict(artist.metadata_sources),
        "created_at": artist.created_at,
        "updated_at": artist.updated_at,
    }
    for attribute in IDENTIFIER_ATTRIBUTES.values():
        values[attribute] = _blank_to_none(getattr(artist, attribute))
    return values


def _row_to_artist(row: Row[Any]) -> CanonicalArtist:
    mapping = row._mapping  # noqa: SLF001
    identifiers = {
        attribute: mapping[attribute] or "" for attribute in IDENTIFIER_ATTRIBUTES.values()
    }
    return CanonicalArtist(
        id=mapping["id"],
        name=mapping["name"],
        sort_name=mapping["sort_name"] or "",
        is_excluded=bool(mapping["is_excluded"]),
        exclusion_reason=mapping["exclusion_reason"] or "",
        metadata_sources=dict(mapping["metadata_sources"] or {}),
        created_at=mapping["created_at"],
        updated_at=mapping["updated_at"],
        **identifiers,
    )


class SqlAlchemyArtistRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: CanonicalArtist) -> None:
        self.session.execute(artist_table.insert().values(**_artist_values(entity)))

    def update(self, artist: CanonicalArtist) -> None:
        values = _artist_values(artist)
        del values["id"]
        self.session.execute(
            update(artist_table).where(artist_table.c.id == artist.id).values(**values)
        )

    def get(self, artist_id: uuid.UUID) -> CanonicalArtist | None:
        row = self.session.execute(
            select(artist_table).where(artist_table.c.id == artist_id)
        ).one_or_none()
        return _row_to_artist(row) if row is not None else None

    def get_by_musicbrainz_id(self, mbid: str) -> CanonicalArtist | None:
        if not mbid:
            return None
        return self._first_by_column("musicbrainz_id", mbid)

    def get_by_provider_id(self, provider: Provider | str, value: str) -> CanonicalArtist | None:
        # the validated provider map is the only path from a provider name to a column
        attribute = IDENTIFIER_ATTRIBUTES[identifier_provider(provider)]
        if not value:
            return None
        return self._first_by_column(attribute, value)

    def find_by_name(self, name: str) -> list[CanonicalArtist]:
        key = name.strip().lower()
        if not key:
            return []
        alias_owners = select(artist_alias_table.c.artist_id).where(
            func.lower(artist_alias_table.c.text) == key
        )
        stmt = (
            select(artist_table)
            .where(
                (func.lower(artist_table.c.name) == key) | artist_table.c.id.in_(alias_owners)
            )
            .order_by(artist_table.c.name, artist_table.c.id)
        )
        return [_row_to_artist(row) for row in self.session.execute(stmt).all()]

    def shared_musicbrainz_ids(self) -> list[str]:
        column = artist_table.c.musicbrainz_id
        stmt = (
            select(column)
            .where(column.is_not(None), column != "", artist_table.c.is_excluded.is_(False))
            .group_by(column)
            .having(func.count() > 1)
            .order_by(column)
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_by_musicbrainz_id(self, mbid: str) -> list[CanonicalArtist]:
        stmt = (
            select(artist_table)
            .where(artist_table.c.musicbrainz_id == mbid, artist_table.c.is_excluded.is_(False))
            .order_by(artist_table.c.name, artist_table.c.id)
        )
        return [_row_to_artist(row) for row in self.session.execute(stmt).all()]

    # SQLite's lower() folds ASCII only, so alias keys are case-insensitive for ASCII text.
    def shared_alias_keys(self) -> list[str]:
        key = func.lower(artist_alias_table.c.text)
        stmt = (
            select(key)
            .group_by(key)
            .having(func.count(artist_alias_table.c.artist_id.distinct()) > 1)
            .order_by(key)
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_by_alias_key(self, key: str) -> list[CanonicalArtist]:
        owners = select(artist_alias_table.c.artist_id).where(
            func.lower(artist_alias_table.c.text) == key
        )
        stmt = (
            select(artist_table)
            .where(artist_table.c.id.in_(owners))
            .order_by(artist_table.c.name, artist_table.c.id)
        )
        return [_row_to_artist(row) for row in self.session.execute(stmt).all()]

    def _first_by_column(self, attribute: str, value: str) -> CanonicalArtist | None:
        column = artist_table.c[attribute]
        stmt = (
            select(artist_table)
            .where(column == value)
            .order_by(artist_table.c.name, artist_table.c.id)
            .limit(1)
        )
        row = self.session.execute(stmt).one_or_none()
        return _row_to_artist(row) if row is not None else None


def _row_to_alias(row: Row[Any]) -> Alias:
    mapping = row._mapping  # noqa: SLF001
    return Alias(
        id=mapping["id"],
        artist_id=mapping["artist_id"],
        text=mapping["text"],
        source=mapping["source"] or "",
        created_at=mapping["created_at"],
    )


class SqlAlchemyAliasRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Alias) -> None:
        self.session.execute(
            artist_alias_table.insert().values(
                id=entity.id,
                artist_id=entity.artist_id,
                text=entity.text,
                source=entity.source,
                created_at=entity.created_at,
            )
        )

    def get(self, alias_id: uuid.UUID) -> Alias | None:
        row = self.session.execute(
            select(artist_alias_table).where(artist_alias_table.c.id == alias_id)
        ).one_or_none()
        return _row_to_alias(row) if row is not None else None

    def remove(self, alias_id: uuid.UUID) -> bool:
        result = self.session.execute(
            delete(artist_alias_table).where(artist_alias_table.c.id == alias_id)
        )
        return cast(int, getattr(result, "rowcount", 0)) > 0

    def list_for_artist(self, artist_id: uuid.UUID) -> list[Alias]:
        stmt = (
            select(artist_alias_table)
            .where(artist_alias_table.c.artist_id == artist_id)
            .order_by(artist_alias_table.c.text, artist_alias_table.c.id)
        )
        return [_row_to_alias(row) for row in self.session.execute(stmt).all()]


class SqlAlchemyScraperConfigRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, scope: str) -> tuple[ScraperConfig, Overrides] | None:
        row = self.session.execute(
            select(scraper_config_table).where(scraper_config_table.c.scope == scope)
        ).one_or_none()
        if row is None:
            return None
        mapping = row._mapping  # noqa: SLF001
        try:
            body = ScraperConfigBody.model_validate_json(mapping["config_json"])
            overrides_json = mapping["overrides_json"]
            overrides = (
                OverridesPayload.model_validate_json(overrides_json).to_domain()
                if overrides_json
                else Overrides()
            )
        except ValidationError as exc:
            raise StoredConfigError(scope, str(exc)) from exc

        config = ScraperConfig(
            id=mapping["id"],
            scope=mapping["scope"],
            fields=[entry.to_domain() for entry in body.fields],
            fallback_chains=[chain.to_domain() for chain in body.fallback_chains],
            created_at=mapping["created_at"],
            updated_at=mapping["updated_at"],
        )
        return config, overrides

    def exists(self, scope: str) -> bool:
        stmt = select(scraper_config_table.c.id).where(scraper_config_table.c.scope == scope)
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def save(self, config: ScraperConfig, overrides: Overrides | None) -> ScraperConfig:
        """Upsert keyed by scope; an existing row keeps its id and creation time."""

        now = utcnow()
        config_json = ScraperConfigBody.from_domain(config).model_dump_json()
        overrides_json = (
            OverridesPayload.from_domain(overrides).model_dump_json()
            if overrides is not None
            else None
        )
        if self.exists(config.scope):
            self.session.execute(
                update(scraper_config_table)
                .where(scraper_config_table.c.scope == config.scope)
                .values(config_json=config_json, overrides_json=overrides_json, updated_at=now)
            )
        else:
            self.session.execute(
                scraper_config_table.insert().values(
                    id=config.id,
                    scope=config.scope,
                    config_json=config_json,
                    overrides_json=overrides_json,
                    created_at=config.created_at or now,
                    updated_at=now,
                )
            )
        stored = self.get(config.scope)
        if stored is None:
            raise RuntimeError(f"Scraper configuration for scope {config.scope!r} was not stored")
        return stored[0]

    def delete(self, scope: str) -> bool:
        result = self.session.execute(
            delete(scraper_config_table).where(scraper_config_table.c.scope == scope)
        )
        return cast(int, getattr(result, "rowcount", 0)) > 0


def _row_to_snapshot(row: Row[Any]) -> Snapshot:
    mapping = row._mapping  # noqa: SLF001
    return Snapshot(
        id=mapping["id"],
        artist_id=mapping["artist_id"],
        content=mapping["content"],
        created_at=mapping["created_at"],
    )


class SqlAlchemySnapshotRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Snapshot) -> None:
        self.session.execute(
            artifact_snapshot_table.insert().values(
                id=entity.id,
                artist_id=entity.artist_id,
                content=entity.content,
                created_at=entity.created_at,
            )
        )

    def get(self, snapshot_id: uuid.UUID) -> Snapshot | None:
        row = self.session.execute(
            select(artifact_snapshot_table).where(artifact_snapshot_table.c.id == snapshot_id)
        ).one_or_none()
        return _row_to_snapshot(row) if row is not None else None

    def list_for_artist(self, artist_id: uuid.UUID) -> list[Snapshot]:
        stmt = (
            select(artifact_snapshot_table)
            .where(artifact_snapshot_table.c.artist_id == artist_id)
            .order_by(artifact_snapshot_table.c.created_at.desc())
        )
        return [_row_to_snapshot(row) for row in self.session.execute(stmt).all()]


if TYPE_CHECKING:
    from artistry.domain.ports.persistence import (
        AliasRepository,
        ArtistRepository,
        ScraperConfigRepository,
        SnapshotRepository,
    )

    _session_stub = cast("Session", object())
    _artist_repo: ArtistRepository = SqlAlchemyArtistRepository(_session_stub)
    _alias_repo: AliasRepository = SqlAlchemyAliasRepository(_session_stub)
    _config_repo: ScraperConfigRepository = SqlAlchemyScraperConfigRepository(_session_stub)
    _snapshot_repo: SnapshotRepository = SqlAlchemySnapshotRepository(_session_stub)
