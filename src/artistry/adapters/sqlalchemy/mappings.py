"""SQLAlchemy Core tables for canonical artists and reconciliation state."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Final

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

UUIDColumnType = Uuid[uuid.UUID]

NAMING_CONVENTION: Final[dict[str, str]] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(naming_convention=NAMING_CONVENTION)

# Empty provider identifiers are stored as NULL so the indexes stay sparse.
artist_table = Table(
    "artist",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("sort_name", String, nullable=False, default=""),
    Column("musicbrainz_id", String, nullable=True, index=True),
    Column("audiodb_id", String, nullable=True, index=True),
    Column("discogs_id", String, nullable=True, index=True),
    Column("wikidata_id", String, nullable=True, index=True),
    Column("lastfm_id", String, nullable=True),
    Column("deezer_id", String, nullable=True),
    Column("is_excluded", Boolean, nullable=False, default=False),
    Column("exclusion_reason", String, nullable=False, default=""),
    Column("metadata_sources", JSON, nullable=False, default=dict),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
)

artist_alias_table = Table(
    "artist_alias",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "artist_id",
        UUIDColumnType,
        ForeignKey("artist.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("text", String, nullable=False),
    Column("source", String, nullable=False, default=""),
    Column("created_at", UTCDateTime, nullable=False),
)

scraper_config_table = Table(
    "scraper_config",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("scope", String, nullable=False),
    Column("config_json", Text, nullable=False),
    Column("overrides_json", Text, nullable=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    UniqueConstraint("scope"),
)

artifact_snapshot_table = Table(
    "artifact_snapshot",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "artist_id",
        UUIDColumnType,
        ForeignKey("artist.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("content", Text, nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
    Index("ix_artifact_snapshot_artist_id_created_at", "artist_id", "created_at"),
)
