"""Initial schema for artists, aliases, scraper configuration and snapshots.

Revision ID: 0001_initial
Revises:
Create Date: 2026-09-28 10:12:41.000000

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from artistry.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "artist",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("sort_name", sa.String(), nullable=False),
        sa.Column("musicbrainz_id", sa.String(), nullable=True),
        sa.Column("audiodb_id", sa.String(), nullable=True),
        sa.Column("discogs_id", sa.String(), nullable=True),
        sa.Column("wikidata_id", sa.String(), nullable=True),
        sa.Column("lastfm_id", sa.String(), nullable=True),
        sa.Column("deezer_id", sa.String(), nullable=True),
        sa.Column("is_excluded", sa.Boolean(), nullable=False),
        sa.Column("exclusion_reason", sa.String(), nullable=False),
        sa.Column("metadata_sources", sa.JSON(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_artist"),
    )
    op.create_index("ix_artist_musicbrainz_id", "artist", ["musicbrainz_id"], unique=False)
    op.create_index("ix_artist_audiodb_id", "artist", ["audiodb_id"], unique=False)
    op.create_index("ix_artist_discogs_id", "artist", ["discogs_id"], unique=False)
    op.create_index("ix_artist_wikidata_id", "artist", ["wikidata_id"], unique=False)

    op.create_table(
        "artist_alias",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.String(), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name="fk_artist_alias_artist_id_artist",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_artist_alias"),
    )
    op.create_index("ix_artist_alias_artist_id", "artist_alias", ["artist_id"], unique=False)

    op.create_table(
        "scraper_config",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("scope", sa.String(), nullable=False),
        sa.Column("config_json", sa.Text(), nullable=False),
        sa.Column("overrides_json", sa.Text(), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_scraper_config"),
        sa.UniqueConstraint("scope", name="uq_scraper_config_scope"),
    )

    op.create_table(
        "artifact_snapshot",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name="fk_artifact_snapshot_artist_id_artist",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_artifact_snapshot"),
    )
    op.create_index(
        "ix_artifact_snapshot_artist_id_created_at",
        "artifact_snapshot",
        ["artist_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_artifact_snapshot_artist_id_created_at", table_name="artifact_snapshot")
    op.drop_table("artifact_snapshot")
    op.drop_table("scraper_config")
    op.drop_index("ix_artist_alias_artist_id", table_name="artist_alias")
    op.drop_table("artist_alias")
    op.drop_index("ix_artist_wikidata_id", table_name="artist")
    op.drop_index("ix_artist_discogs_id", table_name="artist")
    op.drop_index("ix_artist_audiodb_id", table_name="artist")
    op.drop_index("ix_artist_musicbrainz_id", table_name="artist")
    op.drop_table("artist")
