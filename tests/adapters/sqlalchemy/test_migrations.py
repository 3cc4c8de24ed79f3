from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, inspect

from artistry.adapters.sqlalchemy.mappings import metadata
from artistry.adapters.sqlalchemy.migrations import upgrade_head

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_upgrade_head_creates_mapped_tables(sqlite_engine: Engine) -> None:
    inspector = inspect(sqlite_engine)

    assert set(metadata.tables) <= set(inspector.get_table_names())
    for name, table in metadata.tables.items():
        columns = {column["name"] for column in inspector.get_columns(name)}
        assert columns == {column.name for column in table.columns}


def test_migrated_indexes_follow_naming_convention(sqlite_engine: Engine) -> None:
    inspector = inspect(sqlite_engine)

    artist_indexes = {index["name"] for index in inspector.get_indexes("artist")}
    snapshot_indexes = {index["name"] for index in inspector.get_indexes("artifact_snapshot")}
    uniques = {uc["name"] for uc in inspector.get_unique_constraints("scraper_config")}

    assert {
        "ix_artist_musicbrainz_id",
        "ix_artist_audiodb_id",
        "ix_artist_discogs_id",
        "ix_artist_wikidata_id",
    } <= artist_indexes
    assert "ix_artifact_snapshot_artist_id_created_at" in snapshot_indexes
    assert uniques == {"uq_scraper_config_scope"}


def test_upgrade_head_is_idempotent() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        upgrade_head(engine=engine)
        upgrade_head(engine=engine)
        assert "alembic_version" in inspect(engine).get_table_names()
    finally:
        engine.dispose()
