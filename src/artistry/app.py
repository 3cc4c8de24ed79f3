"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from artistry.adapters.filesystem import FileSystemArtifactStore
from artistry.adapters.schema import ArtistRecordPayload
from artistry.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReconciliationUnitOfWork,
    is_started,
    startup,
)
from artistry.config import get_match_config
from artistry.domain.model import SCOPE_GLOBAL
from artistry.domain.model.entity import utcnow
from artistry.domain.reconciliation import (
    AliasService,
    ArtistNotFoundError,
    ConflictGuard,
    DuplicateDetector,
    IdentityMatcher,
    ScraperConfigService,
    SnapshotStore,
    diff,
    resolve_fields,
)
from artistry.domain.ports.unit_of_work import ReconciliationUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from pathlib import Path
    from uuid import UUID

    from artistry.domain.model import (
        Alias,
        ArtistRecord,
        CanonicalArtist,
        Overrides,
        ScraperConfig,
        Snapshot,
    )
    from artistry.domain.ports.artifacts import ArtifactStore
    from artistry.domain.reconciliation import (
        ConflictCheck,
        DiffResult,
        DuplicateGroup,
        FieldResolution,
        MatchConfig,
        MatchResult,
    )
    from artistry.domain.reconciliation.field_resolution import ProviderValues

UnitOfWorkFactory = Callable[[], ReconciliationUnitOfWork]


log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyReconciliationUnitOfWork


def add_artist(
    artist: CanonicalArtist, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> CanonicalArtist:
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        uow.repositories.artists.add(artist)
        uow.commit()
    log.info("Added artist %s (%s)", artist.name, artist.id)
    return artist


def find_duplicates(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> list[DuplicateGroup]:
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        return DuplicateDetector(uow.repositories.artists).find_duplicates()


def match_artist(
    ids: Mapping[str, str],
    name_hint: str = "",
    *,
    config: MatchConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MatchResult | None:
    """Resolve identifiers against stored artists under the configured policy."""

    policy = config or get_match_config()
    with _unit_of_work_factory(unit_of_work_factory)() as uow:
        result = IdentityMatcher(uow.repositories.artists, policy).match(ids, name_hint)
    if result is None:
        log.info("No accepted match under %s", policy.strategy)
    else:
        log.info(
            "Matched %s via %s at %.2f", result.artist.id, result.match_type, result.confidence
        )
    return result


def scraper_config_service(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> ScraperConfigService:
    return ScraperConfigService(_unit_of_work_factory(unit_of_work_factory))


def seed_scraper_config(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> bool:
    return scraper_config_service(unit_of_work_factory=unit_of_work_factory).seed_defaults()


def get_scraper_config(
    scope: str = SCOPE_GLOBAL, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> ScraperConfig:
    return scraper_config_service(unit_of_work_factory=unit_of_work_factory).get_config(scope)


def get_raw_scraper_config(
    scope: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> tuple[ScraperConfig | None, Overrides | None]:
    return scraper_config_service(unit_of_work_factory=unit_of_work_factory).get_raw_config(scope)


def save_scraper_config(
    scope: str,
    config: ScraperConfig,
    overrides: Overrides | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ScraperConfig:
    return scraper_config_service(unit_of_work_factory=unit_of_work_factory).save_config(
        scope, config, overrides
    )


def reset_scraper_config(
    scope: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> bool:
    return scraper_config_service(unit_of_work_factory=unit_of_work_factory).reset_config(scope)


def apply_provider_values(
    artist_id: UUID,
    values_by_provider: ProviderValues,
    *,
    scope: str = SCOPE_GLOBAL,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> FieldResolution:
    """Resolve fetched provider values for ``scope`` and record their sources on the artist."""

    factory = _unit_of_work_factory(unit_of_work_factory)
    config = ScraperConfigService(factory).get_config(scope)
    resolution = resolve_fields(config, values_by_provider)

    with factory() as uow:
        artist = uow.repositories.artists.get(artist_id)
        if artist is None:
            raise ArtistNotFoundError(artist_id)
        artist.metadata_sources = resolution.metadata_sources
        artist.updated_at = utcnow()
        uow.repositories.artists.update(artist)
        uow.commit()
    log.info("Resolved %d field(s) for artist %s", len(resolution.values), artist_id)
    return resolution


def add_alias(
    artist_id: UUID,
    text: str,
    source: str = "",
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Alias:
    return AliasService(_unit_of_work_factory(unit_of_work_factory)).add_alias(
        artist_id, text, source
    )


def remove_alias(
    alias_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> None:
    AliasService(_unit_of_work_factory(unit_of_work_factory)).remove_alias(alias_id)


def list_aliases(
    artist_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> list[Alias]:
    return AliasService(_unit_of_work_factory(unit_of_work_factory)).list_aliases(artist_id)


def save_snapshot(
    artist_id: UUID, content: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Snapshot:
    return SnapshotStore(_unit_of_work_factory(unit_of_work_factory)).save(artist_id, content)


def list_snapshots(
    artist_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> list[Snapshot]:
    return SnapshotStore(_unit_of_work_factory(unit_of_work_factory)).list(artist_id)


def get_snapshot(
    snapshot_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Snapshot:
    return SnapshotStore(_unit_of_work_factory(unit_of_work_factory)).get_by_id(snapshot_id)


def check_conflict(
    ref: str,
    reference_time: datetime,
    *,
    root: Path | None = None,
    artifact_store: ArtifactStore | None = None,
) -> ConflictCheck:
    store = artifact_store or FileSystemArtifactStore(root)
    return ConflictGuard(store).check(ref, reference_time)


def diff_record_files(old_path: Path | None, new_path: Path | None) -> DiffResult:
    """Compare two JSON record documents; an omitted or nonexistent path is an absent record."""

    return diff(_load_record(old_path), _load_record(new_path))


def _load_record(path: Path | None) -> ArtistRecord | None:
    if path is None or not path.exists():
        return None
    return ArtistRecordPayload.model_validate_json(path.read_text(encoding="utf-8")).to_domain()
