"""Pydantic models for the serializable reconciliation shapes.

Used for the JSON columns of stored scraper configuration and for CLI output.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Self
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, model_validator

from artistry.domain.model import (
    Alias,
    ArtistRecord,
    CanonicalArtist,
    DiffStatus,
    FallbackChain,
    FieldCategory,
    FieldConfig,
    FieldName,
    MatchStrategy,
    MatchType,
    Overrides,
    Provider,
    ScraperConfig,
    Snapshot,
    category_for,
)
from artistry.domain.reconciliation.conflict import ConflictCheck
from artistry.domain.reconciliation.diff import DiffResult
from artistry.domain.reconciliation.duplicates import DuplicateGroup
from artistry.domain.reconciliation.matching import MatchConfig, MatchResult


class SchemaBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class MatchConfigPayload(SchemaBaseModel):
    strategy: MatchStrategy = MatchStrategy.PREFER_ID
    min_confidence: float = Field(default=0.85, ge=0.0, le=1.0)

    @classmethod
    def from_domain(cls, config: MatchConfig) -> Self:
        return cls(strategy=config.strategy, min_confidence=config.min_confidence)

    def to_domain(self) -> MatchConfig:
        return MatchConfig(strategy=self.strategy, min_confidence=self.min_confidence)


class FieldConfigPayload(SchemaBaseModel):
    field: FieldName
    primary: Provider
    enabled: bool = True
    category: FieldCategory | None = None

    @model_validator(mode="after")
    def _check_category(self) -> Self:
        expected = category_for(self.field)
        if self.category is not None and self.category is not expected:
            raise ValueError(f"field {self.field} belongs to category {expected}")
        return self

    @classmethod
    def from_domain(cls, entry: FieldConfig) -> Self:
        return cls(
            field=entry.field, primary=entry.primary, enabled=entry.enabled, category=entry.category
        )

    def to_domain(self) -> FieldConfig:
        return FieldConfig(
            field=self.field, primary=self.primary, enabled=self.enabled, category=self.category
        )


class FallbackChainPayload(SchemaBaseModel):
    category: FieldCategory
    providers: list[Provider] = Field(default_factory=list[Provider])

    @classmethod
    def from_domain(cls, chain: FallbackChain) -> Self:
        return cls(category=chain.category, providers=list(chain.providers))

    def to_domain(self) -> FallbackChain:
        return FallbackChain(category=self.category, providers=list(self.providers))


class ScraperConfigBody(SchemaBaseModel):
    """Assignment content as stored in the ``config_json`` column."""

    fields: list[FieldConfigPayload] = Field(default_factory=list[FieldConfigPayload])
    fallback_chains: list[FallbackChainPayload] = Field(
        default_factory=list[FallbackChainPayload]
    )

    @model_validator(mode="after")
    def _check_unique_entries(self) -> Self:
        names = [entry.field for entry in self.fields]
        if len(names) != len(set(names)):
            raise ValueError("each field may appear only once")
        categories = [chain.category for chain in self.fallback_chains]
        if len(categories) != len(set(categories)):
            raise ValueError("each category may have only one fallback chain")
        return self

    @classmethod
    def from_domain(cls, config: ScraperConfig) -> Self:
        return cls(
            fields=[FieldConfigPayload.from_domain(entry) for entry in config.fields],
            fallback_chains=[
                FallbackChainPayload.from_domain(chain) for chain in config.fallback_chains
            ],
        )


class ScraperConfigPayload(ScraperConfigBody):
    id: UUID
    scope: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, config: ScraperConfig) -> Self:
        body = ScraperConfigBody.from_domain(config)
        return cls(
            id=config.id,
            scope=config.scope,
            fields=body.fields,
            fallback_chains=body.fallback_chains,
            created_at=config.created_at,
            updated_at=config.updated_at,
        )

    def to_domain(self) -> ScraperConfig:
        return ScraperConfig(
            id=self.id,
            scope=self.scope,
            fields=[entry.to_domain() for entry in self.fields],
            fallback_chains=[chain.to_domain() for chain in self.fallback_chains],
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class OverridesPayload(SchemaBaseModel):
    fields: dict[FieldName, bool] = Field(default_factory=dict[FieldName, bool])
    fallback_chains: dict[FieldCategory, bool] = Field(default_factory=dict[FieldCategory, bool])

    @classmethod
    def from_domain(cls, overrides: Overrides) -> Self:
        return cls(fields=dict(overrides.fields), fallback_chains=dict(overrides.fallback_chains))

    def to_domain(self) -> Overrides:
        return Overrides(fields=dict(self.fields), fallback_chains=dict(self.fallback_chains))


class ScraperConfigDocument(ScraperConfigBody):
    """Scope assignment as supplied by an operator, with optional override flags."""

    overrides: OverridesPayload | None = None

    def to_domain(self, scope: str) -> tuple[ScraperConfig, Overrides | None]:
        config = ScraperConfig(
            scope=scope,
            fields=[entry.to_domain() for entry in self.fields],
            fallback_chains=[chain.to_domain() for chain in self.fallback_chains],
        )
        overrides = self.overrides.to_domain() if self.overrides is not None else None
        return config, overrides


class ConflictCheckPayload(SchemaBaseModel):
    has_conflict: bool
    reason: str | None = None
    last_modified: datetime | None = None
    external_writer: str | None = None

    @classmethod
    def from_domain(cls, check: ConflictCheck) -> Self:
        return cls(
            has_conflict=check.has_conflict,
            reason=check.reason,
            last_modified=check.last_modified,
            external_writer=check.external_writer,
        )


class FieldDiffPayload(SchemaBaseModel):
    field: str
    old_value: str
    new_value: str
    status: DiffStatus


class DiffResultPayload(SchemaBaseModel):
    fields: list[FieldDiffPayload]
    has_diff: bool

    @classmethod
    def from_domain(cls, result: DiffResult) -> Self:
        return cls(
            fields=[
                FieldDiffPayload(
                    field=entry.field,
                    old_value=entry.old_value,
                    new_value=entry.new_value,
                    status=entry.status,
                )
                for entry in result.fields
            ],
            has_diff=result.has_diff,
        )


class ArtistSummaryPayload(SchemaBaseModel):
    id: UUID
    name: str
    musicbrainz_id: str = ""
    is_excluded: bool = False

    @classmethod
    def from_domain(cls, artist: CanonicalArtist) -> Self:
        return cls(
            id=artist.id,
            name=artist.name,
            musicbrainz_id=artist.musicbrainz_id,
            is_excluded=artist.is_excluded,
        )


class MatchResultPayload(SchemaBaseModel):
    artist: ArtistSummaryPayload
    confidence: float
    match_type: MatchType
    source: str

    @classmethod
    def from_domain(cls, result: MatchResult) -> Self:
        return cls(
            artist=ArtistSummaryPayload.from_domain(result.artist),
            confidence=result.confidence,
            match_type=result.match_type,
            source=result.source,
        )


class DuplicateGroupPayload(SchemaBaseModel):
    artists: list[ArtistSummaryPayload]
    reason: str

    @classmethod
    def from_domain(cls, group: DuplicateGroup) -> Self:
        return cls(
            artists=[ArtistSummaryPayload.from_domain(artist) for artist in group.artists],
            reason=group.reason,
        )


class AliasPayload(SchemaBaseModel):
    id: UUID
    artist_id: UUID
    text: str
    source: str
    created_at: datetime

    @classmethod
    def from_domain(cls, alias: Alias) -> Self:
        return cls(
            id=alias.id,
            artist_id=alias.artist_id,
            text=alias.text,
            source=alias.source,
            created_at=alias.created_at,
        )


class SnapshotPayload(SchemaBaseModel):
    id: UUID
    artist_id: UUID
    content: str
    created_at: datetime

    @classmethod
    def from_domain(cls, snapshot: Snapshot) -> Self:
        return cls(
            id=snapshot.id,
            artist_id=snapshot.artist_id,
            content=snapshot.content,
            created_at=snapshot.created_at,
        )


class ArtistRecordPayload(BaseModel):
    """One reconciled record version as exchanged in JSON documents."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    sort_name: str = ""
    type: str = ""
    gender: str = ""
    disambiguation: str = ""
    musicbrainz_id: str = ""
    audiodb_id: str = ""
    years_active: str = ""
    born: str = ""
    formed: str = ""
    died: str = ""
    disbanded: str = ""
    biography: str = ""
    genres: list[str] = Field(default_factory=list[str])
    styles: list[str] = Field(default_factory=list[str])
    moods: list[str] = Field(default_factory=list[str])

    def to_domain(self) -> ArtistRecord:
        return ArtistRecord(**self.model_dump())
