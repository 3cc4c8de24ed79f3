"""Per-scope provider assignments for scrapeable fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final
from uuid import UUID

from artistry.domain.model.entity import new_id
from artistry.domain.model.enums import FieldCategory, FieldName, Provider, category_for

if TYPE_CHECKING:
    from datetime import datetime

SCOPE_GLOBAL: Final[str] = "global"


@dataclass(kw_only=True)
class FieldConfig:
    """Primary provider assignment for a single field."""

    field: FieldName
    primary: Provider
    enabled: bool = True
    category: FieldCategory | None = None

    def __post_init__(self) -> None:
        expected = category_for(self.field)
        if self.category is None:
            self.category = expected
        elif self.category is not expected:
            raise ValueError(
                f"Field {self.field} belongs to category {expected}, not {self.category}"
            )


@dataclass(kw_only=True)
class FallbackChain:
    """Ordered providers consulted for a category when the primary has no value."""

    category: FieldCategory
    providers: list[Provider] = field(default_factory=list[Provider])


@dataclass(kw_only=True)
class ScraperConfig:
    """Complete field and fallback assignment for one scope."""

    scope: str = SCOPE_GLOBAL
    fields: list[FieldConfig] = field(default_factory=list[FieldConfig])
    fallback_chains: list[FallbackChain] = field(default_factory=list[FallbackChain])
    id: UUID = field(default_factory=new_id)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def primary_for(self, name: FieldName) -> Provider | None:
        for entry in self.fields:
            if entry.field is name:
                return entry.primary
        return None

    def field_config_for(self, name: FieldName) -> FieldConfig | None:
        for entry in self.fields:
            if entry.field is name:
                return entry
        return None

    def fallback_chain_for(self, category: FieldCategory) -> FallbackChain | None:
        for chain in self.fallback_chains:
            if chain.category is category:
                return chain
        return None

    @property
    def is_complete(self) -> bool:
        """Whether every field and every category has exactly one entry."""
        field_names = [entry.field for entry in self.fields]
        categories = [chain.category for chain in self.fallback_chains]
        return sorted(field_names) == sorted(FieldName) and sorted(categories) == sorted(
            FieldCategory
        )


@dataclass(kw_only=True)
class Overrides:
    """Entries a non-global scope explicitly customizes.

    Kept as explicit flags so that "set to the same value as global" stays
    distinguishable from "inherited".
    """

    fields: dict[FieldName, bool] = field(default_factory=dict[FieldName, bool])
    fallback_chains: dict[FieldCategory, bool] = field(
        default_factory=dict[FieldCategory, bool]
    )

    def overrides_field(self, name: FieldName) -> bool:
        return self.fields.get(name, False)

    def overrides_chain(self, category: FieldCategory) -> bool:
        return self.fallback_chains.get(category, False)

    @property
    def is_empty(self) -> bool:
        return not any(self.fields.values()) and not any(self.fallback_chains.values())


def default_config() -> ScraperConfig:
    """Built-in global assignment used when seeding."""

    metadata = FieldCategory.METADATA
    images = FieldCategory.IMAGES
    return ScraperConfig(
        scope=SCOPE_GLOBAL,
        fields=[
            FieldConfig(field=FieldName.BIOGRAPHY, primary=Provider.LASTFM, category=metadata),
            FieldConfig(field=FieldName.GENRES, primary=Provider.MUSICBRAINZ, category=metadata),
            FieldConfig(field=FieldName.STYLES, primary=Provider.AUDIODB, category=metadata),
            FieldConfig(field=FieldName.MOODS, primary=Provider.AUDIODB, category=metadata),
            FieldConfig(field=FieldName.MEMBERS, primary=Provider.MUSICBRAINZ, category=metadata),
            FieldConfig(field=FieldName.FORMED, primary=Provider.MUSICBRAINZ, category=metadata),
            FieldConfig(field=FieldName.BORN, primary=Provider.MUSICBRAINZ, category=metadata),
            FieldConfig(field=FieldName.DIED, primary=Provider.MUSICBRAINZ, category=metadata),
            FieldConfig(
                field=FieldName.DISBANDED, primary=Provider.MUSICBRAINZ, category=metadata
            ),
            FieldConfig(field=FieldName.THUMB, primary=Provider.FANARTTV, category=images),
            FieldConfig(field=FieldName.FANART, primary=Provider.FANARTTV, category=images),
            FieldConfig(field=FieldName.LOGO, primary=Provider.FANARTTV, category=images),
            FieldConfig(field=FieldName.BANNER, primary=Provider.FANARTTV, category=images),
        ],
        fallback_chains=[
            FallbackChain(
                category=metadata,
                providers=[
                    Provider.MUSICBRAINZ,
                    Provider.LASTFM,
                    Provider.DISCOGS,
                    Provider.AUDIODB,
                    Provider.WIKIDATA,
                ],
            ),
            FallbackChain(
                category=images,
                providers=[Provider.FANARTTV, Provider.AUDIODB, Provider.DISCOGS],
            ),
        ],
    )
