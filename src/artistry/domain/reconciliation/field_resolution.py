"""Apply an effective scraper configuration to values already fetched per provider."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artistry.domain.model import FieldName, Provider

if TYPE_CHECKING:
    from collections.abc import Mapping

    from artistry.domain.model import ScraperConfig

type FieldValue = str | Sequence[str]
type ProviderValues = Mapping[Provider, Mapping[FieldName, FieldValue]]


@dataclass(frozen=True, slots=True)
class FieldSource:
    field: FieldName
    provider: Provider
    was_fallback: bool = False


@dataclass(slots=True)
class FieldResolution:
    values: dict[FieldName, FieldValue] = field(default_factory=dict[FieldName, FieldValue])
    sources: list[FieldSource] = field(default_factory=list[FieldSource])

    @property
    def metadata_sources(self) -> dict[str, str]:
        """Field to provider map as stored on canonical artists."""
        return {str(source.field): str(source.provider) for source in self.sources}

    def source_for(self, name: FieldName) -> FieldSource | None:
        for source in self.sources:
            if source.field is name:
                return source
        return None


def _has_value(value: FieldValue | None) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return any(item.strip() for item in value)


def resolve_fields(config: ScraperConfig, values_by_provider: ProviderValues) -> FieldResolution:
    """Pick each enabled field from its primary, then from its category chain."""

    resolution = FieldResolution()
    for entry in config.fields:
        if not entry.enabled:
            continue
        primary_value = values_by_provider.get(entry.primary, {}).get(entry.field)
        if _has_value(primary_value):
            resolution.values[entry.field] = primary_value  # type: ignore[assignment]
            resolution.sources.append(FieldSource(field=entry.field, provider=entry.primary))
            continue

        chain = config.fallback_chain_for(entry.field.category)
        for provider in chain.providers if chain else ():
            if provider is entry.primary:
                continue
            value = values_by_provider.get(provider, {}).get(entry.field)
            if _has_value(value):
                resolution.values[entry.field] = value  # type: ignore[assignment]
                resolution.sources.append(
                    FieldSource(field=entry.field, provider=provider, was_fallback=True)
                )
                break
    return resolution
