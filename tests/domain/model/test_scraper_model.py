from __future__ import annotations

import pytest

from artistry.domain.model import (
    FieldCategory,
    FieldConfig,
    FieldName,
    Overrides,
    Provider,
    default_config,
)


def test_field_config_derives_category() -> None:
    entry = FieldConfig(field=FieldName.LOGO, primary=Provider.FANARTTV)

    assert entry.category is FieldCategory.IMAGES


def test_field_config_rejects_wrong_category() -> None:
    with pytest.raises(ValueError, match="belongs to category"):
        FieldConfig(
            field=FieldName.BIOGRAPHY, primary=Provider.LASTFM, category=FieldCategory.IMAGES
        )


def test_default_config_is_complete() -> None:
    config = default_config()

    assert config.is_complete
    assert config.primary_for(FieldName.BIOGRAPHY) is Provider.LASTFM
    chain = config.fallback_chain_for(FieldCategory.IMAGES)
    assert chain is not None
    assert chain.providers[0] is Provider.FANARTTV


def test_config_missing_a_field_is_incomplete() -> None:
    config = default_config()
    config.fields = [entry for entry in config.fields if entry.field is not FieldName.BANNER]

    assert not config.is_complete
    assert config.field_config_for(FieldName.BANNER) is None


def test_overrides_flags() -> None:
    overrides = Overrides(fields={FieldName.GENRES: True, FieldName.MOODS: False})

    assert overrides.overrides_field(FieldName.GENRES)
    assert not overrides.overrides_field(FieldName.MOODS)
    assert not overrides.overrides_chain(FieldCategory.METADATA)
    assert not overrides.is_empty
    assert Overrides(fields={FieldName.MOODS: False}).is_empty
