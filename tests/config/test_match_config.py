from __future__ import annotations

import pytest

from artistry.config import ConfigurationError, get_match_config
from artistry.config.matching import MIN_CONFIDENCE_ENV, STRATEGY_ENV
from artistry.domain.model import MatchStrategy


@pytest.fixture(autouse=True)
def clear_match_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(STRATEGY_ENV, raising=False)
    monkeypatch.delenv(MIN_CONFIDENCE_ENV, raising=False)


def test_defaults_without_env() -> None:
    config = get_match_config()

    assert config.strategy is MatchStrategy.PREFER_ID
    assert config.min_confidence == 0.85


def test_env_overrides_are_applied(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(STRATEGY_ENV, "PREFER_NAME")
    monkeypatch.setenv(MIN_CONFIDENCE_ENV, "0.7")

    config = get_match_config()

    assert config.strategy is MatchStrategy.PREFER_NAME
    assert config.min_confidence == 0.7


@pytest.mark.parametrize(
    ("name", "value"),
    [
        (STRATEGY_ENV, "best_guess"),
        (MIN_CONFIDENCE_ENV, "high"),
        (MIN_CONFIDENCE_ENV, "1.2"),
    ],
)
def test_invalid_env_values_raise_configuration_error(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        get_match_config()
