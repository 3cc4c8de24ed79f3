"""Identity matching policy loaded from the environment."""

from __future__ import annotations

from typing import Final

from artistry.domain.model import MatchStrategy
from artistry.domain.reconciliation.matching import (
    DEFAULT_MIN_CONFIDENCE,
    InvalidMatchConfigError,
    MatchConfig,
)

from .env import optional_env_var
from .errors import ConfigurationError

STRATEGY_ENV: Final[str] = "ARTISTRY_MATCH_STRATEGY"
MIN_CONFIDENCE_ENV: Final[str] = "ARTISTRY_MATCH_MIN_CONFIDENCE"


def get_match_config() -> MatchConfig:
    raw_strategy = optional_env_var(STRATEGY_ENV)
    raw_confidence = optional_env_var(MIN_CONFIDENCE_ENV)

    strategy = MatchStrategy.PREFER_ID
    if raw_strategy is not None:
        try:
            strategy = MatchStrategy(raw_strategy.lower())
        except ValueError as exc:
            choices = ", ".join(MatchStrategy)
            raise ConfigurationError(
                f"{STRATEGY_ENV} must be one of {choices}, got {raw_strategy!r}"
            ) from exc

    min_confidence = DEFAULT_MIN_CONFIDENCE
    if raw_confidence is not None:
        try:
            min_confidence = float(raw_confidence)
        except ValueError as exc:
            raise ConfigurationError(
                f"{MIN_CONFIDENCE_ENV} must be a number, got {raw_confidence!r}"
            ) from exc

    try:
        return MatchConfig(strategy=strategy, min_confidence=min_confidence)
    except InvalidMatchConfigError as exc:
        raise ConfigurationError(str(exc)) from exc
