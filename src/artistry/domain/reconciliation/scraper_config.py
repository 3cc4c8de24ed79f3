"""Scoped provider assignments with inheritance from the global scope.

The global row is complete: every field and every category has an entry. Narrower
scopes store a full row plus explicit override flags; only flagged entries replace
the global ones when the effective configuration is computed.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from artistry.domain.model import SCOPE_GLOBAL, Overrides, ScraperConfig, default_config
from artistry.domain.model.entity import new_id

if TYPE_CHECKING:
    from collections.abc import Callable

    from artistry.domain.ports.unit_of_work import ReconciliationUnitOfWork

log = logging.getLogger(__name__)


class ConfigNotSeededError(RuntimeError):
    """Raised when the global scraper configuration row has not been created yet."""

    def __init__(self) -> None:
        super().__init__("Global scraper configuration missing; run seed_defaults() first")


class GlobalScopeResetError(ValueError):
    """Raised when asked to delete the global scope."""

    def __init__(self) -> None:
        super().__init__("The global scraper configuration cannot be reset")


class StoredConfigError(RuntimeError):
    """Raised when a stored configuration row cannot be decoded."""

    def __init__(self, scope: str, detail: str) -> None:
        self.scope = scope
        super().__init__(f"Stored scraper configuration for scope {scope!r} is invalid: {detail}")


def merge_configs(
    global_config: ScraperConfig, scoped: ScraperConfig, overrides: Overrides
) -> ScraperConfig:
    """Overlay the flagged entries of ``scoped`` on ``global_config``.

    Global order is kept. The result carries the scoped row's identity and timestamps.
    """

    fields = []
    for entry in global_config.fields:
        scoped_entry = scoped.field_config_for(entry.field)
        chosen = entry
        if overrides.overrides_field(entry.field) and scoped_entry is not None:
            chosen = scoped_entry
        fields.append(replace(chosen))

    chains = []
    for chain in global_config.fallback_chains:
        scoped_chain = scoped.fallback_chain_for(chain.category)
        chosen_chain = chain
        if overrides.overrides_chain(chain.category) and scoped_chain is not None:
            chosen_chain = scoped_chain
        chains.append(replace(chosen_chain, providers=list(chosen_chain.providers)))

    return ScraperConfig(
        id=scoped.id,
        scope=scoped.scope,
        fields=fields,
        fallback_chains=chains,
        created_at=scoped.created_at,
        updated_at=scoped.updated_at,
    )


class ScraperConfigService:
    """Read and write scraper configuration through a unit of work."""

    def __init__(self, unit_of_work_factory: Callable[[], ReconciliationUnitOfWork]) -> None:
        self._uow_factory = unit_of_work_factory

    def seed_defaults(self) -> bool:
        """Create the global row if missing. Returns whether a row was written."""

        with self._uow_factory() as uow:
            repository = uow.repositories.scraper_configs
            if repository.exists(SCOPE_GLOBAL):
                return False
            repository.save(default_config(), None)
            uow.commit()
        log.info("Seeded default scraper configuration")
        return True

    def get_config(self, scope: str = SCOPE_GLOBAL) -> ScraperConfig:
        with self._uow_factory() as uow:
            repository = uow.repositories.scraper_configs
            stored_global = repository.get(SCOPE_GLOBAL)
            if stored_global is None:
                raise ConfigNotSeededError
            global_config, _ = stored_global
            if scope == SCOPE_GLOBAL:
                return global_config
            stored_scope = repository.get(scope)

        if stored_scope is None:
            return global_config
        scoped, overrides = stored_scope
        return merge_configs(global_config, scoped, overrides)

    def get_raw_config(self, scope: str) -> tuple[ScraperConfig | None, Overrides | None]:
        """Return the unmerged row and its overrides (``None`` overrides for global)."""

        with self._uow_factory() as uow:
            stored = uow.repositories.scraper_configs.get(scope)
        if stored is None:
            return None, None
        config, overrides = stored
        if scope == SCOPE_GLOBAL:
            return config, None
        return config, overrides

    def save_config(
        self, scope: str, config: ScraperConfig, overrides: Overrides | None = None
    ) -> ScraperConfig:
        scope = scope.strip()
        if not scope:
            raise ValueError("Scope must not be empty")
        if scope == SCOPE_GLOBAL:
            if overrides is not None and not overrides.is_empty:
                raise ValueError("The global scope cannot carry overrides")
            if not config.is_complete:
                raise ValueError("The global scope must assign every field and category")
            overrides = None
        else:
            overrides = overrides or Overrides()

        if config.scope != scope:
            # a row id belongs to exactly one scope
            config = replace(config, scope=scope, id=new_id(), created_at=None)
        with self._uow_factory() as uow:
            stored = uow.repositories.scraper_configs.save(config, overrides)
            uow.commit()
        log.info("Saved scraper configuration for scope %s", scope)
        return stored

    def reset_config(self, scope: str) -> bool:
        """Delete a narrower scope's row so it inherits global again."""

        if scope == SCOPE_GLOBAL:
            raise GlobalScopeResetError
        with self._uow_factory() as uow:
            deleted = uow.repositories.scraper_configs.delete(scope)
            uow.commit()
        if deleted:
            log.info("Reset scraper configuration for scope %s", scope)
        return deleted
