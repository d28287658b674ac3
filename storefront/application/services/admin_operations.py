"""Admin dashboard mutations, each routed through the MutationGuard.

This is the only entry point for state-changing admin work, so a
demo-admin can never reach the store, the local config or the theme.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.dtos.service import ServiceCreate, ServicePatch
from storefront.application.dtos.settings import PaymentSettings, SiteSettings
from storefront.application.services.access_gate import GuardOutcome, MutationGuard
from storefront.application.services.catalog_sync import CatalogSynchronizer
from storefront.application.services.config_cache import ConfigCache
from storefront.application.services.settings_sync import (
    PaymentSettingsSynchronizer,
    SiteSettingsSynchronizer,
)
from storefront.application.services.theme_service import Theme, ThemeService
from storefront.domain.enums import Role, ThemeName


class AdminOperations:
    """Guarded admin mutations for one caller role."""

    def __init__(
        self,
        guard: MutationGuard,
        *,
        catalog: CatalogSynchronizer,
        site_settings: SiteSettingsSynchronizer,
        payment_settings: PaymentSettingsSynchronizer,
        config_cache: ConfigCache,
        themes: ThemeService,
    ) -> None:
        self._guard = guard
        self._catalog = catalog
        self._site_settings = site_settings
        self._payment_settings = payment_settings
        self._config_cache = config_cache
        self._themes = themes

    async def create_service(self, role: Role | None, data: ServiceCreate) -> GuardOutcome[str]:
        return await self._guard.run(
            role, lambda: self._catalog.create(data), action="create_service"
        )

    async def update_service(
        self, role: Role | None, service_id: str, patch: ServicePatch
    ) -> GuardOutcome[None]:
        return await self._guard.run(
            role, lambda: self._catalog.update(service_id, patch), action="update_service"
        )

    async def remove_service(self, role: Role | None, service_id: str) -> GuardOutcome[None]:
        return await self._guard.run(
            role, lambda: self._catalog.remove(service_id), action="remove_service"
        )

    async def update_site_settings(
        self, role: Role | None, patch: BaseModel | Mapping[str, Any]
    ) -> GuardOutcome[SiteSettings]:
        return await self._guard.run(
            role, lambda: self._site_settings.update(patch), action="update_site_settings"
        )

    async def update_payment_settings(
        self, role: Role | None, patch: BaseModel | Mapping[str, Any]
    ) -> GuardOutcome[PaymentSettings]:
        return await self._guard.run(
            role,
            lambda: self._payment_settings.update(patch),
            action="update_payment_settings",
        )

    async def set_connection_config(
        self, role: Role | None, config: ConnectionConfig
    ) -> GuardOutcome[None]:
        return await self._guard.run(
            role,
            lambda: self._config_cache.set_connection_config(config),
            action="set_connection_config",
        )

    async def set_media_host_name(self, role: Role | None, name: str) -> GuardOutcome[None]:
        async def operation() -> None:
            self._config_cache.set_media_host_name(name)

        return await self._guard.run(role, operation, action="set_media_host_name")

    async def set_theme(self, role: Role | None, name: ThemeName | str) -> GuardOutcome[Theme]:
        async def operation() -> Theme:
            return self._themes.set_theme(name)

        return await self._guard.run(role, operation, action="set_theme")
