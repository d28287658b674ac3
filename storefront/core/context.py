"""StorefrontContext: the one object that owns live state.

Replaces ambient globals with an explicit lifecycle. start() runs in this
order:

1. read the connection config and media host name from the local store
   (usable before any network round trip);
2. build the document store and identity provider for that connection;
3. attach the settings, catalog and media host subscriptions;
4. resolve the identity provider's initial state.

Synchronized values are replaced when the store confirms them. aclose()
disposes every subscription and closes both backends; restart() is aclose()
followed by start() and is what a connection config change triggers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import httpx

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.interfaces.identity import IIdentityProvider
from storefront.application.interfaces.local_store import IKeyValueStore
from storefront.application.interfaces.store import IDocumentStore
from storefront.application.services.access_gate import MutationGuard
from storefront.application.services.admin_operations import AdminOperations
from storefront.application.services.auth_service import AuthService
from storefront.application.services.catalog_sync import CatalogSynchronizer
from storefront.application.services.config_cache import (
    ConfigCache,
    default_connection_config,
)
from storefront.application.services.identity_session import IdentitySession
from storefront.application.services.role_resolver import RoleResolver
from storefront.application.services.settings_sync import (
    PaymentSettingsSynchronizer,
    SiteSettingsSynchronizer,
)
from storefront.application.services.theme_service import ThemeService
from storefront.core.config import Settings
from storefront.infrastructure.external.media import CloudinaryUploader
from storefront.infrastructure.factory import (
    create_document_store,
    create_identity_provider,
)

logger = logging.getLogger(__name__)

StoreFactory = Callable[
    [Settings, ConnectionConfig, httpx.AsyncClient | None], IDocumentStore
]
IdentityFactory = Callable[
    [Settings, ConnectionConfig, IKeyValueStore, httpx.AsyncClient | None],
    IIdentityProvider,
]


class ContextNotStartedError(RuntimeError):
    """A backend-bound component was used before start() or after aclose()."""


class StorefrontContext:
    """Owns the backends, synchronizers and session for one process."""

    def __init__(
        self,
        settings: Settings,
        local: IKeyValueStore,
        *,
        http_client: httpx.AsyncClient | None = None,
        store_factory: StoreFactory = create_document_store,
        identity_factory: IdentityFactory = create_identity_provider,
    ) -> None:
        self.settings = settings
        self.local = local
        self._http = http_client
        self._store_factory = store_factory
        self._identity_factory = identity_factory
        self._lock = asyncio.Lock()

        self.config_cache = ConfigCache(
            local,
            default_connection_config(settings),
            timeout=settings.store_timeout_seconds,
        )
        self.config_cache.set_restart_hook(self.restart)
        self.resolver = RoleResolver.from_settings(settings)
        self.session = IdentitySession(self.resolver)
        self.themes = ThemeService(local)
        self.mutation_guard = MutationGuard()
        self.uploader = CloudinaryUploader(
            self.config_cache.get_media_host_name,
            base_url=settings.media_upload_base_url,
            upload_preset=settings.media_upload_preset,
            http_client=http_client,
        )

        self._connection: ConnectionConfig | None = None
        self._store: IDocumentStore | None = None
        self._identity: IIdentityProvider | None = None
        self._site_settings: SiteSettingsSynchronizer | None = None
        self._payment_settings: PaymentSettingsSynchronizer | None = None
        self._catalog: CatalogSynchronizer | None = None
        self._auth: AuthService | None = None

    @staticmethod
    def _require(component, name: str):
        if component is None:
            raise ContextNotStartedError(f"{name} is not available: context not started")
        return component

    @property
    def started(self) -> bool:
        return self._store is not None

    @property
    def connection(self) -> ConnectionConfig:
        return self._require(self._connection, "connection")

    @property
    def store(self) -> IDocumentStore:
        return self._require(self._store, "store")

    @property
    def identity(self) -> IIdentityProvider:
        return self._require(self._identity, "identity provider")

    @property
    def site_settings(self) -> SiteSettingsSynchronizer:
        return self._require(self._site_settings, "site settings")

    @property
    def payment_settings(self) -> PaymentSettingsSynchronizer:
        return self._require(self._payment_settings, "payment settings")

    @property
    def catalog(self) -> CatalogSynchronizer:
        return self._require(self._catalog, "catalog")

    @property
    def auth(self) -> AuthService:
        return self._require(self._auth, "auth service")

    def admin_operations(self) -> AdminOperations:
        """Guarded admin mutations against the current backends."""
        return AdminOperations(
            self.mutation_guard,
            catalog=self.catalog,
            site_settings=self.site_settings,
            payment_settings=self.payment_settings,
            config_cache=self.config_cache,
            themes=self.themes,
        )

    async def start(self) -> None:
        async with self._lock:
            await self._start()

    async def _start(self) -> None:
        if self.started:
            return
        settings = self.settings
        connection = self.config_cache.get_connection_config()
        logger.info(
            "Starting context for project %s (media host %r)",
            connection.project_id,
            self.config_cache.get_media_host_name(),
        )
        store = self._store_factory(settings, connection, self._http)
        identity = self._identity_factory(settings, connection, self.local, self._http)

        self._connection = connection
        self._store = store
        self._identity = identity
        self._auth = AuthService.from_settings(identity, settings)
        timeout = settings.store_timeout_seconds
        self._site_settings = SiteSettingsSynchronizer(store, timeout=timeout)
        self._payment_settings = PaymentSettingsSynchronizer(store, timeout=timeout)
        self._catalog = CatalogSynchronizer(store, timeout=timeout)

        self._site_settings.start()
        self._payment_settings.start()
        self._catalog.start()
        self.config_cache.bind_store(store)
        self.session.attach(identity)
        await identity.restore()

    async def aclose(self) -> None:
        async with self._lock:
            await self._aclose()

    async def _aclose(self) -> None:
        if not self.started:
            return
        await self.config_cache.unbind_store()
        for sync in (self._site_settings, self._payment_settings, self._catalog):
            if sync is not None:
                await sync.aclose()
        self.session.reset()
        if self._identity is not None:
            await self._identity.aclose()
        if self._store is not None:
            await self._store.aclose()
        self._connection = None
        self._store = None
        self._identity = None
        self._auth = None
        self._site_settings = None
        self._payment_settings = None
        self._catalog = None
        logger.info("Context closed; all subscriptions disposed")

    async def restart(self, connection: ConnectionConfig) -> None:
        """Tear everything down and rebuild against the persisted connection config."""
        logger.info("Restarting context for project %s", connection.project_id)
        async with self._lock:
            await self._aclose()
            await self._start()
