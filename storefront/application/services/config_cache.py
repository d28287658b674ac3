"""Locally persisted configuration: connection config and media host name.

The local store is the fast path, read synchronously for instant first
paint. The media host name is also mirrored to a remote document so other
devices pick it up; that remote copy is the source of truth propagated to
other sessions, while the local copy stays authoritative for this device.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.interfaces.local_store import IKeyValueStore
from storefront.application.interfaces.store import DocumentSnapshot, IDocumentStore
from storefront.application.services._store_calls import with_timeout
from storefront.core.config import Settings
from storefront.core.constants import (
    DOC_MEDIA_HOST,
    FIELD_MEDIA_HOST_NAME,
    LOCAL_KEY_CONNECTION_CONFIG,
    LOCAL_KEY_MEDIA_HOST_NAME,
)
from storefront.domain.exceptions import (
    MalformedConfigException,
    StoreException,
    ValidationException,
)
from storefront.shared.streams import Broadcaster, Subscription

logger = logging.getLogger(__name__)

RestartHook = Callable[[ConnectionConfig], Awaitable[None]]


def default_connection_config(settings: Settings) -> ConnectionConfig:
    """Built-in connection config from CONNECTION_* settings."""
    return ConnectionConfig(
        api_key=settings.connection_api_key,
        auth_domain=settings.connection_auth_domain,
        project_id=settings.connection_project_id,
        storage_bucket=settings.connection_storage_bucket,
        messaging_sender_id=settings.connection_messaging_sender_id,
        app_id=settings.connection_app_id,
    )


def parse_connection_config(raw: str) -> ConnectionConfig:
    """Parse a persisted connection config.

    Raises:
        MalformedConfigException: not a JSON object, or apiKey/projectId missing.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedConfigException(f"invalid JSON ({e.msg})") from e
    if not isinstance(data, dict):
        raise MalformedConfigException("expected a JSON object")
    try:
        config = ConnectionConfig.model_validate(data)
    except ValidationError as e:
        raise MalformedConfigException(str(e.errors()[0].get("msg", "invalid field"))) from e
    if not config.is_complete:
        raise MalformedConfigException("apiKey and projectId are required")
    return config


class ConfigCache:
    """Connection config and media host name, persisted in the local store."""

    def __init__(
        self,
        local: IKeyValueStore,
        default_connection: ConnectionConfig,
        *,
        timeout: float | None = 30.0,
    ) -> None:
        self._local = local
        self._default_connection = default_connection
        self._timeout = timeout
        self._restart_hook: RestartHook | None = None
        self._store: IDocumentStore | None = None
        self._remote_source: Subscription[DocumentSnapshot] | None = None
        self._remote_task: asyncio.Task[None] | None = None
        self._pending_writes: set[asyncio.Task[None]] = set()
        self._media_host: Broadcaster[str] = Broadcaster()

    @property
    def local(self) -> IKeyValueStore:
        return self._local

    def set_restart_hook(self, hook: RestartHook | None) -> None:
        """Called with the new config after set_connection_config persists it."""
        self._restart_hook = hook

    # ---- connection config ----

    def get_connection_config(self) -> ConnectionConfig:
        """Persisted config if well-formed, else the built-in default."""
        raw = self._local.get(LOCAL_KEY_CONNECTION_CONFIG)
        if raw is None:
            return self._default_connection
        try:
            return parse_connection_config(raw)
        except MalformedConfigException as e:
            logger.warning("%s; using built-in default", e.message)
            return self._default_connection

    async def set_connection_config(self, config: ConnectionConfig) -> None:
        """Persist config, then restart everything against it (a hard reset, not a hot swap)."""
        if not config.is_complete:
            raise ValidationException("API Key and Project ID are required", field="apiKey")
        self._local.set(LOCAL_KEY_CONNECTION_CONFIG, config.model_dump_json(by_alias=True))
        logger.info("Connection config set for project %s", config.project_id)
        if self._restart_hook is not None:
            await self._restart_hook(config)

    # ---- media host name ----

    def get_media_host_name(self) -> str:
        return self._local.get(LOCAL_KEY_MEDIA_HOST_NAME) or ""

    def set_media_host_name(self, name: str) -> None:
        """Write locally now; propagate to the remote document in the background.

        A failed remote write is logged only and the local value is kept.
        """
        self._local.set(LOCAL_KEY_MEDIA_HOST_NAME, name)
        if self._store is None:
            logger.debug("No store bound; media host name kept locally only")
            return
        try:
            task = asyncio.get_running_loop().create_task(
                self._write_remote(self._store, name), name="media-host-remote-write"
            )
        except RuntimeError:
            logger.warning("No running event loop; media host name not propagated")
            return
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write_remote(self, store: IDocumentStore, name: str) -> None:
        try:
            await with_timeout(
                store.set_document(DOC_MEDIA_HOST, {FIELD_MEDIA_HOST_NAME: name}),
                self._timeout,
            )
        except StoreException as e:
            logger.warning("Media host name not propagated to %s: %s", DOC_MEDIA_HOST, e.message)

    def subscribe_media_host_name(self) -> Subscription[str]:
        """Live media host name; remote changes overwrite the local cache first."""
        return self._media_host.subscribe()

    def _apply_remote(self, snapshot: DocumentSnapshot) -> None:
        name = snapshot.data.get(FIELD_MEDIA_HOST_NAME) if snapshot.exists else None
        if isinstance(name, str) and name:
            self._local.set(LOCAL_KEY_MEDIA_HOST_NAME, name)
        self._media_host.publish(self.get_media_host_name())

    async def _follow(self, source: Subscription[DocumentSnapshot]) -> None:
        try:
            async for snapshot in source:
                self._apply_remote(snapshot)
        except StoreException as e:
            logger.warning("Live read of %s stopped: %s", DOC_MEDIA_HOST, e.message)

    # ---- store binding (context lifecycle) ----

    def bind_store(self, store: IDocumentStore) -> None:
        """Follow the media host document of store and propagate writes to it."""
        self._store = store
        if self._media_host.closed:
            self._media_host = Broadcaster()
        self._remote_source = store.subscribe_document(DOC_MEDIA_HOST)
        self._remote_task = asyncio.create_task(
            self._follow(self._remote_source), name="sync:media-host"
        )

    async def unbind_store(self) -> None:
        """Stop following the current store and dispose every media host subscription.

        Remote writes already in flight are awaited so they land on the store
        they were issued against.
        """
        self._store = None
        if self._pending_writes:
            await asyncio.gather(*self._pending_writes, return_exceptions=True)
        if self._remote_source is not None:
            self._remote_source.dispose()
            self._remote_source = None
        if self._remote_task is not None:
            self._remote_task.cancel()
            await asyncio.gather(self._remote_task, return_exceptions=True)
            self._remote_task = None
        self._media_host.close()
