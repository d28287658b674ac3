"""Tests for ConfigCache: connection config and media host name."""

import json
from unittest.mock import AsyncMock

import pytest

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.services.config_cache import (
    ConfigCache,
    default_connection_config,
    parse_connection_config,
)
from storefront.domain.exceptions import MalformedConfigException, ValidationException
from storefront.infrastructure.local import InMemoryKeyValueStore
from storefront.infrastructure.memory import InMemoryDocumentStore
from tests.helpers import next_value, wait_for_value

DEFAULT = ConnectionConfig(api_key="default-key", project_id="default-project")
CUSTOM = ConnectionConfig(
    api_key="k2",
    auth_domain="other.firebaseapp.com",
    project_id="other",
    storage_bucket="other.appspot.com",
    messaging_sender_id="123",
    app_id="1:123:web:abc",
)


@pytest.fixture
def local() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(local: InMemoryKeyValueStore) -> ConfigCache:
    return ConfigCache(local, DEFAULT)


def test_default_connection_from_settings(memory_settings) -> None:
    config = default_connection_config(memory_settings)
    assert config.project_id == memory_settings.connection_project_id
    assert config.auth_domain == memory_settings.connection_auth_domain


def test_nothing_persisted_gives_default(cache: ConfigCache) -> None:
    assert cache.get_connection_config() == DEFAULT


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[1, 2]",
        json.dumps({"projectId": "p"}),
        json.dumps({"apiKey": "   ", "projectId": "p"}),
    ],
)
def test_malformed_persisted_config_falls_back(
    local: InMemoryKeyValueStore, cache: ConfigCache, raw: str
) -> None:
    local.set("firebaseConfig", raw)
    assert cache.get_connection_config() == DEFAULT


def test_parse_connection_config_raises_on_malformed() -> None:
    with pytest.raises(MalformedConfigException) as exc_info:
        parse_connection_config("{}")
    assert exc_info.value.error_code == "MALFORMED_CONFIG"


def test_parse_connection_config_accepts_camel_case() -> None:
    raw = json.dumps({"apiKey": "k", "projectId": "p", "authDomain": "p.firebaseapp.com"})
    assert parse_connection_config(raw) == ConnectionConfig(
        api_key="k", project_id="p", auth_domain="p.firebaseapp.com"
    )


async def test_set_connection_config_persists_then_restarts(
    local: InMemoryKeyValueStore, cache: ConfigCache
) -> None:
    hook = AsyncMock()
    cache.set_restart_hook(hook)
    await cache.set_connection_config(CUSTOM)

    stored = json.loads(local.get("firebaseConfig"))
    assert stored["apiKey"] == "k2"
    assert stored["projectId"] == "other"
    assert cache.get_connection_config() == CUSTOM
    hook.assert_awaited_once_with(CUSTOM)


async def test_incomplete_connection_config_is_rejected(
    local: InMemoryKeyValueStore, cache: ConfigCache
) -> None:
    hook = AsyncMock()
    cache.set_restart_hook(hook)
    with pytest.raises(ValidationException) as exc_info:
        await cache.set_connection_config(ConnectionConfig(api_key="k", project_id=" "))
    assert exc_info.value.message == "API Key and Project ID are required"
    assert local.get("firebaseConfig") is None
    hook.assert_not_called()


def test_media_host_name_without_store_is_local_only(cache: ConfigCache) -> None:
    assert cache.get_media_host_name() == ""
    cache.set_media_host_name("demo-cloud")
    assert cache.get_media_host_name() == "demo-cloud"


async def test_media_host_name_propagates_to_store(cache: ConfigCache) -> None:
    store = InMemoryDocumentStore()
    cache.bind_store(store)
    cache.set_media_host_name("shop-cloud")
    assert cache.get_media_host_name() == "shop-cloud"
    await cache.unbind_store()
    assert store.get_document("settings/cloudinary") == {"cloudName": "shop-cloud"}


async def test_remote_change_overwrites_local(
    local: InMemoryKeyValueStore, cache: ConfigCache
) -> None:
    local.set("cloudinaryName", "local-cloud")
    store = InMemoryDocumentStore()
    cache.bind_store(store)
    sub = cache.subscribe_media_host_name()
    assert await next_value(sub) == "local-cloud"

    await store.set_document("settings/cloudinary", {"cloudName": "remote-cloud"})
    assert await wait_for_value(sub, lambda v: v == "remote-cloud") == "remote-cloud"
    assert local.get("cloudinaryName") == "remote-cloud"
    await cache.unbind_store()
    assert sub.closed


async def test_failed_remote_write_keeps_local_value() -> None:
    cache = ConfigCache(InMemoryKeyValueStore(), DEFAULT)
    store = InMemoryDocumentStore(denied_paths=["settings/cloudinary"])
    cache.bind_store(store)
    cache.set_media_host_name("kept")
    await cache.unbind_store()
    assert cache.get_media_host_name() == "kept"
    assert store.get_document("settings/cloudinary") is None


async def test_rebind_does_not_replay_previous_binding(
    local: InMemoryKeyValueStore, cache: ConfigCache
) -> None:
    first = InMemoryDocumentStore()
    cache.bind_store(first)
    await first.set_document("settings/cloudinary", {"cloudName": "old-cloud"})
    await wait_for_value(cache.subscribe_media_host_name(), lambda v: v == "old-cloud")
    await cache.unbind_store()
    assert cache.subscribe_media_host_name().closed

    local.set("cloudinaryName", "new-cloud")
    cache.bind_store(InMemoryDocumentStore())
    sub = cache.subscribe_media_host_name()
    assert not sub.closed
    assert await next_value(sub) == "new-cloud"
    await cache.unbind_store()
