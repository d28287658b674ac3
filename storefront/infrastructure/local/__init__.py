"""Local (device-scoped) persistence."""

from storefront.infrastructure.local.kv_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
