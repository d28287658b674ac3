"""Local persistence port: synchronous string key/value store that survives restarts."""

from typing import Protocol


class IKeyValueStore(Protocol):
    """Device-scoped key/value store with no expiry."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
