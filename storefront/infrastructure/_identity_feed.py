"""Identity-change feed shared by the identity provider implementations."""

from __future__ import annotations

import logging
from collections.abc import Callable

from storefront.application.dtos.identity import Identity
from storefront.application.interfaces.identity import IdentityListener

logger = logging.getLogger(__name__)


class IdentityFeed:
    """Holds the current identity and fans changes out to listeners.

    Until resolve() has been called the initial state is pending and new
    listeners are not called; afterwards a new listener receives the current
    value immediately.
    """

    def __init__(self) -> None:
        self._current: Identity | None = None
        self._resolved = False
        self._listeners: list[IdentityListener] = []

    @property
    def current(self) -> Identity | None:
        return self._current

    @property
    def resolved(self) -> bool:
        return self._resolved

    def on_identity_change(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)
        if self._resolved:
            listener(self._current)

        def dispose() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def resolve(self, identity: Identity | None) -> None:
        """Set the current identity and notify every listener."""
        self._current = identity
        self._resolved = True
        for listener in list(self._listeners):
            try:
                listener(identity)
            except Exception:
                logger.exception("Identity listener failed")

    def clear(self) -> None:
        self._listeners.clear()
