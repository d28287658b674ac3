"""Current identity and its derived role.

The role is recomputed synchronously on every identity change and stored
with that identity value only; a new identity never sees the previous role.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from storefront.application.dtos.identity import Identity
from storefront.application.interfaces.identity import IIdentityProvider
from storefront.application.services.role_resolver import RoleResolver
from storefront.domain.enums import Role

logger = logging.getLogger(__name__)

SessionListener = Callable[[Identity | None, Role | None], None]


class IdentitySession:
    """Tracks (identity, role) for one session and notifies listeners on change."""

    def __init__(self, resolver: RoleResolver) -> None:
        self._resolver = resolver
        self._resolved = False
        self._identity: Identity | None = None
        self._role: Role | None = None
        self._listeners: list[SessionListener] = []
        self._detach: Callable[[], None] | None = None

    @property
    def resolved(self) -> bool:
        """False until the identity provider has delivered its first value."""
        return self._resolved

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def role(self) -> Role | None:
        """Role of the current identity; None when signed out or unresolved."""
        return self._role

    def set_identity(self, identity: Identity | None) -> None:
        self._identity = identity
        self._role = self._resolver.resolve(identity.email) if identity else None
        self._resolved = True
        logger.debug(
            "Identity changed: %s (%s)",
            identity.uid if identity else None,
            self._role.value if self._role else "signed out",
        )
        for listener in list(self._listeners):
            listener(identity, self._role)

    def on_change(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; called at once with the current value if resolved."""
        self._listeners.append(listener)
        if self._resolved:
            listener(self._identity, self._role)

        def dispose() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def attach(self, provider: IIdentityProvider) -> None:
        """Follow the provider's identity-change feed (replacing any previous one)."""
        self.detach()
        self._detach = provider.on_identity_change(self.set_identity)

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    def reset(self) -> None:
        """Back to unresolved, as before the first provider notification."""
        self.detach()
        self._resolved = False
        self._identity = None
        self._role = None
