"""Identity provider port."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from storefront.application.dtos.identity import Identity

IdentityListener = Callable[[Identity | None], None]


class IIdentityProvider(Protocol):
    """Protocol for the hosted identity provider (Firebase Auth, in-memory)."""

    @property
    def current(self) -> Identity | None:
        """Signed-in identity of this provider instance, if any."""
        ...

    async def restore(self) -> Identity | None:
        """Resolve the initial state (e.g. a persisted session) and notify listeners."""
        ...

    async def sign_in(self, email: str, password: str) -> Identity:
        """Verify credentials; raise ProviderRejectedException on refusal."""
        ...

    async def sign_up(self, email: str, password: str, display_name: str) -> Identity:
        """Create an account and sign it in."""
        ...

    async def sign_out(self, identity: Identity | None = None) -> None:
        """End a session: the given identity's, or this instance's current one.

        Other callers' sessions are left alone.
        """
        ...

    def on_identity_change(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns its disposal handle.

        The listener is called with the current value once the provider has
        resolved its initial state, then on every sign-in or sign-out.
        """
        ...

    async def verify_token(self, token: str) -> Identity | None:
        """Resolve a bearer ID token to an identity, or None if invalid."""
        ...

    async def aclose(self) -> None:
        ...
