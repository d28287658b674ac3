"""Process-local identity provider (implements IIdentityProvider).

Accounts and issued tokens live in memory; nothing survives a restart. Error
reasons use the hosted provider's codes so callers see the same values in
development and production.
"""

from __future__ import annotations

import secrets
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from storefront.application.dtos.identity import Identity
from storefront.application.interfaces.identity import IdentityListener
from storefront.domain.exceptions import ProviderRejectedException
from storefront.infrastructure._identity_feed import IdentityFeed

_MIN_PASSWORD_LENGTH = 6


@dataclass
class _Account:
    uid: str
    email: str
    password: str
    display_name: str | None


class InMemoryIdentityProvider:
    """Email/password accounts held in a dict."""

    def __init__(self) -> None:
        self._accounts: dict[str, _Account] = {}
        self._tokens: dict[str, Identity] = {}
        self._feed = IdentityFeed()

    def add_account(
        self, email: str, password: str, display_name: str | None = None
    ) -> None:
        """Register an account directly (seeding reserved accounts, tests)."""
        key = email.lower()
        if key not in self._accounts:
            self._accounts[key] = _Account(uuid.uuid4().hex, email, password, display_name)

    @property
    def current(self) -> Identity | None:
        return self._feed.current

    async def restore(self) -> Identity | None:
        self._feed.resolve(self._feed.current)
        return self._feed.current

    async def sign_in(self, email: str, password: str) -> Identity:
        account = self._accounts.get(email.lower())
        if account is None or not secrets.compare_digest(account.password, password):
            raise ProviderRejectedException("INVALID_LOGIN_CREDENTIALS")
        return self._issue(account)

    async def sign_up(self, email: str, password: str, display_name: str) -> Identity:
        if email.lower() in self._accounts:
            raise ProviderRejectedException("EMAIL_EXISTS")
        if len(password) < _MIN_PASSWORD_LENGTH:
            raise ProviderRejectedException(
                "WEAK_PASSWORD : Password should be at least 6 characters"
            )
        self.add_account(email, password, display_name or None)
        return self._issue(self._accounts[email.lower()])

    async def sign_out(self, identity: Identity | None = None) -> None:
        current = self._feed.current
        target = identity if identity is not None else current
        if target is None:
            return
        self._tokens.pop(target.id_token, None)
        if current is not None and current.uid == target.uid:
            self._feed.resolve(None)

    def on_identity_change(self, listener: IdentityListener) -> Callable[[], None]:
        return self._feed.on_identity_change(listener)

    async def verify_token(self, token: str) -> Identity | None:
        return self._tokens.get(token)

    async def aclose(self) -> None:
        self._feed.clear()

    def _issue(self, account: _Account) -> Identity:
        identity = Identity(
            uid=account.uid,
            email=account.email,
            display_name=account.display_name,
            id_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
        )
        self._tokens[identity.id_token] = identity
        self._feed.resolve(identity)
        return identity
