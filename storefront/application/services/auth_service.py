"""Sign-in and sign-up policy on top of the identity provider.

The two reserved admin addresses can only sign in with their configured
password, checked here before the provider is called, and can never be
used to sign up.
"""

from __future__ import annotations

import hmac
import logging

from pydantic import SecretStr

from storefront.application.dtos.identity import Identity
from storefront.application.interfaces.identity import IIdentityProvider
from storefront.application.services.role_resolver import RoleResolver
from storefront.core.config import Settings
from storefront.domain.enums import Role
from storefront.domain.exceptions import (
    InvalidAdminCredentialsException,
    ReservedEmailException,
)

logger = logging.getLogger(__name__)


def _matches(candidate: str, expected: SecretStr) -> bool:
    return hmac.compare_digest(
        candidate.encode("utf-8"), expected.get_secret_value().encode("utf-8")
    )


class AuthService:
    """Applies reserved-account policy, then delegates to the provider."""

    def __init__(
        self,
        provider: IIdentityProvider,
        resolver: RoleResolver,
        *,
        admin_password: SecretStr,
        demo_admin_password: SecretStr,
    ) -> None:
        self._provider = provider
        self._resolver = resolver
        self._admin_password = admin_password
        self._demo_admin_password = demo_admin_password

    @classmethod
    def from_settings(cls, provider: IIdentityProvider, settings: Settings) -> AuthService:
        return cls(
            provider,
            RoleResolver.from_settings(settings),
            admin_password=settings.admin_password,
            demo_admin_password=settings.demo_admin_password,
        )

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in; reserved addresses need their exact configured password.

        Raises:
            InvalidAdminCredentialsException: reserved address, wrong password.
            ProviderRejectedException: the provider refused the credentials.
        """
        role = self._resolver.resolve(email)
        if role is Role.ADMIN and not _matches(password, self._admin_password):
            logger.warning("Rejected admin sign-in with wrong password")
            raise InvalidAdminCredentialsException()
        if role is Role.DEMO_ADMIN and not _matches(password, self._demo_admin_password):
            logger.warning("Rejected demo admin sign-in with wrong password")
            raise InvalidAdminCredentialsException(demo=True)
        return await self._provider.sign_in(email, password)

    async def sign_up(self, email: str, password: str, display_name: str) -> Identity:
        """Create an account; reserved addresses raise ReservedEmailException."""
        if self._resolver.is_reserved(email):
            raise ReservedEmailException()
        return await self._provider.sign_up(email, password, display_name)

    async def sign_out(self, identity: Identity | None = None) -> None:
        await self._provider.sign_out(identity)
