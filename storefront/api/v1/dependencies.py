"""Presentation-layer dependency injection.

The StorefrontContext built in the lifespan is the composition root; routes
reach the synchronizers, services and guards only through these
dependencies. Callers authenticate with 'Authorization: Bearer <ID token>',
verified by the context's identity provider.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.api.exceptions import MutationRestrictedException, ViewRedirectException
from storefront.application.dtos.identity import Identity
from storefront.application.services.access_gate import (
    DEMO_RESTRICTED,
    GuardOutcome,
    ViewGuard,
)
from storefront.application.services.admin_operations import AdminOperations
from storefront.core.context import StorefrontContext
from storefront.domain.enums import Role
from storefront.domain.exceptions import AuthException

T = TypeVar("T")

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Identity behind the current request and its role (both None when anonymous)."""

    identity: Identity | None
    role: Role | None

    @property
    def authenticated(self) -> bool:
        return self.identity is not None


def get_context(request: Request) -> StorefrontContext:
    """StorefrontContext from app.state (set in lifespan)."""
    return request.app.state.context


async def resolve_caller(context: StorefrontContext, token: str | None) -> Caller:
    """Verify a bearer token and derive the caller's role. Never raises for bad tokens."""
    identity = await context.identity.verify_token(token) if token else None
    role = context.resolver.resolve(identity.email) if identity else None
    return Caller(identity, role)


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    context: StorefrontContext = Depends(get_context),
) -> Caller:
    return await resolve_caller(context, credentials.credentials if credentials else None)


async def get_authenticated_caller(caller: Caller = Depends(get_caller)) -> Caller:
    """Caller that must be signed in; 401 otherwise (API endpoints, not views)."""
    if not caller.authenticated:
        raise AuthException("Not authenticated")
    return caller


def require_view(required_roles: frozenset[Role], name: str) -> Callable[..., Awaitable[Caller]]:
    """Dependency guarding a view: 303 to the guard's redirect when access is denied."""

    async def dependency(caller: Caller = Depends(get_caller)) -> Caller:
        guard = ViewGuard(required_roles, name)
        guard.evaluate(caller.identity, caller.role)
        if not guard.granted:
            raise ViewRedirectException(guard.state, guard.redirect_to or "/")
        return caller

    return dependency


def get_admin_operations(
    context: StorefrontContext = Depends(get_context),
) -> AdminOperations:
    return context.admin_operations()


def unwrap(outcome: GuardOutcome[T]) -> T:
    """Value of an allowed mutation; MutationRestrictedException for an intercepted one."""
    if outcome.restricted:
        notification = outcome.notification or DEMO_RESTRICTED
        code = "DEMO_RESTRICTED" if notification is DEMO_RESTRICTED else "ADMIN_REQUIRED"
        raise MutationRestrictedException(notification, code)
    return outcome.value  # type: ignore[return-value]
