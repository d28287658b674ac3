"""Access gate: view guards and the demo-admin mutation guard.

Neither guard raises. A ViewGuard derives an AccessState (plus the route to
redirect to when access is denied); the MutationGuard returns a GuardOutcome
that is either the operation's result or a restricted notification.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from storefront.application.dtos.identity import Identity
from storefront.application.services.identity_session import IdentitySession
from storefront.core.constants import ROUTE_ADMIN, ROUTE_DASHBOARD, ROUTE_SIGN_IN
from storefront.domain.enums import AccessState, Role

logger = logging.getLogger(__name__)

T = TypeVar("T")

ADMIN_VIEW: frozenset[Role] = frozenset({Role.ADMIN, Role.DEMO_ADMIN})
USER_VIEW: frozenset[Role] = frozenset({Role.USER})
ORDER_VIEW: frozenset[Role] = frozenset(Role)


def landing_route(role: Role) -> str:
    """Home view of a role: the admin dashboard for both admin tiers, else the user dashboard."""
    return ROUTE_ADMIN if role.is_admin_tier else ROUTE_DASHBOARD


class ViewGuard:
    """Access state machine for one protected view.

    Starts UNRESOLVED. Each evaluation moves straight to the state implied by
    the current (identity, role) pair, so an identity change re-evaluates
    from that value rather than from UNRESOLVED.
    """

    def __init__(self, required_roles: frozenset[Role], name: str = "") -> None:
        self.required_roles = required_roles
        self.name = name
        self._state = AccessState.UNRESOLVED
        self._redirect_to: str | None = None

    @property
    def state(self) -> AccessState:
        return self._state

    @property
    def redirect_to(self) -> str | None:
        """Where a denied view sends the caller; None unless denied."""
        return self._redirect_to

    @property
    def granted(self) -> bool:
        return self._state is AccessState.GRANTED

    def evaluate(self, identity: Identity | None, role: Role | None) -> AccessState:
        if identity is None:
            self._state = AccessState.DENIED_UNAUTHENTICATED
            self._redirect_to = ROUTE_SIGN_IN
        else:
            effective = role or Role.USER
            if effective in self.required_roles:
                self._state = AccessState.GRANTED
                self._redirect_to = None
            else:
                self._state = AccessState.DENIED_WRONG_ROLE
                self._redirect_to = landing_route(effective)
        logger.debug("View %s: %s", self.name or "?", self._state.value)
        return self._state

    def bind(self, session: IdentitySession) -> Callable[[], None]:
        """Re-evaluate on every identity change of session; returns the disposal handle."""
        return session.on_change(self.evaluate)


@dataclass(frozen=True)
class Notification:
    """Non-fatal, user-facing message."""

    title: str
    description: str = ""
    variant: str = "destructive"


DEMO_RESTRICTED = Notification(
    title="Demo mode: changes are disabled",
    description="The demo admin account can browse the dashboard but cannot save changes.",
)
ADMIN_REQUIRED = Notification(
    title="Admin access required",
    description="Only the admin account can make changes.",
)


@dataclass(frozen=True)
class GuardOutcome(Generic[T]):
    """Result of a guarded mutation: the operation's value, or a restriction."""

    allowed: bool
    value: T | None = None
    notification: Notification | None = None

    @property
    def restricted(self) -> bool:
        return not self.allowed


class MutationGuard:
    """Runs admin mutations, intercepting them for every role but ADMIN.

    Intercepted operations are never awaited (or even called), so nothing
    reaches the document store. The optional notifier receives each
    restriction notification.
    """

    def __init__(self, notifier: Callable[[Notification], None] | None = None) -> None:
        self._notifier = notifier

    async def run(
        self,
        role: Role | None,
        operation: Callable[[], Awaitable[T]],
        *,
        action: str = "",
    ) -> GuardOutcome[T]:
        if role is Role.ADMIN:
            return GuardOutcome(allowed=True, value=await operation())
        notification = DEMO_RESTRICTED if role is Role.DEMO_ADMIN else ADMIN_REQUIRED
        logger.info(
            "Mutation %s intercepted for role %s", action or "?", role.value if role else None
        )
        if self._notifier is not None:
            self._notifier(notification)
        return GuardOutcome(allowed=False, notification=notification)
