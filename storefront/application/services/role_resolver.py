"""Role resolution: identity email to access tier."""

from __future__ import annotations

from storefront.core.config import Settings
from storefront.domain.enums import Role


def resolve_role(
    email: str | None, *, admin_email: str, demo_admin_email: str
) -> Role:
    """Map an email to its role by exact, case-insensitive match.

    Pure and total: None or empty gives Role.USER, as does any address that
    is not one of the two reserved ones.
    """
    if not email:
        return Role.USER
    normalized = email.lower()
    if normalized == admin_email.lower():
        return Role.ADMIN
    if normalized == demo_admin_email.lower():
        return Role.DEMO_ADMIN
    return Role.USER


class RoleResolver:
    """resolve_role bound to the two configured reserved addresses."""

    def __init__(self, admin_email: str, demo_admin_email: str) -> None:
        self.admin_email = admin_email
        self.demo_admin_email = demo_admin_email

    @classmethod
    def from_settings(cls, settings: Settings) -> RoleResolver:
        return cls(settings.admin_email, settings.demo_admin_email)

    def resolve(self, email: str | None) -> Role:
        return resolve_role(
            email,
            admin_email=self.admin_email,
            demo_admin_email=self.demo_admin_email,
        )

    def is_reserved(self, email: str | None) -> bool:
        return self.resolve(email) is not Role.USER
