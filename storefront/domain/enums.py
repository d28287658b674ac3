"""Domain enumerations for the storefront.

Enums represent fixed sets of domain values (roles, access states, themes).
"""

from enum import Enum


class Role(str, Enum):
    """Access tier derived from an identity's email address.

    Never stored; see storefront.application.services.role_resolver.
    """

    USER = "user"
    ADMIN = "admin"
    DEMO_ADMIN = "demo-admin"

    @property
    def is_admin_tier(self) -> bool:
        """True for both admin roles (the dashboard is visible to the demo account)."""
        return self in (Role.ADMIN, Role.DEMO_ADMIN)


class AccessState(str, Enum):
    """State of a view guard for one protected view."""

    UNRESOLVED = "unresolved"
    DENIED_UNAUTHENTICATED = "denied-unauthenticated"
    DENIED_WRONG_ROLE = "denied-wrong-role"
    GRANTED = "granted"


class SortDirection(str, Enum):
    """Ordering direction for collection subscriptions (Firestore REST names)."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class ThemeName(str, Enum):
    """Named colour themes selectable from the admin dashboard."""

    DEFAULT = "default"
    OCEAN = "ocean"
    SUNSET = "sunset"
    FOREST = "forest"
    ROYAL = "royal"
    CHERRY = "cherry"
    GOLD = "gold"
    MIDNIGHT = "midnight"
    NEON = "neon"
    ROSE = "rose"
    EMBER = "ember"

    @classmethod
    def values(cls) -> list[str]:
        """Return all theme names as strings."""
        return [theme.value for theme in cls]
