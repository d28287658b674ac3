"""Application services: role resolution, access gate, synchronizers, config cache."""

from storefront.application.services.access_gate import (
    ADMIN_VIEW,
    ORDER_VIEW,
    USER_VIEW,
    GuardOutcome,
    MutationGuard,
    Notification,
    ViewGuard,
)
from storefront.application.services.admin_operations import AdminOperations
from storefront.application.services.auth_service import AuthService
from storefront.application.services.catalog_sync import CatalogSynchronizer
from storefront.application.services.config_cache import ConfigCache
from storefront.application.services.identity_session import IdentitySession
from storefront.application.services.role_resolver import RoleResolver, resolve_role
from storefront.application.services.settings_sync import (
    DocumentSynchronizer,
    PaymentSettingsSynchronizer,
    SiteSettingsSynchronizer,
)
from storefront.application.services.theme_service import THEMES, Theme, ThemeService

__all__ = [
    "ADMIN_VIEW",
    "ORDER_VIEW",
    "USER_VIEW",
    "AdminOperations",
    "AuthService",
    "CatalogSynchronizer",
    "ConfigCache",
    "DocumentSynchronizer",
    "GuardOutcome",
    "IdentitySession",
    "MutationGuard",
    "Notification",
    "PaymentSettingsSynchronizer",
    "RoleResolver",
    "SiteSettingsSynchronizer",
    "THEMES",
    "Theme",
    "ThemeService",
    "ViewGuard",
    "resolve_role",
]
