"""Domain layer: enums and exceptions with no infrastructure dependencies."""

from storefront.domain.enums import AccessState, Role, SortDirection, ThemeName
from storefront.domain.exceptions import (
    AuthException,
    ConfigException,
    InvalidAdminCredentialsException,
    MalformedConfigException,
    NotFoundException,
    PermissionDeniedException,
    ProviderRejectedException,
    ReservedEmailException,
    StoreException,
    StorefrontException,
    ValidationException,
    WriteFailedException,
)

__all__ = [
    "AccessState",
    "Role",
    "SortDirection",
    "ThemeName",
    "StorefrontException",
    "ValidationException",
    "AuthException",
    "InvalidAdminCredentialsException",
    "ReservedEmailException",
    "ProviderRejectedException",
    "StoreException",
    "PermissionDeniedException",
    "WriteFailedException",
    "NotFoundException",
    "ConfigException",
    "MalformedConfigException",
]
