"""Domain exceptions for the storefront.

Three families mirror the three external boundaries: AuthException for the
identity provider, StoreException for the remote document store and
ConfigException for locally persisted configuration. The presentation layer
maps error_code to HTTP statuses in storefront.core.exception_handlers.
"""

from typing import Any

PERMISSION_DENIED_GUIDANCE = (
    "Firestore permission denied. Update your Firestore security rules to allow "
    "this operation: Firebase Console → Firestore Database → Rules."
)


class StorefrontException(Exception):
    """Base exception for all storefront errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(StorefrontException):
    """Raised when input validation fails (e.g. an unknown patch field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class AuthException(StorefrontException):
    """Base for identity failures."""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: str = "AUTHENTICATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class InvalidAdminCredentialsException(AuthException):
    """Raised when a reserved admin address signs in without its exact password."""

    def __init__(self, demo: bool = False) -> None:
        message = "Invalid demo admin credentials" if demo else "Invalid admin credentials"
        super().__init__(message, "INVALID_ADMIN_CREDENTIALS")


class ReservedEmailException(AuthException):
    """Raised when someone tries to sign up with a reserved admin address."""

    def __init__(self) -> None:
        super().__init__("This email is reserved", "RESERVED_EMAIL")


class ProviderRejectedException(AuthException):
    """Raised when the hosted identity provider rejects a call."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Identity provider rejected the request: {reason}",
            "PROVIDER_REJECTED",
            {"reason": reason},
        )
        self.reason = reason


# ---------------------------------------------------------------------------
# Remote document store
# ---------------------------------------------------------------------------


class StoreException(StorefrontException):
    """Base for remote document store failures."""


class PermissionDeniedException(StoreException):
    """Raised when the store rejects a read or write for authorization reasons.

    The message tells the operator to fix the store-side security rules.
    """

    def __init__(self, guidance: str = PERMISSION_DENIED_GUIDANCE) -> None:
        super().__init__(guidance, "PERMISSION_DENIED")
        self.guidance = guidance


class WriteFailedException(StoreException):
    """Raised when the store rejects a write for any non-authorization reason."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Write failed: {reason}", "WRITE_FAILED", {"reason": reason})
        self.reason = reason


class NotFoundException(StoreException):
    """Raised when a partial update or lookup targets a missing document."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Document not found: {path}", "NOT_FOUND", {"path": path})
        self.path = path


# ---------------------------------------------------------------------------
# Local configuration
# ---------------------------------------------------------------------------


class ConfigException(StorefrontException):
    """Base for local configuration failures."""


class MalformedConfigException(ConfigException):
    """Persisted connection config could not be parsed or validated.

    Callers fall back to the built-in default; this is logged, not surfaced.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Persisted connection config is malformed: {reason}",
            "MALFORMED_CONFIG",
            {"reason": reason},
        )
