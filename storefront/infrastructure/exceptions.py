"""Infrastructure exceptions for external operations.

Media upload errors extend StorefrontException so presentation can map them
to HTTP responses consistently.
"""

from enum import Enum

from storefront.domain.exceptions import StorefrontException


class UploadFailureKind(str, Enum):
    """Why a media upload failed."""

    MISSING_CONFIGURATION = "missing-configuration"
    HOST_REJECTED = "host-rejected"


class UploadFailedException(StorefrontException):
    """Media upload failed, either before reaching the host or at the host."""

    def __init__(self, kind: UploadFailureKind, reason: str) -> None:
        super().__init__(
            reason,
            "UPLOAD_FAILED",
            {"kind": kind.value},
        )
        self.kind = kind
        self.reason = reason
