"""Pydantic request/response schemas for the API."""

from storefront.schemas.auth import LoginRequest, MeResponse, SignupRequest, TokenResponse
from storefront.schemas.health import HealthResponse
from storefront.schemas.storefront import (
    ConnectionUpdatedResponse,
    MediaHostRequest,
    MediaHostResponse,
    OrderLinkRequest,
    OrderLinkResponse,
    ServiceCreatedResponse,
    ThemeListResponse,
    ThemeRequest,
    ThemeResponse,
    UploadResponse,
)

__all__ = [
    "ConnectionUpdatedResponse",
    "HealthResponse",
    "LoginRequest",
    "MediaHostRequest",
    "MediaHostResponse",
    "MeResponse",
    "OrderLinkRequest",
    "OrderLinkResponse",
    "ServiceCreatedResponse",
    "SignupRequest",
    "ThemeListResponse",
    "ThemeRequest",
    "ThemeResponse",
    "TokenResponse",
    "UploadResponse",
]
