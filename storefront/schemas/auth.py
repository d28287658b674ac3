"""Auth API schemas."""

from pydantic import BaseModel, Field

from storefront.domain.enums import Role


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """Request body for POST /auth/signup."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    display_name: str = Field(default="", max_length=200)


class TokenResponse(BaseModel):
    """ID token to send as 'Authorization: Bearer <token>', with the caller's role."""

    access_token: str
    token_type: str = "bearer"
    refresh_token: str | None = None
    uid: str
    email: str
    display_name: str | None = None
    role: Role
    landing: str = Field(..., description="Route of the role's home view")


class MeResponse(BaseModel):
    """Response for GET /auth/me."""

    uid: str
    email: str
    display_name: str | None = None
    role: Role
    is_demo_admin: bool
