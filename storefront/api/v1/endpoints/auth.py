"""Auth API: login, signup, logout and current identity.

Login and signup return the provider's ID token; send it back as
'Authorization: Bearer <token>'. Reserved-account policy lives in
AuthService, not here.
"""

from fastapi import APIRouter, Depends, Response

from storefront.api.v1.dependencies import Caller, get_authenticated_caller, get_context
from storefront.application.dtos.identity import Identity
from storefront.application.services.access_gate import landing_route
from storefront.core.context import StorefrontContext
from storefront.domain.enums import Role
from storefront.schemas.auth import LoginRequest, MeResponse, SignupRequest, TokenResponse

router = APIRouter()


def _token_response(identity: Identity, role: Role) -> TokenResponse:
    return TokenResponse(
        access_token=identity.id_token,
        refresh_token=identity.refresh_token or None,
        uid=identity.uid,
        email=identity.email,
        display_name=identity.display_name,
        role=role,
        landing=landing_route(role),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    context: StorefrontContext = Depends(get_context),
) -> TokenResponse:
    """Sign in with email and password."""
    identity = await context.auth.sign_in(body.email, body.password)
    return _token_response(identity, context.resolver.resolve(identity.email))


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    body: SignupRequest,
    context: StorefrontContext = Depends(get_context),
) -> TokenResponse:
    """Create an account (reserved admin addresses are refused) and sign it in."""
    identity = await context.auth.sign_up(body.email, body.password, body.display_name)
    return _token_response(identity, context.resolver.resolve(identity.email))


@router.post("/logout", status_code=204)
async def logout(
    caller: Caller = Depends(get_authenticated_caller),
    context: StorefrontContext = Depends(get_context),
) -> Response:
    """End the calling identity's session; other sessions are unaffected."""
    await context.auth.sign_out(caller.identity)
    return Response(status_code=204)


@router.get("/me", response_model=MeResponse)
async def me(caller: Caller = Depends(get_authenticated_caller)) -> MeResponse:
    identity = caller.identity
    role = caller.role or Role.USER
    return MeResponse(
        uid=identity.uid,
        email=identity.email,
        display_name=identity.display_name,
        role=role,
        is_demo_admin=role is Role.DEMO_ADMIN,
    )
