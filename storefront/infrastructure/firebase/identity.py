"""Firebase Authentication over REST (implements IIdentityProvider).

Email/password accounts go through the Identity Toolkit API
(accounts:signInWithPassword, accounts:signUp, accounts:update,
accounts:lookup) with the connection's web API key. The refresh token of
the signed-in account is persisted in the local store so restore() can
bring the session back after a restart through the Secure Token API.
Bearer ID tokens are verified with google-auth against Google's public
certificates.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any

import httpx

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.dtos.identity import Identity
from storefront.application.interfaces.identity import IdentityListener
from storefront.application.interfaces.local_store import IKeyValueStore
from storefront.core.constants import LOCAL_KEY_IDENTITY_SESSION
from storefront.domain.exceptions import ProviderRejectedException
from storefront.infrastructure._identity_feed import IdentityFeed
from storefront.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def _verify_id_token(token: str, project_id: str) -> dict[str, Any]:
    """Verify a Firebase ID token (blocking: fetches Google's signing certs)."""
    from google.auth.transport.requests import Request
    from google.oauth2 import id_token

    return id_token.verify_firebase_token(token, Request(), audience=project_id)


def _rejection_reason(resp: httpx.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str):
        return error
    return f"HTTP {resp.status_code}"


class FirebaseIdentityProvider:
    """Firebase Auth client for one project, holding one signed-in session."""

    def __init__(
        self,
        connection: ConnectionConfig,
        *,
        local_store: IKeyValueStore | None = None,
        http_client: httpx.AsyncClient | None = None,
        toolkit_base_url: str = "https://identitytoolkit.googleapis.com/v1",
        secure_token_base_url: str = "https://securetoken.googleapis.com/v1",
        timeout: float = 30.0,
    ) -> None:
        self._api_key = connection.api_key
        self._project_id = connection.project_id
        self._local_store = local_store
        self._toolkit = toolkit_base_url.rstrip("/")
        self._secure_token = secure_token_base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None
        self._feed = IdentityFeed()

    @property
    def current(self) -> Identity | None:
        return self._feed.current

    async def _post(
        self,
        url: str,
        *,
        json_body: dict[str, Any] | None = None,
        form: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._http.post(
                url, params={"key": self._api_key}, json=json_body, data=form
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider unreachable: %s", e)
            raise ProviderRejectedException("NETWORK_REQUEST_FAILED") from e
        if resp.status_code != 200:
            reason = _rejection_reason(resp)
            logger.info("Identity provider rejected %s: %s", url.rsplit("/", 1)[-1], reason)
            raise ProviderRejectedException(reason)
        return resp.json()

    @staticmethod
    def _identity(payload: dict[str, Any]) -> Identity:
        return Identity(
            uid=payload.get("localId", ""),
            email=payload.get("email", ""),
            display_name=payload.get("displayName") or None,
            id_token=payload.get("idToken", ""),
            refresh_token=payload.get("refreshToken", ""),
        )

    def _persist(self, identity: Identity | None) -> None:
        if self._local_store is None:
            return
        if identity is None or not identity.refresh_token:
            self._local_store.remove(LOCAL_KEY_IDENTITY_SESSION)
        else:
            self._local_store.set(
                LOCAL_KEY_IDENTITY_SESSION,
                json.dumps({"refreshToken": identity.refresh_token}),
            )

    def _signed_in(self, identity: Identity) -> Identity:
        self._persist(identity)
        self._feed.resolve(identity)
        return identity

    @traced("identity.restore")
    async def restore(self) -> Identity | None:
        """Exchange a persisted refresh token for a fresh session, if there is one."""
        identity: Identity | None = None
        refresh_token = self._stored_refresh_token()
        if refresh_token:
            try:
                identity = await self._refresh(refresh_token)
            except ProviderRejectedException as e:
                logger.warning("Persisted session could not be restored: %s", e.reason)
                self._persist(None)
            else:
                self._persist(identity)
        self._feed.resolve(identity)
        return identity

    def _stored_refresh_token(self) -> str | None:
        if self._local_store is None:
            return None
        raw = self._local_store.get(LOCAL_KEY_IDENTITY_SESSION)
        if not raw:
            return None
        try:
            value = json.loads(raw).get("refreshToken")
        except (json.JSONDecodeError, AttributeError):
            logger.warning("Ignoring malformed persisted identity session")
            return None
        return value if isinstance(value, str) and value else None

    async def _refresh(self, refresh_token: str) -> Identity:
        tokens = await self._post(
            f"{self._secure_token}/token",
            form={"grant_type": "refresh_token", "refresh_token": refresh_token},
        )
        lookup = await self._post(
            f"{self._toolkit}/accounts:lookup",
            json_body={"idToken": tokens["id_token"]},
        )
        users = lookup.get("users") or []
        if not users:
            raise ProviderRejectedException("USER_NOT_FOUND")
        user = users[0]
        return Identity(
            uid=user.get("localId") or tokens.get("user_id", ""),
            email=user.get("email", ""),
            display_name=user.get("displayName") or None,
            id_token=tokens["id_token"],
            refresh_token=tokens.get("refresh_token", refresh_token),
        )

    @traced("identity.sign_in")
    async def sign_in(self, email: str, password: str) -> Identity:
        payload = await self._post(
            f"{self._toolkit}/accounts:signInWithPassword",
            json_body={"email": email, "password": password, "returnSecureToken": True},
        )
        return self._signed_in(self._identity(payload))

    @traced("identity.sign_up")
    async def sign_up(self, email: str, password: str, display_name: str) -> Identity:
        payload = await self._post(
            f"{self._toolkit}/accounts:signUp",
            json_body={"email": email, "password": password, "returnSecureToken": True},
        )
        if display_name:
            updated = await self._post(
                f"{self._toolkit}/accounts:update",
                json_body={
                    "idToken": payload["idToken"],
                    "displayName": display_name,
                    "returnSecureToken": True,
                },
            )
            payload = {**payload, **updated}
        return self._signed_in(self._identity(payload))

    async def sign_out(self, identity: Identity | None = None) -> None:
        """Drop the persisted session when it belongs to the caller signing out.

        ID tokens themselves stay valid until they expire; the REST API has no
        per-token revocation for web-key clients.
        """
        current = self._feed.current
        if current is None:
            return
        if identity is not None and identity.uid != current.uid:
            logger.debug("Sign-out for %s leaves the device session in place", identity.uid)
            return
        self._persist(None)
        self._feed.resolve(None)

    def on_identity_change(self, listener: IdentityListener) -> Callable[[], None]:
        return self._feed.on_identity_change(listener)

    async def verify_token(self, token: str) -> Identity | None:
        from google.auth.exceptions import GoogleAuthError

        try:
            claims = await asyncio.to_thread(_verify_id_token, token, self._project_id)
        except (ValueError, GoogleAuthError) as e:
            logger.debug("Rejected bearer token: %s", e)
            return None
        return Identity(
            uid=claims.get("user_id") or claims.get("sub", ""),
            email=claims.get("email", ""),
            display_name=claims.get("name") or None,
            id_token=token,
        )

    async def aclose(self) -> None:
        self._feed.clear()
        if self._owns_http:
            await self._http.aclose()
