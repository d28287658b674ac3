"""Live view over WebSocket: settings, catalog and media host as they change.

The socket is one view. It is guarded like ORDER_VIEW (token as query param
?token=...), holds one subscription per live stream, and disposes all of them
when the socket goes away. A context restart ends the streams; the socket is
then closed with 1012 so the client reconnects against the new target.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from storefront.api.v1.dependencies import resolve_caller
from storefront.application.services.access_gate import ORDER_VIEW, ViewGuard
from storefront.core.context import StorefrontContext
from storefront.shared.streams import Subscription

logger = logging.getLogger(__name__)

router = APIRouter()

_CLOSE_POLICY_VIOLATION = 1008
_CLOSE_SERVICE_RESTART = 1012


async def _reject_websocket(
    websocket: WebSocket, reason: str, code: int = _CLOSE_POLICY_VIOLATION
) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_encode(item) for item in value]
    return value


async def _forward(websocket: WebSocket, kind: str, subscription: Subscription[Any]) -> None:
    async for value in subscription:
        await websocket.send_json({"type": kind, "data": _encode(value)})


async def _drain_client(websocket: WebSocket) -> None:
    """Read (and ignore) client frames until it disconnects."""
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return


@router.websocket("/live")
async def live_view(websocket: WebSocket) -> None:
    context: StorefrontContext = websocket.app.state.context
    caller = await resolve_caller(context, websocket.query_params.get("token"))
    guard = ViewGuard(ORDER_VIEW, "live")
    guard.evaluate(caller.identity, caller.role)
    if not guard.granted:
        await _reject_websocket(websocket, f"redirect:{guard.redirect_to}")
        return

    await websocket.accept()
    subscriptions: dict[str, Subscription[Any]] = {
        "siteSettings": context.site_settings.subscribe(),
        "paymentSettings": context.payment_settings.subscribe(),
        "services": context.catalog.subscribe(),
        "mediaHost": context.config_cache.subscribe_media_host_name(),
    }
    streams = [
        asyncio.create_task(_forward(websocket, kind, sub), name=f"ws:{kind}")
        for kind, sub in subscriptions.items()
    ]
    client = asyncio.create_task(_drain_client(websocket), name="ws:client")
    try:
        done, _ = await asyncio.wait([client, *streams], return_when=asyncio.FIRST_COMPLETED)
        if client not in done:
            errors = [task.exception() for task in done if task.exception() is not None]
            if errors:
                # Sending failed, so the socket is already gone.
                logger.info("Live view stream ended: %s", errors[0])
            else:
                await websocket.close(code=_CLOSE_SERVICE_RESTART, reason="restarting")
    finally:
        for sub in subscriptions.values():
            sub.dispose()
        for task in [client, *streams]:
            task.cancel()
        await asyncio.gather(client, *streams, return_exceptions=True)
        logger.debug("Live view closed; %d subscription(s) disposed", len(subscriptions))
