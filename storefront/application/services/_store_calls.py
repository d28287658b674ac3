"""Deadline for store writes."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from storefront.domain.exceptions import WriteFailedException

T = TypeVar("T")


async def with_timeout(call: Awaitable[T], timeout: float | None) -> T:
    """Await a store call, turning an elapsed deadline into WriteFailedException('timeout')."""
    try:
        return await asyncio.wait_for(call, timeout)
    except TimeoutError:
        raise WriteFailedException("timeout") from None
