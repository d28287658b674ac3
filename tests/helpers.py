"""Helpers for tests that wait on live subscriptions."""

import asyncio
from collections.abc import Callable
from typing import Any

from storefront.shared.streams import Subscription

ADMIN_EMAIL = "foxo.admin@gmail.com"
ADMIN_PASSWORD = "unlock.admin"
DEMO_ADMIN_EMAIL = "demo.admin@gmail.com"
DEMO_ADMIN_PASSWORD = "unlock.demo"


async def next_value(sub: Subscription[Any], timeout: float = 1.0) -> Any:
    """Next value of a live subscription, failing the test if none arrives."""
    return await asyncio.wait_for(anext(sub), timeout)


async def wait_for_value(
    sub: Subscription[Any], predicate: Callable[[Any], bool], timeout: float = 1.0
) -> Any:
    """First value of sub matching predicate."""

    async def scan() -> Any:
        async for value in sub:
            if predicate(value):
                return value
        raise AssertionError("Subscription ended before a matching value arrived")

    return await asyncio.wait_for(scan(), timeout)


async def eventually(check: Callable[[], bool], attempts: int = 100) -> None:
    """Yield to the event loop until check() holds (live updates land in tasks)."""
    for _ in range(attempts):
        if check():
            return
        await asyncio.sleep(0.01)
    assert check()
