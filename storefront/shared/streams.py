"""Cancelable live streams backed by asyncio queues.

A Subscription is the consumer's end of a live sequence: iterate it with
``async for``, and call ``dispose()`` (or leave a ``with`` block) when the
view that owns it goes away. Disposal is final: the producer is
unregistered, undelivered values are dropped and the stream cannot be
restarted from the same handle. Call the owning subscribe() again instead.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_END = object()
_MISSING: Any = object()


class Subscription(Generic[T]):
    """Consumer handle for a live, unbounded, cancelable stream of values."""

    def __init__(self, on_dispose: Callable[[], None] | None = None) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._on_dispose = on_dispose
        self._closed = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        """True once disposed or failed; no further values will be accepted."""
        return self._closed

    def push(self, value: T) -> bool:
        """Deliver a value. Returns False (and drops it) if the stream is closed."""
        if self._closed:
            return False
        self._queue.put_nowait(value)
        return True

    def fail(self, exc: BaseException) -> None:
        """End the stream with an error; already queued values are still delivered first."""
        if self._closed:
            return
        self._error = exc
        self._close(drain=False)

    def dispose(self) -> None:
        """Cancel the stream. Idempotent."""
        if self._closed:
            return
        self._close(drain=True)

    def _close(self, *, drain: bool) -> None:
        self._closed = True
        if drain:
            while not self._queue.empty():
                self._queue.get_nowait()
        self._queue.put_nowait(_END)
        callback, self._on_dispose = self._on_dispose, None
        if callback is not None:
            callback()

    def __aiter__(self) -> Subscription[T]:
        return self

    async def __anext__(self) -> T:
        item = await self._queue.get()
        if item is _END:
            # Keep the terminal marker so later reads end immediately too.
            self._queue.put_nowait(_END)
            if self._error is not None:
                error, self._error = self._error, None
                raise error
            raise StopAsyncIteration
        return item

    def __enter__(self) -> Subscription[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class Broadcaster(Generic[T]):
    """Fan one producer out to any number of subscriptions.

    The last published value is replayed to late subscribers once the
    producer has confirmed a value, so a consumer never waits for the next
    remote change to learn the current state. Once closed, the broadcaster
    hands out only ended subscriptions and drops published values.
    """

    def __init__(self) -> None:
        self._subscriptions: set[Subscription[T]] = set()
        self._last: Any = _MISSING
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self) -> Subscription[T]:
        if self._closed:
            ended: Subscription[T] = Subscription()
            ended.dispose()
            return ended
        sub: Subscription[T] = Subscription(on_dispose=lambda: self._subscriptions.discard(sub))
        self._subscriptions.add(sub)
        if self._last is not _MISSING:
            sub.push(self._last)
        return sub

    def publish(self, value: T) -> None:
        if self._closed:
            return
        self._last = value
        for sub in list(self._subscriptions):
            sub.push(value)

    def close(self) -> None:
        """Dispose every live subscription and refuse new ones (teardown or restart)."""
        self._closed = True
        self._last = _MISSING
        subs, self._subscriptions = self._subscriptions, set()
        for sub in subs:
            sub.dispose()
        if subs:
            logger.debug("Disposed %d live subscription(s)", len(subs))

    def __len__(self) -> int:
        return len(self._subscriptions)
