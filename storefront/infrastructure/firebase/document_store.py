"""Firestore-backed document store (implements IDocumentStore).

Live subscriptions poll the REST API and emit only when the confirmed state
differs from the previous emission. Each subscription owns one polling task,
cancelled by its disposal handle. A denied read fails the stream with
PermissionDeniedException; transient network errors are logged and retried
on the next tick.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from storefront.application.interfaces.store import DocumentSnapshot
from storefront.domain.enums import SortDirection
from storefront.domain.exceptions import (
    NotFoundException,
    PermissionDeniedException,
    WriteFailedException,
)
from storefront.infrastructure.firebase._rest_client import (
    FirestorePermissionError,
    FirestoreRESTClient,
)
from storefront.shared.streams import Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


def _split_document_path(path: str) -> tuple[str, str]:
    collection, sep, doc_id = path.partition("/")
    if not sep or not doc_id or "/" in doc_id:
        raise ValueError(f"Expected 'collection/document', got: {path!r}")
    return collection, doc_id


class FirestoreDocumentStore:
    """Document store over the Firestore REST API."""

    def __init__(
        self, client: FirestoreRESTClient, *, poll_interval: float = 2.0
    ) -> None:
        self._client = client
        self._poll_interval = poll_interval
        self._subscriptions: set[Subscription[Any]] = set()

    # ---- live reads ----

    def subscribe_document(self, path: str) -> Subscription[DocumentSnapshot]:
        collection, doc_id = _split_document_path(path)
        ref = self._client.collection(collection).document(doc_id)

        async def fetch() -> DocumentSnapshot:
            snapshot = await ref.get()
            if snapshot is None:
                return DocumentSnapshot(doc_id, exists=False)
            return DocumentSnapshot(doc_id, exists=True, data=snapshot.to_dict())

        return self._poll(fetch, label=path)

    def subscribe_collection(
        self, path: str, order_by: str, direction: SortDirection
    ) -> Subscription[list[DocumentSnapshot]]:
        query = self._client.collection(path).order_by(order_by, direction.value)

        async def fetch() -> list[DocumentSnapshot]:
            return [
                DocumentSnapshot(doc.id, exists=True, data=doc.to_dict())
                async for doc in query.stream()
            ]

        return self._poll(fetch, label=path)

    def _poll(self, fetch: Callable[[], Awaitable[T]], label: str) -> Subscription[T]:
        def stop() -> None:
            task.cancel()
            self._subscriptions.discard(sub)

        sub: Subscription[T] = Subscription(on_dispose=stop)

        async def run() -> None:
            last: Any = _UNSET
            while not sub.closed:
                try:
                    value = await fetch()
                except FirestorePermissionError as e:
                    logger.warning("Read of %s denied: %s", label, e)
                    sub.fail(PermissionDeniedException())
                    return
                except httpx.HTTPError as e:
                    logger.warning("Polling %s failed, retrying: %s", label, e)
                else:
                    if value != last:
                        last = value
                        sub.push(value)
                await asyncio.sleep(self._poll_interval)

        task = asyncio.create_task(run(), name=f"firestore-poll:{label}")
        self._subscriptions.add(sub)
        return sub

    # ---- writes ----

    async def set_document(self, path: str, data: dict[str, Any]) -> None:
        collection, doc_id = _split_document_path(path)
        await self._write(path, self._client.collection(collection).document(doc_id).set(data))

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        return await self._write(collection, self._client.collection(collection).add(data))

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        path = f"{collection}/{doc_id}"
        ref = self._client.collection(collection).document(doc_id)
        if not await self._write(path, ref.update(data)):
            raise NotFoundException(path)

    async def delete(self, collection: str, doc_id: str) -> None:
        path = f"{collection}/{doc_id}"
        await self._write(path, self._client.collection(collection).document(doc_id).delete())

    async def _write(self, path: str, call: Awaitable[T]) -> T:
        """Await a REST write and map transport failures to StoreException kinds."""
        try:
            return await call
        except FirestorePermissionError as e:
            logger.warning("Write to %s denied: %s", path, e)
            raise PermissionDeniedException() from e
        except httpx.HTTPStatusError as e:
            raise WriteFailedException(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise WriteFailedException(str(e) or type(e).__name__) from e

    async def aclose(self) -> None:
        for sub in list(self._subscriptions):
            sub.dispose()
        await self._client.aclose()
