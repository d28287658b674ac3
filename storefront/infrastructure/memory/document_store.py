"""Process-local document store (implements IDocumentStore).

Used for development (STORE_BACKEND=memory) and tests. Subscriptions are
push-based: the current state is delivered as soon as a subscription is
attached and again after every write that touches it. Paths listed in
denied_paths behave like documents guarded by restrictive security rules.
"""

from __future__ import annotations

import copy
import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from storefront.application.interfaces.store import DocumentSnapshot
from storefront.domain.enums import SortDirection
from storefront.domain.exceptions import NotFoundException, PermissionDeniedException
from storefront.shared.streams import Subscription

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _CollectionWatch:
    subscription: Subscription[list[DocumentSnapshot]]
    order_by: str
    direction: SortDirection


class InMemoryDocumentStore:
    """Dict-backed store with live subscriptions and configurable denied paths."""

    def __init__(self, *, denied_paths: Iterable[str] = ()) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._document_watches: dict[str, set[Subscription[DocumentSnapshot]]] = {}
        self._collection_watches: dict[str, set[_CollectionWatch]] = {}
        self.denied_paths: set[str] = set(denied_paths)

    def _is_denied(self, path: str) -> bool:
        return any(path == p or path.startswith(p + "/") for p in self.denied_paths)

    def _check_allowed(self, path: str) -> None:
        if self._is_denied(path):
            logger.warning("Access to %s denied", path)
            raise PermissionDeniedException()

    def get_document(self, path: str) -> dict[str, Any] | None:
        """Current data of a document, or None. Not part of the store port."""
        collection, doc_id = _split(path)
        data = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    # ---- live reads ----

    def subscribe_document(self, path: str) -> Subscription[DocumentSnapshot]:
        collection, doc_id = _split(path)
        watches = self._document_watches.setdefault(path, set())
        sub: Subscription[DocumentSnapshot] = Subscription(
            on_dispose=lambda: watches.discard(sub)
        )
        if self._is_denied(path):
            sub.fail(PermissionDeniedException())
            return sub
        watches.add(sub)
        sub.push(self._document_snapshot(collection, doc_id))
        return sub

    def subscribe_collection(
        self, path: str, order_by: str, direction: SortDirection
    ) -> Subscription[list[DocumentSnapshot]]:
        watches = self._collection_watches.setdefault(path, set())
        sub: Subscription[list[DocumentSnapshot]] = Subscription(
            on_dispose=lambda: watches.discard(watch)
        )
        watch = _CollectionWatch(sub, order_by, direction)
        if self._is_denied(path):
            sub.fail(PermissionDeniedException())
            return sub
        watches.add(watch)
        sub.push(self._collection_snapshot(path, order_by, direction))
        return sub

    def _document_snapshot(self, collection: str, doc_id: str) -> DocumentSnapshot:
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return DocumentSnapshot(doc_id, exists=False)
        return DocumentSnapshot(doc_id, exists=True, data=copy.deepcopy(data))

    def _collection_snapshot(
        self, collection: str, order_by: str, direction: SortDirection
    ) -> list[DocumentSnapshot]:
        # Documents without the ordering field are left out, as in a Firestore orderBy query.
        docs = [
            (doc_id, data)
            for doc_id, data in self._collections.get(collection, {}).items()
            if data.get(order_by) is not None
        ]
        docs.sort(
            key=lambda item: (item[1][order_by], item[0]),
            reverse=direction is SortDirection.DESCENDING,
        )
        return [
            DocumentSnapshot(doc_id, exists=True, data=copy.deepcopy(data))
            for doc_id, data in docs
        ]

    def _notify(self, collection: str, doc_id: str) -> None:
        path = f"{collection}/{doc_id}"
        for sub in list(self._document_watches.get(path, ())):
            sub.push(self._document_snapshot(collection, doc_id))
        for watch in list(self._collection_watches.get(collection, ())):
            watch.subscription.push(
                self._collection_snapshot(collection, watch.order_by, watch.direction)
            )

    # ---- writes ----

    async def set_document(self, path: str, data: dict[str, Any]) -> None:
        self._check_allowed(path)
        collection, doc_id = _split(path)
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)
        self._notify(collection, doc_id)

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        self._check_allowed(collection)
        doc_id = uuid.uuid4().hex[:20]
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)
        self._notify(collection, doc_id)
        return doc_id

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        path = f"{collection}/{doc_id}"
        self._check_allowed(path)
        current = self._collections.get(collection, {}).get(doc_id)
        if current is None:
            raise NotFoundException(path)
        current.update(copy.deepcopy(data))
        self._notify(collection, doc_id)

    async def delete(self, collection: str, doc_id: str) -> None:
        self._check_allowed(f"{collection}/{doc_id}")
        if self._collections.get(collection, {}).pop(doc_id, None) is not None:
            self._notify(collection, doc_id)

    async def aclose(self) -> None:
        subs: list[Subscription[Any]] = [
            sub for watches in self._document_watches.values() for sub in watches
        ]
        subs.extend(
            watch.subscription
            for watches in self._collection_watches.values()
            for watch in watches
        )
        for sub in subs:
            sub.dispose()
        self._document_watches.clear()
        self._collection_watches.clear()


def _split(path: str) -> tuple[str, str]:
    collection, sep, doc_id = path.partition("/")
    if not sep or not doc_id or "/" in doc_id:
        raise ValueError(f"Expected 'collection/document', got: {path!r}")
    return collection, doc_id
