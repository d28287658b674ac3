"""Remote document store port.

Paths are slash-separated: "settings/site" is a document, "services" a
collection. Subscriptions deliver their first snapshot once the store has
confirmed the current state, then one snapshot per change. Per document,
delivery is in order; across documents there is no ordering guarantee.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from storefront.domain.enums import SortDirection
from storefront.shared.streams import Subscription


@dataclass(frozen=True)
class DocumentSnapshot:
    """One document as confirmed by the store. data is empty when exists is False."""

    id: str
    exists: bool
    data: dict[str, Any] = field(default_factory=dict)


class IDocumentStore(Protocol):
    """Protocol for the hosted document store (Firestore REST, in-memory)."""

    def subscribe_document(self, path: str) -> Subscription[DocumentSnapshot]:
        """Live snapshots of one document. Fails the stream with a StoreException on denied reads."""
        ...

    def subscribe_collection(
        self, path: str, order_by: str, direction: SortDirection
    ) -> Subscription[list[DocumentSnapshot]]:
        """Live, store-ordered lists of a collection's documents."""
        ...

    async def set_document(self, path: str, data: dict[str, Any]) -> None:
        """Create or fully replace a document (last writer wins)."""
        ...

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a store-assigned id; return the id."""
        ...

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Merge fields into an existing document. NotFoundException if missing."""
        ...

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is not an error."""
        ...

    async def aclose(self) -> None:
        """Stop every live subscription and release connections."""
        ...
