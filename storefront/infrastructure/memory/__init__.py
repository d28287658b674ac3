"""Process-local backends for development and tests."""

from storefront.infrastructure.memory.document_store import InMemoryDocumentStore
from storefront.infrastructure.memory.identity import InMemoryIdentityProvider

__all__ = ["InMemoryDocumentStore", "InMemoryIdentityProvider"]
