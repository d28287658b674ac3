"""Boundary interfaces (ports) for the application layer."""

from storefront.application.interfaces.identity import IdentityListener, IIdentityProvider
from storefront.application.interfaces.local_store import IKeyValueStore
from storefront.application.interfaces.store import DocumentSnapshot, IDocumentStore

__all__ = [
    "DocumentSnapshot",
    "IDocumentStore",
    "IdentityListener",
    "IIdentityProvider",
    "IKeyValueStore",
]
