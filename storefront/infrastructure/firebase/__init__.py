"""Firebase integration over REST: Firestore document store and Firebase Auth."""

from storefront.infrastructure.firebase.client import create_firestore_client
from storefront.infrastructure.firebase.document_store import FirestoreDocumentStore
from storefront.infrastructure.firebase.identity import FirebaseIdentityProvider

__all__ = [
    "FirebaseIdentityProvider",
    "FirestoreDocumentStore",
    "create_firestore_client",
]
