"""Backend construction from settings and the active connection config.

STORE_BACKEND and IDENTITY_BACKEND pick the implementation; the connection
config picks the remote project. Both are rebuilt on every context restart.
"""

from __future__ import annotations

import logging

import httpx

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.interfaces.identity import IIdentityProvider
from storefront.application.interfaces.local_store import IKeyValueStore
from storefront.application.interfaces.store import IDocumentStore
from storefront.core.config import Settings

logger = logging.getLogger(__name__)


def create_document_store(
    settings: Settings,
    connection: ConnectionConfig,
    http_client: httpx.AsyncClient | None = None,
) -> IDocumentStore:
    """Return the document store for settings.store_backend."""
    if settings.store_backend == "memory":
        from storefront.infrastructure.memory import InMemoryDocumentStore

        logger.info("Using in-memory document store")
        return InMemoryDocumentStore()

    from storefront.infrastructure.firebase import (
        FirestoreDocumentStore,
        create_firestore_client,
    )

    client = create_firestore_client(settings, connection, http_client=http_client)
    return FirestoreDocumentStore(
        client, poll_interval=settings.store_poll_interval_seconds
    )


def create_identity_provider(
    settings: Settings,
    connection: ConnectionConfig,
    local_store: IKeyValueStore,
    http_client: httpx.AsyncClient | None = None,
) -> IIdentityProvider:
    """Return the identity provider for settings.identity_backend.

    The in-memory provider is seeded with the two reserved accounts so the
    dashboards are reachable in development.
    """
    if settings.identity_backend == "memory":
        from storefront.infrastructure.memory import InMemoryIdentityProvider

        provider = InMemoryIdentityProvider()
        provider.add_account(
            settings.admin_email, settings.admin_password.get_secret_value(), "Admin"
        )
        provider.add_account(
            settings.demo_admin_email,
            settings.demo_admin_password.get_secret_value(),
            "Demo Admin",
        )
        logger.info("Using in-memory identity provider")
        return provider

    from storefront.infrastructure.firebase import FirebaseIdentityProvider

    return FirebaseIdentityProvider(
        connection,
        local_store=local_store,
        http_client=http_client,
        toolkit_base_url=settings.identity_toolkit_base_url,
        secure_token_base_url=settings.secure_token_base_url,
        timeout=settings.store_timeout_seconds,
    )
