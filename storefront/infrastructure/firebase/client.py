"""Firestore client construction (REST-based, no firebase-admin).

The project comes from the active ConnectionConfig. Credentials come from
FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH
(file path) when set; otherwise the client runs on the web API key.
"""

import json
import logging
from pathlib import Path

import httpx

from storefront.application.dtos.connection import ConnectionConfig
from storefront.core.config import Settings
from storefront.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(
    settings: Settings,
    connection: ConnectionConfig,
    http_client: httpx.AsyncClient | None = None,
) -> FirestoreRESTClient:
    """Build a Firestore REST client for the connection's project.

    A service account whose project_id differs from the connection's project
    is ignored (with a warning) so a config swap never writes to the old project.
    """
    credentials = None
    key_dict = _load_key_dict(settings)
    if key_dict:
        if key_dict.get("project_id") == connection.project_id:
            credentials = _get_credentials(key_dict)
        else:
            logger.warning(
                "Service account project %r does not match connection project %r; using API key",
                key_dict.get("project_id"),
                connection.project_id,
            )
    logger.info(
        "Firestore client for project %s (%s)",
        connection.project_id,
        "service account" if credentials else "api key",
    )
    return FirestoreRESTClient(
        connection.project_id,
        credentials,
        api_key=connection.api_key,
        http_client=http_client,
        timeout=settings.store_timeout_seconds,
    )
