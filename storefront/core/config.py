"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backends and reserved admin accounts are validated
at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    The connection_* fields form the built-in default ConnectionConfig used
    when nothing (or nothing well-formed) is persisted in the local store.
    """

    # App
    app_name: str = "storefront"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server (python -m storefront)
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:8080"

    # Backends: "firestore" (REST) or "memory" (process-local, dev/tests)
    store_backend: str = "firestore"
    identity_backend: str = "firebase"

    # Built-in default connection config
    connection_api_key: str = ""
    connection_auth_domain: str = "foxo-services.firebaseapp.com"
    connection_project_id: str = "foxo-services"
    connection_storage_bucket: str = "foxo-services.firebasestorage.app"
    connection_messaging_sender_id: str = ""
    connection_app_id: str = ""

    # Firestore: optional service account (key JSON string or file path).
    # Without one, requests carry the web API key and rely on security rules.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    store_poll_interval_seconds: float = 2.0
    store_timeout_seconds: float = 30.0

    # Identity Toolkit / Secure Token REST endpoints
    identity_toolkit_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    secure_token_base_url: str = "https://securetoken.googleapis.com/v1"

    # Local persistence (survives restarts)
    local_store_path: str = ".storefront/local_store.json"

    # Reserved accounts. Plaintext on purpose: these gate a demo dashboard,
    # see DESIGN.md before treating them as real credentials.
    admin_email: str = "foxo.admin@gmail.com"
    admin_password: SecretStr = SecretStr("unlock.admin")
    demo_admin_email: str = "demo.admin@gmail.com"
    demo_admin_password: SecretStr = SecretStr("unlock.demo")

    # Media upload (Cloudinary unsigned upload)
    media_upload_base_url: str = "https://api.cloudinary.com/v1_1"
    media_upload_preset: str = "ml_default"
    max_upload_size: int = 10 * 1024 * 1024  # 10MB

    # Order deep link
    order_link_base_url: str = "https://wa.me"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate backend names and reserved accounts.

        - store_backend must be 'firestore' or 'memory'.
        - identity_backend must be 'firebase' or 'memory'.
        - admin and demo admin addresses must differ (a single email maps to one role).
        """
        if self.store_backend not in ("firestore", "memory"):
            raise ValueError(
                f"store_backend must be 'firestore' or 'memory', got: {self.store_backend!r}"
            )
        if self.identity_backend not in ("firebase", "memory"):
            raise ValueError(
                f"identity_backend must be 'firebase' or 'memory', got: {self.identity_backend!r}"
            )
        if not self.admin_email or not self.demo_admin_email:
            raise ValueError("ADMIN_EMAIL and DEMO_ADMIN_EMAIL must both be set.")
        if self.admin_email.lower() == self.demo_admin_email.lower():
            raise ValueError("ADMIN_EMAIL and DEMO_ADMIN_EMAIL must be different addresses.")
        if self.store_poll_interval_seconds <= 0:
            raise ValueError("STORE_POLL_INTERVAL_SECONDS must be positive.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
