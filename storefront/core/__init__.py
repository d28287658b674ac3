"""Core: configuration, lifespan, exception handlers and the sync context."""

from storefront.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
