"""Storefront: catalog, settings and access layer for the ordering site."""
