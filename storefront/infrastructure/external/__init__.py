"""Clients for third-party services outside the document store and identity provider."""
