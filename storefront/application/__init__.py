"""Application layer: DTOs, boundary interfaces and services."""
