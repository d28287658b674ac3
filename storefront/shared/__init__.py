"""Shared utilities: telemetry, streams and helpers used across layers."""
