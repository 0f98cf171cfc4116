"""Shared error types for the AstroOne relay server."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing at startup."""


__all__ = ["ConfigurationError"]
