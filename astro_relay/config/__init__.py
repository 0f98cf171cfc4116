"""Configuration module exports (env names and defaults only)."""

from .upstream import VALID_VOICES, DEFAULT_VOICE_FALLBACK
from .limits import DEFAULT_MAX_CONCURRENT_CONNECTIONS

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_VOICE_FALLBACK",
    "VALID_VOICES",
]
