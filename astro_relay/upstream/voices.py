"""Voice allow-list validation."""

from __future__ import annotations

from astro_relay.config.upstream import VALID_VOICES, DEFAULT_VOICE_FALLBACK


def is_valid_voice(voice: object) -> bool:
    return isinstance(voice, str) and voice.strip() in VALID_VOICES


def resolve_voice(voice: object, default: str = DEFAULT_VOICE_FALLBACK) -> str:
    """Return ``voice`` if it is in the allow-list, otherwise ``default``."""
    if is_valid_voice(voice):
        return str(voice).strip()
    return default if default in VALID_VOICES else DEFAULT_VOICE_FALLBACK


__all__ = ["is_valid_voice", "resolve_voice"]
