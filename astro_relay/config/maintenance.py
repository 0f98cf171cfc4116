"""Background maintenance task configuration (keep-alive ping, media cleanup)."""

from __future__ import annotations

ENV_KEEP_ALIVE_URL = "KEEP_ALIVE_URL"
ENV_RENDER_EXTERNAL_URL = "RENDER_EXTERNAL_URL"
ENV_KEEP_ALIVE_INTERVAL_S = "KEEP_ALIVE_INTERVAL_S"
ENV_MEDIA_CLEANUP_DIRS = "MEDIA_CLEANUP_DIRS"
ENV_MEDIA_CLEANUP_MAX_AGE_S = "MEDIA_CLEANUP_MAX_AGE_S"
ENV_MEDIA_CLEANUP_INTERVAL_S = "MEDIA_CLEANUP_INTERVAL_S"

DEFAULT_KEEP_ALIVE_INTERVAL_S = 30.0
DEFAULT_MEDIA_CLEANUP_MAX_AGE_S = 3600.0
DEFAULT_MEDIA_CLEANUP_INTERVAL_S = 600.0

__all__ = [
    "DEFAULT_KEEP_ALIVE_INTERVAL_S",
    "DEFAULT_MEDIA_CLEANUP_INTERVAL_S",
    "DEFAULT_MEDIA_CLEANUP_MAX_AGE_S",
    "ENV_KEEP_ALIVE_INTERVAL_S",
    "ENV_KEEP_ALIVE_URL",
    "ENV_MEDIA_CLEANUP_DIRS",
    "ENV_MEDIA_CLEANUP_INTERVAL_S",
    "ENV_MEDIA_CLEANUP_MAX_AGE_S",
    "ENV_RENDER_EXTERNAL_URL",
]
