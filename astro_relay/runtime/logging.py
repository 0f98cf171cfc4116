"""Logging initialization."""

from __future__ import annotations

import os
import logging

from astro_relay.config.logging import LOG_LEVEL, LOG_FORMAT, NOISY_LOGGERS


def configure_logging() -> None:
    # httpx/websockets log every request and frame at INFO/DEBUG. Keep them tame unless explicitly enabled.
    if (os.getenv("SHOW_HTTP_LOGS") or "").strip().lower() not in {"1", "true", "yes"}:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
