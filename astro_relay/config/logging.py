"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = (os.getenv("LOG_FORMAT") or "").strip() or "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers muted to WARNING unless SHOW_HTTP_LOGS is set.
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "websockets", "uvicorn.access")

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "NOISY_LOGGERS"]
