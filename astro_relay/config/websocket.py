"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os
from pathlib import Path

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_STATIC_DIR = "STATIC_DIR"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_STATIC_DIR = "client"
INDEX_FILENAME = "index_ws.html"

WS_ENDPOINT_PATH: str = (os.getenv("WS_ENDPOINT_PATH") or "").strip() or "/ws"

# Browser client assets; served at / when the directory exists.
STATIC_DIR: Path = Path((os.getenv(ENV_STATIC_DIR) or "").strip() or DEFAULT_STATIC_DIR).expanduser()

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_DATA = "data"

# Inbound (client -> server) message types
WS_MSG_INIT = "init"
WS_MSG_MEDIA = "media"
WS_MSG_MEDIA_COMMIT = "media_commit"
WS_MSG_STOP = "stop"

# Outbound (server -> client) synthesized message types
WS_MSG_INIT_OK = "init_ok"
WS_MSG_OUTPUT_AUDIO_BINARY = "output_audio_binary"
WS_MSG_ERROR = "error"

# Close codes
WS_CLOSE_CLIENT_REQUEST_CODE = 1000
WS_CLOSE_BUSY_CODE = 4002

# Errors (payload.code values)
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_STATIC_DIR",
    "ENV_HOST",
    "ENV_PORT",
    "ENV_STATIC_DIR",
    "INDEX_FILENAME",
    "STATIC_DIR",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_KEY_DATA",
    "WS_KEY_TYPE",
    "WS_MSG_ERROR",
    "WS_MSG_INIT",
    "WS_MSG_INIT_OK",
    "WS_MSG_MEDIA",
    "WS_MSG_MEDIA_COMMIT",
    "WS_MSG_OUTPUT_AUDIO_BINARY",
    "WS_MSG_STOP",
]
