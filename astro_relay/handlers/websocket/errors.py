"""Send helpers for the downstream WebSocket JSON envelope."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from astro_relay.config.websocket import WS_KEY_TYPE, WS_MSG_ERROR

logger = logging.getLogger(__name__)


def build_envelope(msg_type: str, **fields: Any) -> dict[str, Any]:
    envelope: dict[str, Any] = {WS_KEY_TYPE: msg_type}
    envelope.update(fields)
    return envelope


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_envelope(ws: WebSocket, msg_type: str, **fields: Any) -> bool:
    data = build_envelope(msg_type, **fields)
    return await safe_send_text(ws, orjson.dumps(data).decode("utf-8"))


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await safe_send_envelope(ws, WS_MSG_ERROR, code=error_code, message=message)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "build_envelope",
    "reject_connection",
    "safe_send_envelope",
    "safe_send_text",
]
