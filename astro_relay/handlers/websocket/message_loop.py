"""WebSocket message loop for downstream browser clients (/ws)."""

from __future__ import annotations

import logging

from fastapi import WebSocketDisconnect

from astro_relay.state import RuntimeDeps
from astro_relay.state.downstream import DownstreamConnection

from .dispatch import HANDLERS
from .parser import parse_client_message

logger = logging.getLogger(__name__)


async def _receive_raw(conn: DownstreamConnection) -> tuple[str | bytes | None, bool]:
    """Return ``(raw, disconnected)`` for the next downstream frame."""
    message = await conn.websocket.receive()
    if message.get("type") == "websocket.disconnect":
        return None, True
    raw = message.get("text")
    if raw is None:
        raw = message.get("bytes")
    return raw, False


async def run_message_loop(conn: DownstreamConnection, runtime_deps: RuntimeDeps) -> None:
    try:
        while True:
            raw, disconnected = await _receive_raw(conn)
            if disconnected:
                return
            if raw is None:
                continue

            try:
                msg = parse_client_message(raw)
            except ValueError as exc:
                logger.warning("Browser WS message parse error connection_id=%s: %s", conn.connection_id, exc)
                continue

            handler = HANDLERS.get(msg["type"])
            if handler is None:
                logger.debug("ignoring message type %r connection_id=%s", msg["type"], conn.connection_id)
                continue

            try:
                outcome = await handler(conn, runtime_deps, msg)
            except Exception:
                logger.exception("handler %s failed connection_id=%s", msg["type"], conn.connection_id)
                continue
            if outcome == "close":
                return
    except WebSocketDisconnect:
        return


__all__ = ["run_message_loop"]
