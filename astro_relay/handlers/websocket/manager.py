"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

from astro_relay.state import RuntimeDeps
from astro_relay.state.downstream import DownstreamConnection
from astro_relay.config.websocket import WS_CLOSE_BUSY_CODE, WS_ERROR_SERVER_AT_CAPACITY

from .errors import reject_connection
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, conn: DownstreamConnection, runtime_deps: RuntimeDeps) -> bool:
    if not runtime_deps.connections.register(conn):
        await reject_connection(
            ws,
            error_code=WS_ERROR_SERVER_AT_CAPACITY,
            message="Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await ws.accept()
    except Exception:
        runtime_deps.connections.unregister(conn)
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    conn = DownstreamConnection(websocket=ws)
    if not await _prepare_connection(ws, conn, runtime_deps):
        return

    logger.info(
        "Browser connected connection_id=%s. Active: %s",
        conn.connection_id,
        runtime_deps.connections.get_connection_count(),
    )
    try:
        await run_message_loop(conn, runtime_deps)
    finally:
        pending = list(conn.tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        runtime_deps.connections.unregister(conn)
        logger.info(
            "Browser disconnected connection_id=%s. Active: %s",
            conn.connection_id,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["handle_websocket_connection"]
