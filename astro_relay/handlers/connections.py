"""Downstream connection registry and fan-out broadcast."""

from __future__ import annotations

import logging
from typing import Any

from starlette.websockets import WebSocketState

from astro_relay.state.downstream import DownstreamState, DownstreamConnection

logger = logging.getLogger(__name__)


def is_open_for_write(ws: Any) -> bool:
    return (
        getattr(ws, "application_state", None) is WebSocketState.CONNECTED
        and getattr(ws, "client_state", None) is WebSocketState.CONNECTED
    )


class ConnectionRegistry:
    """Every registered connection receives every upstream event.

    Single-session by design: there is one upstream conversation shared by all
    downstream clients, so the registry is a flat set rather than keyed by session.
    """

    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._active: dict[str, DownstreamConnection] = {}

    def register(self, conn: DownstreamConnection) -> bool:
        """Admit a connection; ``False`` when the server is at capacity."""
        if conn.connection_id in self._active:
            return True
        if len(self._active) >= self._max:
            return False
        self._active[conn.connection_id] = conn
        conn.attached = True
        return True

    def unregister(self, conn: DownstreamConnection) -> None:
        self._active.pop(conn.connection_id, None)
        conn.attached = False
        conn.state = DownstreamState.CLOSED

    def get_connection_count(self) -> int:
        return len(self._active)

    def __contains__(self, conn: object) -> bool:
        return isinstance(conn, DownstreamConnection) and conn.connection_id in self._active

    async def broadcast_raw(self, message: str) -> int:
        """Send ``message`` to every open connection; returns how many sends succeeded."""
        delivered = 0
        # Snapshot: connections may register/unregister while sends are suspended.
        for conn in list(self._active.values()):
            ws = conn.websocket
            if not is_open_for_write(ws):
                continue
            try:
                await ws.send_text(message)
            except Exception:
                logger.debug("broadcast to %s failed", conn.connection_id, exc_info=True)
                continue
            delivered += 1
        return delivered


__all__ = ["ConnectionRegistry", "is_open_for_write"]
