from __future__ import annotations

import json

import pytest
from starlette.websockets import WebSocketState

from astro_relay.handlers.connections import ConnectionRegistry
from astro_relay.state.downstream import DownstreamState, DownstreamConnection


class _FakeWebSocket:
    def __init__(self, *, fail: bool = False, open_: bool = True) -> None:
        state = WebSocketState.CONNECTED if open_ else WebSocketState.DISCONNECTED
        self.application_state = state
        self.client_state = state
        self.sent: list[str] = []
        self._fail = fail

    async def send_text(self, text: str) -> None:
        if self._fail:
            raise RuntimeError("socket gone")
        self.sent.append(text)


def test_register_respects_capacity() -> None:
    registry = ConnectionRegistry(max_connections=2)
    a, b, c = (DownstreamConnection(websocket=_FakeWebSocket()) for _ in range(3))

    assert registry.register(a)
    assert registry.register(b)
    assert not registry.register(c)
    assert registry.get_connection_count() == 2
    assert a.attached and not c.attached


def test_unregister_marks_connection_closed() -> None:
    registry = ConnectionRegistry(max_connections=10)
    conn = DownstreamConnection(websocket=_FakeWebSocket())
    registry.register(conn)

    registry.unregister(conn)
    registry.unregister(conn)

    assert conn not in registry
    assert conn.state is DownstreamState.CLOSED
    assert registry.get_connection_count() == 0


@pytest.mark.asyncio
async def test_broadcast_reaches_every_open_connection() -> None:
    registry = ConnectionRegistry(max_connections=10)
    healthy = [DownstreamConnection(websocket=_FakeWebSocket()) for _ in range(3)]
    broken = DownstreamConnection(websocket=_FakeWebSocket(fail=True))
    closed = DownstreamConnection(websocket=_FakeWebSocket(open_=False))
    for conn in (healthy[0], broken, healthy[1], closed, healthy[2]):
        registry.register(conn)

    message = json.dumps({"type": "response.done"})
    delivered = await registry.broadcast_raw(message)

    assert delivered == 3
    for conn in healthy:
        assert conn.websocket.sent == [message]
    assert closed.websocket.sent == []
    # A failed send does not detach the connection.
    assert broken in registry
