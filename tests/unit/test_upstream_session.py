from __future__ import annotations

import json
import asyncio
import dataclasses
from collections.abc import Callable

import pytest

from astro_relay.upstream import UpstreamState, ReconnectPolicy, UpstreamSessionManager


class _FakeTransport:
    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.close_code: int | None = None
        self.closed = False
        self.dropped = False
        self.fail_sends = False
        self._frames: asyncio.Queue = asyncio.Queue()

    async def send(self, message: str) -> None:
        if self.fail_sends:
            raise OSError("broken pipe")
        self.sent.append(json.loads(message))

    async def close(self) -> None:
        self.closed = True
        if self.close_code is None:
            self.close_code = 1000
        self._frames.put_nowait(None)

    def feed(self, frame: str | bytes) -> None:
        self._frames.put_nowait(frame)

    def drop(self, code: int = 1006) -> None:
        self.dropped = True
        self.close_code = code
        self._frames.put_nowait(None)

    def __aiter__(self) -> _FakeTransport:
        return self

    async def __anext__(self) -> str | bytes:
        frame = await self._frames.get()
        if frame is None:
            raise StopAsyncIteration
        return frame


class _Connector:
    def __init__(self, *, failures: int = 0, send_failures: int = 0) -> None:
        self.transports: list[_FakeTransport] = []
        self.urls: list[str] = []
        self.headers: list[dict[str, str]] = []
        self._failures = failures
        self._send_failures = send_failures

    async def __call__(self, url: str, headers: dict[str, str]) -> _FakeTransport:
        await asyncio.sleep(0)
        self.urls.append(url)
        self.headers.append(headers)
        if self._failures > 0:
            self._failures -= 1
            raise OSError("connection refused")
        transport = _FakeTransport()
        if self._send_failures > 0:
            self._send_failures -= 1
            transport.fail_sends = True
        self.transports.append(transport)
        return transport


async def _wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


def _manager(
    settings,
    connector: _Connector,
    received: list[str],
    *,
    policy: ReconnectPolicy | None = None,
) -> UpstreamSessionManager:
    async def broadcast(message: str) -> None:
        received.append(message)

    return UpstreamSessionManager(
        settings=settings,
        api_key="sk-test",
        broadcast=broadcast,
        connect_fn=connector,
        policy=policy or ReconnectPolicy(delay_s=0.01),
    )


@pytest.mark.asyncio
async def test_start_connects_with_default_voice_and_auth_headers(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])

    assert await manager.start() is True
    assert manager.ready
    assert manager.state is UpstreamState.OPEN
    assert connector.urls == ["wss://upstream.test/v1/realtime?model=test-model&voice=verse"]
    assert connector.headers[0]["Authorization"] == "Bearer sk-test"
    assert connector.headers[0]["OpenAI-Beta"] == "realtime=v1"
    # No instructions yet, so nothing is sent on open.
    assert connector.transports[0].sent == []

    await manager.shutdown()


@pytest.mark.asyncio
async def test_configure_when_disconnected_connects_and_sends_instructions_first(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])

    await manager.configure("kundli context", "alloy")

    assert manager.ready
    assert "voice=alloy" in connector.urls[0]
    first = connector.transports[0].sent[0]
    assert first == {"type": "session.update", "session": {"instructions": "kundli context"}}

    await manager.shutdown()


@pytest.mark.asyncio
async def test_configure_reuses_live_session(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])
    await manager.start()

    await manager.configure("new context", "coral")

    assert len(connector.transports) == 1
    assert connector.transports[0].sent == [
        {"type": "session.update", "session": {"instructions": "new context"}},
    ]
    assert manager.instructions == "new context"
    assert manager.voice == "coral"

    await manager.shutdown()


@pytest.mark.asyncio
async def test_configure_during_connect_uses_latest_instructions(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])

    await asyncio.gather(
        manager.configure("first", "alloy"),
        manager.configure("second", "alloy"),
    )

    assert len(connector.transports) == 1
    assert connector.transports[0].sent[0]["session"]["instructions"] == "second"

    await manager.shutdown()


@pytest.mark.asyncio
async def test_abnormal_close_reconnects_and_replays_configuration(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])
    await manager.configure("remember me", "sage")

    connector.transports[0].drop(1006)
    await _wait_until(lambda: len(connector.transports) == 2 and manager.ready)

    assert "voice=sage" in connector.urls[1]
    assert connector.transports[1].sent[0] == {
        "type": "session.update",
        "session": {"instructions": "remember me"},
    }
    assert manager.policy.attempts == 0

    await manager.shutdown()


@pytest.mark.asyncio
async def test_at_most_one_live_transport_across_reconnects(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])
    await manager.start()

    for expected in (2, 3):
        connector.transports[-1].drop(1006)
        await _wait_until(lambda n=expected: len(connector.transports) == n and manager.ready)
    await manager.configure("", None)

    live = [t for t in connector.transports if not (t.closed or t.dropped)]
    assert len(live) == 1
    assert live[0] is connector.transports[-1]

    await manager.shutdown()
    assert connector.transports[-1].closed


@pytest.mark.asyncio
async def test_connect_failure_schedules_reconnect(upstream_settings) -> None:
    connector = _Connector(failures=1)
    manager = _manager(upstream_settings, connector, [])

    assert await manager.start() is False
    assert not manager.ready
    await _wait_until(lambda: manager.ready)
    assert len(connector.urls) == 2

    await manager.shutdown()


@pytest.mark.asyncio
async def test_frames_are_broadcast_and_unparseable_text_is_dropped(upstream_settings) -> None:
    connector = _Connector()
    received: list[str] = []
    manager = _manager(upstream_settings, connector, received)
    await manager.start()

    transport = connector.transports[0]
    transport.feed(b"\x00\x01")
    transport.feed("this is not json")
    transport.feed('{"type":"response.audio.delta","delta":"AAAA"}')
    await _wait_until(lambda: len(received) == 2)

    assert json.loads(received[0]) == {"type": "output_audio_binary", "data": "AAE="}
    assert received[1] == '{"type":"response.audio.delta","delta":"AAAA"}'
    assert manager.ready

    await manager.shutdown()


@pytest.mark.asyncio
async def test_binary_envelope_carries_sample_rate_when_configured(upstream_settings) -> None:
    connector = _Connector()
    received: list[str] = []
    settings = dataclasses.replace(upstream_settings, output_audio_sample_rate=24000)
    manager = _manager(settings, connector, received)
    await manager.start()

    connector.transports[0].feed(b"\xff")
    await _wait_until(lambda: len(received) == 1)
    assert json.loads(received[0]) == {"type": "output_audio_binary", "data": "/w==", "sampleRate": 24000}

    await manager.shutdown()


@pytest.mark.asyncio
async def test_send_when_not_ready_is_dropped(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])

    assert await manager.send("input_audio_buffer.append", {"audio": "AAAA"}) is False
    assert connector.transports == []


@pytest.mark.asyncio
async def test_shutdown_stops_reconnecting(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])
    await manager.start()

    await manager.shutdown()
    await asyncio.sleep(0.05)

    assert len(connector.transports) == 1
    assert manager.state is UpstreamState.DISCONNECTED
    assert manager.snapshot()["ready"] is False


@pytest.mark.asyncio
async def test_shutdown_right_after_start(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])

    await manager.start()
    await manager.shutdown()

    assert connector.transports[0].closed
    assert manager.state is UpstreamState.DISCONNECTED


@pytest.mark.asyncio
async def test_configure_after_failed_open_send_reconnects(upstream_settings) -> None:
    connector = _Connector(send_failures=1)
    manager = _manager(upstream_settings, connector, [])

    await manager.configure("first", "alloy")
    assert not manager.ready

    await manager.configure("second", "alloy")

    assert manager.ready
    assert len(connector.transports) == 2
    assert connector.transports[0].closed
    assert connector.transports[1].sent[0] == {"type": "session.update", "session": {"instructions": "second"}}

    await manager.shutdown()


@pytest.mark.asyncio
async def test_send_failure_marks_not_ready_without_reconnecting(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [])
    await manager.start()

    transport = connector.transports[0]
    transport.fail_sends = True
    assert await manager.send("input_audio_buffer.append", {"audio": "AAAA"}) is False
    assert not manager.ready

    # Only the close that follows an error reconnects.
    await asyncio.sleep(0.05)
    assert len(connector.transports) == 1
    assert manager.policy.attempts == 0

    transport.drop(1006)
    await _wait_until(lambda: len(connector.transports) == 2 and manager.ready)

    await manager.shutdown()


@pytest.mark.asyncio
async def test_abnormal_close_clears_ready_before_reconnect(upstream_settings) -> None:
    connector = _Connector()
    manager = _manager(upstream_settings, connector, [], policy=ReconnectPolicy(delay_s=10.0))
    await manager.configure("context", "echo")
    assert manager.ready

    connector.transports[0].drop(1006)
    await _wait_until(lambda: manager.state is UpstreamState.DISCONNECTED)

    assert not manager.ready
    assert manager.policy.attempts == 1
    assert len(connector.transports) == 1
    assert await manager.send("input_audio_buffer.commit") is False

    await manager.shutdown()
    assert len(connector.transports) == 1
