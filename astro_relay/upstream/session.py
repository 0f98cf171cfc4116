"""Single persistent connection to the upstream realtime API.

The manager is the only owner of the upstream transport. Every downstream
client shares this one session: events received upstream are handed to the
broadcast callback, and ``configure``/``send`` are the only ways in.

Lifecycle::

    DISCONNECTED -> CONNECTING -> OPEN(ready) -> CLOSING -> DISCONNECTED

A close (clean or abnormal) schedules a reconnect through ``ReconnectPolicy``
and the new connection replays the last known instructions and voice.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from urllib.parse import urlencode
from collections.abc import Callable, Awaitable

from websockets.exceptions import ConnectionClosed

from astro_relay.state.settings import UpstreamSettings
from astro_relay.config.upstream import OPENAI_BETA_HEADER
from astro_relay.realtime.protocol import (
    EVENT_SESSION_UPDATE,
    build_event,
    encode_event,
    instruction_payload,
    text_frame_envelope,
    binary_frame_envelope,
)

from .state import UpstreamState
from .voices import resolve_voice
from .reconnect import ReconnectPolicy
from .transport import ConnectFn, UpstreamTransport, websockets_connect

logger = logging.getLogger(__name__)

BroadcastFn = Callable[[str], Awaitable[None]]


class UpstreamSessionManager:
    def __init__(
        self,
        *,
        settings: UpstreamSettings,
        api_key: str,
        broadcast: BroadcastFn,
        connect_fn: ConnectFn | None = None,
        policy: ReconnectPolicy | None = None,
    ) -> None:
        self._settings = settings
        self._api_key = api_key
        self._broadcast = broadcast
        self._connect_fn: ConnectFn = connect_fn or websockets_connect
        self._policy = policy or ReconnectPolicy(
            delay_s=settings.reconnect_delay_s,
            multiplier=settings.reconnect_multiplier,
            max_delay_s=settings.reconnect_max_delay_s,
            max_attempts=settings.reconnect_max_attempts,
        )

        self._state = UpstreamState.DISCONNECTED
        self._ready = False
        self._transport: UpstreamTransport | None = None
        self._receive_task: asyncio.Task | None = None
        self._reconnect_task: asyncio.Task | None = None
        self._connect_lock = asyncio.Lock()
        self._shutting_down = False

        # Last applied configuration; replayed on every reconnect.
        self._instructions = ""
        self._voice = settings.default_voice

    @property
    def state(self) -> UpstreamState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def instructions(self) -> str:
        return self._instructions

    @property
    def voice(self) -> str:
        return self._voice

    @property
    def policy(self) -> ReconnectPolicy:
        return self._policy

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": self._state.value,
            "ready": self._ready,
            "voice": self._voice,
            "reconnect_attempts": self._policy.attempts,
        }

    async def start(self) -> bool:
        """Open the initial connection with no instructions and the default voice."""
        return await self.connect()

    async def configure(self, enrichment_text: str, voice: str | None = None) -> None:
        text = enrichment_text or ""
        if text:
            self._instructions = text
        self._voice = resolve_voice(voice, self._settings.default_voice)

        if self._state is UpstreamState.OPEN and self._ready and self._transport is not None:
            # Reuse the live session; only inject the new context.
            if text:
                await self.send(EVENT_SESSION_UPDATE, instruction_payload(text))
            return

        if self._state is UpstreamState.CONNECTING:
            # The in-flight connect sends the pending instructions once open.
            logger.debug("upstream: connect in flight; pending configuration updated")
            return

        await self.connect()

    async def connect(self) -> bool:
        if self._shutting_down:
            return False
        self._cancel_reconnect()

        async with self._connect_lock:
            if self._shutting_down:
                return False
            await self._terminate_transport()

            self._state = UpstreamState.CONNECTING
            url = self._build_url(self._voice)
            logger.info("upstream: connecting model=%s voice=%s", self._settings.model_name, self._voice)
            try:
                transport = await self._connect_fn(url, self._build_headers())
            except asyncio.CancelledError:
                self._state = UpstreamState.DISCONNECTED
                raise
            except Exception as exc:
                self._on_error(exc)
                self._on_close(None)
                return False

            if self._shutting_down:
                with contextlib.suppress(Exception):
                    await transport.close()
                self._state = UpstreamState.DISCONNECTED
                return False

            self._transport = transport
            await self._on_open(transport)
            self._receive_task = asyncio.create_task(self._receive_loop(transport))
            return True

    async def send(self, event_type: str, payload: dict[str, Any] | None = None) -> bool:
        transport = self._transport
        if not self._ready or transport is None:
            logger.debug("upstream: not ready; dropping %s", event_type)
            return False
        return await self._send_event(transport, build_event(event_type, payload))

    async def shutdown(self) -> None:
        self._shutting_down = True
        task = self._reconnect_task
        self._cancel_reconnect()
        if task is not None:
            await asyncio.wait({task})
        async with self._connect_lock:
            await self._terminate_transport()
        self._state = UpstreamState.DISCONNECTED
        logger.info("upstream: shut down")

    def _build_url(self, voice: str) -> str:
        query = urlencode({"model": self._settings.model_name, "voice": voice})
        sep = "&" if "?" in self._settings.url else "?"
        return f"{self._settings.url}{sep}{query}"

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "OpenAI-Beta": OPENAI_BETA_HEADER,
        }

    async def _on_open(self, transport: UpstreamTransport) -> None:
        self._state = UpstreamState.OPEN
        self._ready = True
        self._policy.reset()
        logger.info("upstream: connected")
        if self._instructions:
            await self._send_event(transport, build_event(EVENT_SESSION_UPDATE, instruction_payload(self._instructions)))

    def _on_error(self, exc: BaseException) -> None:
        # A close always follows; only the close reconnects.
        self._ready = False
        logger.error("upstream: error: %s", exc)

    def _on_close(self, code: int | None) -> None:
        self._ready = False
        self._transport = None
        self._receive_task = None
        self._state = UpstreamState.DISCONNECTED
        logger.warning("upstream: connection closed code=%s", code)
        self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        if self._shutting_down:
            return
        if self._reconnect_task is not None and not self._reconnect_task.done():
            return
        delay = self._policy.next_delay()
        if delay is None:
            logger.error("upstream: giving up after %d reconnect attempts", self._policy.attempts)
            return
        logger.info("upstream: reconnecting in %.1fs (attempt %d)", delay, self._policy.attempts)
        self._reconnect_task = asyncio.create_task(self._reconnect_after(delay))

    async def _reconnect_after(self, delay_s: float) -> None:
        try:
            await asyncio.sleep(delay_s)
            await self.connect()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception("upstream: reconnect attempt failed")

    def _cancel_reconnect(self) -> None:
        task = self._reconnect_task
        if task is None:
            return
        self._reconnect_task = None
        if task is not asyncio.current_task() and not task.done():
            task.cancel()

    async def _terminate_transport(self) -> None:
        transport = self._transport
        task = self._receive_task
        self._transport = None
        self._receive_task = None
        self._ready = False
        if transport is None and task is None:
            return

        self._state = UpstreamState.CLOSING
        if task is not None and not task.done():
            task.cancel()
            # A task cancelled before its first step never reaches its own handler.
            await asyncio.wait({task})
        if transport is not None:
            with contextlib.suppress(Exception):
                await transport.close()
        self._state = UpstreamState.DISCONNECTED

    async def _receive_loop(self, transport: UpstreamTransport) -> None:
        try:
            async for frame in transport:
                await self._handle_frame(frame)
        except asyncio.CancelledError:
            return
        except ConnectionClosed as exc:
            logger.debug("upstream: receive ended: %s", exc)
        except Exception as exc:
            self._on_error(exc)

        # A terminated transport was already replaced; only the current one reconnects.
        if transport is self._transport:
            self._on_close(getattr(transport, "close_code", None))

    async def _handle_frame(self, frame: str | bytes) -> None:
        if isinstance(frame, (bytes, bytearray, memoryview)):
            message = binary_frame_envelope(bytes(frame), sample_rate=self._settings.output_audio_sample_rate)
        else:
            message = text_frame_envelope(frame)
            if message is None:
                return
        try:
            await self._broadcast(message)
        except Exception:
            logger.exception("upstream: broadcast failed")

    async def _send_event(self, transport: UpstreamTransport, event: dict[str, Any]) -> bool:
        try:
            await transport.send(encode_event(event))
        except Exception as exc:
            self._on_error(exc)
            return False
        return True


__all__ = ["BroadcastFn", "UpstreamSessionManager"]
