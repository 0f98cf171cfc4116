"""Dispatch handlers for inbound downstream messages."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal
from collections.abc import Callable, Awaitable

from astro_relay.state import RuntimeDeps
from astro_relay.upstream.voices import resolve_voice
from astro_relay.enrichment.summary import build_instructions
from astro_relay.state.downstream import DownstreamState, DownstreamConnection
from astro_relay.state.session import SubjectIdentity, SessionConfiguration
from astro_relay.realtime.protocol import (
    EVENT_AUDIO_APPEND,
    EVENT_AUDIO_COMMIT,
    EVENT_RESPONSE_CREATE,
    append_audio_payload,
)
from astro_relay.config.websocket import (
    WS_KEY_DATA,
    WS_MSG_INIT,
    WS_MSG_STOP,
    WS_MSG_MEDIA,
    WS_MSG_INIT_OK,
    WS_MSG_MEDIA_COMMIT,
    WS_CLOSE_CLIENT_REQUEST_CODE,
)

from .errors import safe_send_envelope

logger = logging.getLogger(__name__)

Outcome = Literal["continue", "close"]
HandlerFn = Callable[[DownstreamConnection, RuntimeDeps, dict[str, Any]], Awaitable[Outcome]]


async def _run_init(
    conn: DownstreamConnection,
    runtime_deps: RuntimeDeps,
    identity: SubjectIdentity,
    voice: object,
) -> None:
    async with conn.init_lock:
        try:
            summary = await runtime_deps.enrichment.fetch(identity)
            session = SessionConfiguration(
                identity=identity,
                voice=resolve_voice(voice, runtime_deps.settings.upstream.default_voice),
                enrichment_text=build_instructions(summary, runtime_deps.settings.enrichment.persona_instructions),
            )
            # The upstream session is shared; a client leaving mid-connect must not abort it.
            await asyncio.shield(runtime_deps.upstream.configure(session.enrichment_text, session.voice))
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("init failed connection_id=%s", conn.connection_id)
            return

        if conn.state is not DownstreamState.CLOSED:
            conn.state = DownstreamState.INITIALIZED
        await safe_send_envelope(conn.websocket, WS_MSG_INIT_OK)
        logger.info("init ok connection_id=%s voice=%s", conn.connection_id, session.voice)


async def _handle_init(conn: DownstreamConnection, runtime_deps: RuntimeDeps, msg: dict[str, Any]) -> Outcome:
    # Enrichment can take seconds; run it beside the message loop so media keeps flowing.
    identity = SubjectIdentity.from_message(msg)
    task = asyncio.create_task(_run_init(conn, runtime_deps, identity, msg.get("voice")))
    conn.track(task)
    return "continue"


async def _handle_media(conn: DownstreamConnection, runtime_deps: RuntimeDeps, msg: dict[str, Any]) -> Outcome:
    if not runtime_deps.upstream.ready:
        return "continue"
    audio = msg.get(WS_KEY_DATA)
    if not isinstance(audio, str) or not audio:
        logger.debug("media without data connection_id=%s", conn.connection_id)
        return "continue"
    await runtime_deps.upstream.send(EVENT_AUDIO_APPEND, append_audio_payload(audio))
    return "continue"


async def _handle_media_commit(
    conn: DownstreamConnection,
    runtime_deps: RuntimeDeps,
    msg: dict[str, Any],
) -> Outcome:
    if not runtime_deps.upstream.ready:
        return "continue"
    await runtime_deps.upstream.send(EVENT_AUDIO_COMMIT)
    await runtime_deps.upstream.send(EVENT_RESPONSE_CREATE)
    return "continue"


async def _handle_stop(conn: DownstreamConnection, runtime_deps: RuntimeDeps, msg: dict[str, Any]) -> Outcome:
    try:
        await conn.websocket.close(code=WS_CLOSE_CLIENT_REQUEST_CODE)
    except Exception:
        logger.debug("close after stop failed connection_id=%s", conn.connection_id, exc_info=True)
    return "close"


HANDLERS: dict[str, HandlerFn] = {
    WS_MSG_INIT: _handle_init,
    WS_MSG_MEDIA: _handle_media,
    WS_MSG_MEDIA_COMMIT: _handle_media_commit,
    WS_MSG_STOP: _handle_stop,
}

__all__ = ["HANDLERS", "HandlerFn", "Outcome"]
