"""Builders for upstream realtime operations and downstream frame translation."""

from __future__ import annotations

import base64
import logging
from typing import Any

import orjson

from astro_relay.config.websocket import WS_KEY_DATA, WS_KEY_TYPE, WS_MSG_OUTPUT_AUDIO_BINARY

logger = logging.getLogger(__name__)

EVENT_SESSION_UPDATE = "session.update"
EVENT_AUDIO_APPEND = "input_audio_buffer.append"
EVENT_AUDIO_COMMIT = "input_audio_buffer.commit"
EVENT_RESPONSE_CREATE = "response.create"


def build_event(event_type: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    event: dict[str, Any] = {WS_KEY_TYPE: event_type}
    if payload:
        event.update(payload)
    return event


def instruction_payload(text: str) -> dict[str, Any]:
    return {"session": {"instructions": text}}


def append_audio_payload(audio_b64: str) -> dict[str, Any]:
    return {"audio": audio_b64}


def encode_event(event: dict[str, Any]) -> str:
    return orjson.dumps(event).decode("utf-8")


def binary_frame_envelope(frame: bytes, *, sample_rate: int = 0) -> str:
    """Wrap a raw binary upstream frame as an ``output_audio_binary`` envelope."""
    envelope: dict[str, Any] = {
        WS_KEY_TYPE: WS_MSG_OUTPUT_AUDIO_BINARY,
        WS_KEY_DATA: base64.b64encode(frame).decode("ascii"),
    }
    if sample_rate > 0:
        envelope["sampleRate"] = int(sample_rate)
    return orjson.dumps(envelope).decode("utf-8")


def text_frame_envelope(frame: str) -> str | None:
    """Validate a textual upstream event; returns it unchanged, or ``None`` if unparseable."""
    try:
        event = orjson.loads(frame)
    except orjson.JSONDecodeError:
        logger.warning("upstream: dropping unparseable text frame (%d chars)", len(frame))
        return None
    if not isinstance(event, dict):
        logger.warning("upstream: dropping non-object text frame")
        return None
    return frame


__all__ = [
    "EVENT_AUDIO_APPEND",
    "EVENT_AUDIO_COMMIT",
    "EVENT_RESPONSE_CREATE",
    "EVENT_SESSION_UPDATE",
    "append_audio_payload",
    "binary_frame_envelope",
    "build_event",
    "encode_event",
    "instruction_payload",
    "text_frame_envelope",
]
