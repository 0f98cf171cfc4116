from .protocol import (
    EVENT_AUDIO_APPEND,
    EVENT_AUDIO_COMMIT,
    EVENT_SESSION_UPDATE,
    EVENT_RESPONSE_CREATE,
    build_event,
    encode_event,
    text_frame_envelope,
    append_audio_payload,
    instruction_payload,
    binary_frame_envelope,
)

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
