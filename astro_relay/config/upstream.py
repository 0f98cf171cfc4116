"""Upstream realtime API configuration."""

from __future__ import annotations

ENV_MODEL_NAME = "MODEL_NAME"
ENV_DEFAULT_VOICE = "DEFAULT_VOICE"
ENV_UPSTREAM_URL = "UPSTREAM_URL"
ENV_UPSTREAM_RECONNECT_DELAY_S = "UPSTREAM_RECONNECT_DELAY_S"
ENV_UPSTREAM_RECONNECT_MULTIPLIER = "UPSTREAM_RECONNECT_MULTIPLIER"
ENV_UPSTREAM_RECONNECT_MAX_DELAY_S = "UPSTREAM_RECONNECT_MAX_DELAY_S"
ENV_UPSTREAM_RECONNECT_MAX_ATTEMPTS = "UPSTREAM_RECONNECT_MAX_ATTEMPTS"
ENV_OUTPUT_AUDIO_SAMPLE_RATE = "OUTPUT_AUDIO_SAMPLE_RATE"

DEFAULT_MODEL_NAME = "gpt-4o-realtime-preview-2024-10-01"
DEFAULT_UPSTREAM_URL = "wss://api.openai.com/v1/realtime"
DEFAULT_SESSIONS_URL = "https://api.openai.com/v1/realtime/sessions"
DEFAULT_SESSION_MODEL_NAME = "gpt-4o-realtime-preview"

# Voices the realtime API accepts; update if OpenAI changes the list.
VALID_VOICES: frozenset[str] = frozenset(
    {"alloy", "ash", "ballad", "coral", "echo", "sage", "shimmer", "verse", "marin", "cedar"}
)
DEFAULT_VOICE_FALLBACK = "verse"

# Fixed-interval reconnect by default (multiplier 1.0, unlimited attempts).
DEFAULT_UPSTREAM_RECONNECT_DELAY_S = 3.0
DEFAULT_UPSTREAM_RECONNECT_MULTIPLIER = 1.0
DEFAULT_UPSTREAM_RECONNECT_MAX_DELAY_S = 30.0
DEFAULT_UPSTREAM_RECONNECT_MAX_ATTEMPTS = 0

# 0 omits sampleRate from output_audio_binary envelopes.
DEFAULT_OUTPUT_AUDIO_SAMPLE_RATE = 0

OPENAI_BETA_HEADER = "realtime=v1"

__all__ = [
    "DEFAULT_MODEL_NAME",
    "DEFAULT_OUTPUT_AUDIO_SAMPLE_RATE",
    "DEFAULT_SESSIONS_URL",
    "DEFAULT_SESSION_MODEL_NAME",
    "DEFAULT_UPSTREAM_RECONNECT_DELAY_S",
    "DEFAULT_UPSTREAM_RECONNECT_MAX_ATTEMPTS",
    "DEFAULT_UPSTREAM_RECONNECT_MAX_DELAY_S",
    "DEFAULT_UPSTREAM_RECONNECT_MULTIPLIER",
    "DEFAULT_UPSTREAM_URL",
    "DEFAULT_VOICE_FALLBACK",
    "ENV_DEFAULT_VOICE",
    "ENV_MODEL_NAME",
    "ENV_OUTPUT_AUDIO_SAMPLE_RATE",
    "ENV_UPSTREAM_RECONNECT_DELAY_S",
    "ENV_UPSTREAM_RECONNECT_MAX_ATTEMPTS",
    "ENV_UPSTREAM_RECONNECT_MAX_DELAY_S",
    "ENV_UPSTREAM_RECONNECT_MULTIPLIER",
    "ENV_UPSTREAM_URL",
    "OPENAI_BETA_HEADER",
    "VALID_VOICES",
]
