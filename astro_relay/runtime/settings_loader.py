"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
from pathlib import Path

from astro_relay.errors import ConfigurationError
from astro_relay.upstream.voices import resolve_voice
from astro_relay.config.secrets import ENV_GEOCODE_KEY, ENV_OPENAI_API_KEY, ENV_SHIVAM_API_KEY
from astro_relay.config.limits import ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS
from astro_relay.state.settings import (
    AppSettings,
    AuthSettings,
    LimitsSettings,
    UpstreamSettings,
    WebSocketSettings,
    EnrichmentSettings,
    MaintenanceSettings,
)
from astro_relay.config.websocket import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    STATIC_DIR,
    WS_ENDPOINT_PATH,
)
from astro_relay.config.enrichment import (
    ENV_SHIVAM_BASE,
    ENV_GEOCODE_URL,
    DEFAULT_GEOCODE_URL,
    ENV_PROFILE_TIMEZONE,
    ENV_PERSONA_INSTRUCTIONS,
    DEFAULT_PROFILE_TIMEZONE,
    DEFAULT_PERSONA_INSTRUCTIONS,
    ENV_ENRICHMENT_HTTP_TIMEOUT_S,
    DEFAULT_ENRICHMENT_HTTP_TIMEOUT_S,
)
from astro_relay.config.maintenance import (
    ENV_KEEP_ALIVE_URL,
    ENV_MEDIA_CLEANUP_DIRS,
    ENV_RENDER_EXTERNAL_URL,
    ENV_KEEP_ALIVE_INTERVAL_S,
    ENV_MEDIA_CLEANUP_MAX_AGE_S,
    ENV_MEDIA_CLEANUP_INTERVAL_S,
    DEFAULT_KEEP_ALIVE_INTERVAL_S,
    DEFAULT_MEDIA_CLEANUP_MAX_AGE_S,
    DEFAULT_MEDIA_CLEANUP_INTERVAL_S,
)
from astro_relay.config.upstream import (
    ENV_MODEL_NAME,
    ENV_UPSTREAM_URL,
    ENV_DEFAULT_VOICE,
    DEFAULT_MODEL_NAME,
    DEFAULT_SESSIONS_URL,
    DEFAULT_UPSTREAM_URL,
    DEFAULT_VOICE_FALLBACK,
    DEFAULT_SESSION_MODEL_NAME,
    ENV_OUTPUT_AUDIO_SAMPLE_RATE,
    ENV_UPSTREAM_RECONNECT_DELAY_S,
    DEFAULT_OUTPUT_AUDIO_SAMPLE_RATE,
    ENV_UPSTREAM_RECONNECT_MAX_DELAY_S,
    ENV_UPSTREAM_RECONNECT_MULTIPLIER,
    DEFAULT_UPSTREAM_RECONNECT_DELAY_S,
    ENV_UPSTREAM_RECONNECT_MAX_ATTEMPTS,
    DEFAULT_UPSTREAM_RECONNECT_MAX_DELAY_S,
    DEFAULT_UPSTREAM_RECONNECT_MULTIPLIER,
    DEFAULT_UPSTREAM_RECONNECT_MAX_ATTEMPTS,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _paths_env(name: str) -> tuple[Path, ...]:
    raw = os.getenv(name) or ""
    return tuple(Path(part.strip()).expanduser() for part in raw.split(",") if part.strip())


def _load_auth_settings() -> AuthSettings:
    api_key = (os.getenv(ENV_OPENAI_API_KEY) or "").strip()
    if not api_key:
        raise ConfigurationError(f"{ENV_OPENAI_API_KEY} is required in env")
    return AuthSettings(openai_api_key=api_key)


def _load_upstream_settings() -> UpstreamSettings:
    default_voice = resolve_voice(_str_env(ENV_DEFAULT_VOICE, DEFAULT_VOICE_FALLBACK), DEFAULT_VOICE_FALLBACK)
    return UpstreamSettings(
        url=_str_env(ENV_UPSTREAM_URL, DEFAULT_UPSTREAM_URL),
        sessions_url=DEFAULT_SESSIONS_URL,
        model_name=_str_env(ENV_MODEL_NAME, DEFAULT_MODEL_NAME),
        session_model_name=DEFAULT_SESSION_MODEL_NAME,
        default_voice=default_voice,
        reconnect_delay_s=max(0.0, _float_env(ENV_UPSTREAM_RECONNECT_DELAY_S, DEFAULT_UPSTREAM_RECONNECT_DELAY_S)),
        reconnect_multiplier=max(
            1.0, _float_env(ENV_UPSTREAM_RECONNECT_MULTIPLIER, DEFAULT_UPSTREAM_RECONNECT_MULTIPLIER)
        ),
        reconnect_max_delay_s=max(
            0.0, _float_env(ENV_UPSTREAM_RECONNECT_MAX_DELAY_S, DEFAULT_UPSTREAM_RECONNECT_MAX_DELAY_S)
        ),
        reconnect_max_attempts=max(
            0, _int_env(ENV_UPSTREAM_RECONNECT_MAX_ATTEMPTS, DEFAULT_UPSTREAM_RECONNECT_MAX_ATTEMPTS)
        ),
        output_audio_sample_rate=max(0, _int_env(ENV_OUTPUT_AUDIO_SAMPLE_RATE, DEFAULT_OUTPUT_AUDIO_SAMPLE_RATE)),
    )


def _load_enrichment_settings() -> EnrichmentSettings:
    return EnrichmentSettings(
        geocode_url=_str_env(ENV_GEOCODE_URL, DEFAULT_GEOCODE_URL),
        geocode_key=_str_env(ENV_GEOCODE_KEY, ""),
        profile_base_url=_str_env(ENV_SHIVAM_BASE, "").rstrip("/"),
        profile_api_key=_str_env(ENV_SHIVAM_API_KEY, ""),
        profile_timezone=_str_env(ENV_PROFILE_TIMEZONE, DEFAULT_PROFILE_TIMEZONE),
        http_timeout_s=max(0.0, _float_env(ENV_ENRICHMENT_HTTP_TIMEOUT_S, DEFAULT_ENRICHMENT_HTTP_TIMEOUT_S)),
        persona_instructions=_str_env(ENV_PERSONA_INSTRUCTIONS, DEFAULT_PERSONA_INSTRUCTIONS),
    )


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=_int_env(ENV_PORT, DEFAULT_PORT),
        endpoint_path=WS_ENDPOINT_PATH,
        static_dir=STATIC_DIR,
    )


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    return LimitsSettings(max_concurrent_connections=max(1, max_connections))


def _load_maintenance_settings() -> MaintenanceSettings:
    keep_alive_url = _str_env(ENV_KEEP_ALIVE_URL, "") or _str_env(ENV_RENDER_EXTERNAL_URL, "")
    return MaintenanceSettings(
        keep_alive_url=keep_alive_url,
        keep_alive_interval_s=_float_env(ENV_KEEP_ALIVE_INTERVAL_S, DEFAULT_KEEP_ALIVE_INTERVAL_S),
        media_cleanup_dirs=_paths_env(ENV_MEDIA_CLEANUP_DIRS),
        media_cleanup_max_age_s=_float_env(ENV_MEDIA_CLEANUP_MAX_AGE_S, DEFAULT_MEDIA_CLEANUP_MAX_AGE_S),
        media_cleanup_interval_s=_float_env(ENV_MEDIA_CLEANUP_INTERVAL_S, DEFAULT_MEDIA_CLEANUP_INTERVAL_S),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        upstream=_load_upstream_settings(),
        enrichment=_load_enrichment_settings(),
        websocket=_load_websocket_settings(),
        limits=_load_limits_settings(),
        maintenance=_load_maintenance_settings(),
    )


__all__ = ["load_settings"]
