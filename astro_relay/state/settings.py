"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    openai_api_key: str


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    url: str
    sessions_url: str
    model_name: str
    session_model_name: str
    default_voice: str
    reconnect_delay_s: float
    reconnect_multiplier: float
    reconnect_max_delay_s: float
    reconnect_max_attempts: int
    output_audio_sample_rate: int


@dataclass(frozen=True, slots=True)
class EnrichmentSettings:
    geocode_url: str
    geocode_key: str
    profile_base_url: str
    profile_api_key: str
    profile_timezone: str
    http_timeout_s: float
    persona_instructions: str


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    host: str
    port: int
    endpoint_path: str
    static_dir: Path


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class MaintenanceSettings:
    keep_alive_url: str
    keep_alive_interval_s: float
    media_cleanup_dirs: tuple[Path, ...]
    media_cleanup_max_age_s: float
    media_cleanup_interval_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    upstream: UpstreamSettings
    enrichment: EnrichmentSettings
    websocket: WebSocketSettings
    limits: LimitsSettings
    maintenance: MaintenanceSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "EnrichmentSettings",
    "LimitsSettings",
    "MaintenanceSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
