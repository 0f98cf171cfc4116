from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Keep `import astro_relay...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


@pytest.fixture
def upstream_settings():
    from astro_relay.state.settings import UpstreamSettings

    return UpstreamSettings(
        url="wss://upstream.test/v1/realtime",
        sessions_url="https://upstream.test/v1/realtime/sessions",
        model_name="test-model",
        session_model_name="test-session-model",
        default_voice="verse",
        reconnect_delay_s=0.01,
        reconnect_multiplier=1.0,
        reconnect_max_delay_s=0.0,
        reconnect_max_attempts=0,
        output_audio_sample_rate=0,
    )


@pytest.fixture
def app_settings(upstream_settings, tmp_path):
    from astro_relay.state.settings import (
        AppSettings,
        AuthSettings,
        LimitsSettings,
        WebSocketSettings,
        EnrichmentSettings,
        MaintenanceSettings,
    )
    from astro_relay.config.enrichment import DEFAULT_PERSONA_INSTRUCTIONS

    return AppSettings(
        auth=AuthSettings(openai_api_key="sk-test"),
        upstream=upstream_settings,
        enrichment=EnrichmentSettings(
            geocode_url="https://geo.test/geocode/json",
            geocode_key="",
            profile_base_url="",
            profile_api_key="",
            profile_timezone="5.5",
            http_timeout_s=0.0,
            persona_instructions=DEFAULT_PERSONA_INSTRUCTIONS,
        ),
        websocket=WebSocketSettings(host="127.0.0.1", port=3000, endpoint_path="/ws", static_dir=tmp_path),
        limits=LimitsSettings(max_concurrent_connections=100),
        maintenance=MaintenanceSettings(
            keep_alive_url="",
            keep_alive_interval_s=0.0,
            media_cleanup_dirs=(),
            media_cleanup_max_age_s=0.0,
            media_cleanup_interval_s=0.0,
        ),
    )
