"""Runtime dependency construction (upstream session, registry, enrichment, background tasks)."""

from __future__ import annotations

import logging

import httpx

from astro_relay.state import RuntimeDeps
from astro_relay.state.settings import AppSettings
from astro_relay.upstream.transport import ConnectFn
from astro_relay.enrichment.geocode import GeocodeClient
from astro_relay.enrichment.profile import ProfileDataClient
from astro_relay.handlers.connections import ConnectionRegistry
from astro_relay.maintenance.periodic import PeriodicTask
from astro_relay.maintenance.cleanup import build_cleanup_task
from astro_relay.upstream.session import UpstreamSessionManager
from astro_relay.maintenance.keepalive import build_keep_alive_task
from astro_relay.enrichment.summary import ProfileEnrichmentFetcher

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def _build_http_client(settings: AppSettings) -> httpx.AsyncClient:
    timeout_s = settings.enrichment.http_timeout_s
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout_s if timeout_s > 0 else None))


def _build_background_tasks(settings: AppSettings, client: httpx.AsyncClient) -> tuple[PeriodicTask, ...]:
    maintenance = settings.maintenance
    tasks = (
        build_keep_alive_task(client, url=maintenance.keep_alive_url, interval_s=maintenance.keep_alive_interval_s),
        build_cleanup_task(
            maintenance.media_cleanup_dirs,
            max_age_s=maintenance.media_cleanup_max_age_s,
            interval_s=maintenance.media_cleanup_interval_s,
        ),
    )
    return tuple(task for task in tasks if task is not None)


def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    connect_fn: ConnectFn | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()
    client = http_client or _build_http_client(settings)

    connections = ConnectionRegistry(max_connections=settings.limits.max_concurrent_connections)
    upstream = UpstreamSessionManager(
        settings=settings.upstream,
        api_key=settings.auth.openai_api_key,
        broadcast=connections.broadcast_raw,
        connect_fn=connect_fn,
    )
    enrichment = ProfileEnrichmentFetcher(
        geocoder=GeocodeClient(client, url=settings.enrichment.geocode_url, api_key=settings.enrichment.geocode_key),
        profiles=ProfileDataClient(
            client,
            base_url=settings.enrichment.profile_base_url,
            api_key=settings.enrichment.profile_api_key,
            timezone=settings.enrichment.profile_timezone,
        ),
    )

    return RuntimeDeps(
        connections=connections,
        upstream=upstream,
        enrichment=enrichment,
        settings=settings,
        http_client=client,
        background_tasks=_build_background_tasks(settings, client),
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
