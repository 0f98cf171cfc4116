"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from astro_relay.state.settings import AppSettings
    from astro_relay.handlers.connections import ConnectionRegistry
    from astro_relay.upstream.session import UpstreamSessionManager
    from astro_relay.enrichment.summary import ProfileEnrichmentFetcher
    from astro_relay.maintenance.periodic import PeriodicTask


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionRegistry
    upstream: UpstreamSessionManager
    enrichment: ProfileEnrichmentFetcher
    settings: AppSettings
    http_client: httpx.AsyncClient
    background_tasks: tuple[PeriodicTask, ...] = ()

    async def shutdown(self) -> None:
        for task in self.background_tasks:
            with contextlib.suppress(Exception):
                await task.stop()
        try:
            await self.upstream.shutdown()
        except Exception:
            logger.exception("upstream shutdown failed")
        with contextlib.suppress(Exception):
            await self.http_client.aclose()


__all__ = ["RuntimeDeps"]
