"""Periodic outbound GET that keeps hosting platforms from idling the process."""

from __future__ import annotations

import logging

import httpx

from .periodic import PeriodicTask

logger = logging.getLogger(__name__)


def normalize_keep_alive_url(raw: str) -> str:
    url = (raw or "").strip()
    if not url:
        return ""
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


async def ping(client: httpx.AsyncClient, url: str) -> bool:
    try:
        await client.get(url)
    except httpx.HTTPError as exc:
        logger.debug("keep-alive ping to %s failed: %s", url, exc)
        return False
    return True


def build_keep_alive_task(client: httpx.AsyncClient, *, url: str, interval_s: float) -> PeriodicTask | None:
    target = normalize_keep_alive_url(url)
    if not target or interval_s <= 0:
        return None

    async def _tick() -> None:
        await ping(client, target)

    return PeriodicTask("keep-alive", _tick, interval_s=interval_s)


__all__ = ["build_keep_alive_task", "normalize_keep_alive_url", "ping"]
