"""Ephemeral realtime session creation over the REST sessions endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from astro_relay.state.settings import AppSettings

logger = logging.getLogger(__name__)


async def create_ephemeral_session(
    client: httpx.AsyncClient,
    settings: AppSettings,
    *,
    voice: str,
    instructions: str,
) -> tuple[bool, Any]:
    """POST a session request; returns ``(ok, body)`` where body is the decoded JSON."""
    payload = {
        "model": settings.upstream.session_model_name,
        "voice": voice,
        "instructions": instructions,
    }
    resp = await client.post(
        settings.upstream.sessions_url,
        json=payload,
        headers={"Authorization": f"Bearer {settings.auth.openai_api_key}"},
    )
    try:
        body = resp.json()
    except ValueError:
        body = {"raw": resp.text}
    if not resp.is_success:
        logger.error("OpenAI session error status=%s body=%s", resp.status_code, body)
        return False, body
    return True, body


__all__ = ["create_ephemeral_session"]
