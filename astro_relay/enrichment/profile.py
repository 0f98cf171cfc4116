"""Profile-data service client (token exchange, then chart lookup)."""

from __future__ import annotations

import logging
from typing import Any
from dataclasses import dataclass

import httpx

from astro_relay.state.session import SubjectIdentity
from astro_relay.config.enrichment import DEFAULT_GENDER

from .geocode import Coordinates

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileSigns:
    sun_sign: str = ""
    moon_sign: str = ""

    def is_empty(self) -> bool:
        return not (self.sun_sign or self.moon_sign)


def _split(value: str, sep: str, parts: int) -> list[str]:
    pieces = value.split(sep) if value else []
    return (pieces + [""] * parts)[:parts]


class ProfileDataClient:
    def __init__(self, client: httpx.AsyncClient, *, base_url: str, api_key: str, timezone: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timezone = timezone

    @property
    def enabled(self) -> bool:
        return bool(self._base_url and self._api_key)

    async def _post_json(self, path: str, body: dict[str, Any], headers: dict[str, str] | None = None) -> Any:
        resp = await self._client.post(f"{self._base_url}{path}", json=body, headers=headers)
        try:
            return resp.json()
        except ValueError:
            logger.warning("profile service returned non-JSON for %s (status %s)", path, resp.status_code)
            return None

    async def generate_token(self) -> str | None:
        doc = await self._post_json("/users/generateToken", {"apikey": self._api_key})
        try:
            token = doc["data"][0]["token"]
        except (KeyError, IndexError, TypeError):
            return None
        return token if isinstance(token, str) and token else None

    def build_payload(self, identity: SubjectIdentity, coords: Coordinates) -> dict[str, Any]:
        year, month, day = _split(identity.birth_date, "-", 3)
        hour, minute = _split(identity.birth_time, ":", 2)
        return {
            "name": identity.name,
            "day": day,
            "month": month,
            "year": year,
            "hour": hour,
            "min": minute,
            "place": identity.birth_place,
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "timezone": self._timezone,
            "gender": (identity.gender or DEFAULT_GENDER).lower(),
        }

    async def fetch_signs(self, identity: SubjectIdentity, coords: Coordinates) -> ProfileSigns | None:
        """Return sun/moon signs, or ``None`` when disabled or anything fails."""
        if not self.enabled or not (identity.name and identity.birth_date and identity.birth_time):
            return None
        try:
            token = await self.generate_token()
            if token is None:
                logger.warning("profile service: token exchange returned no token")
                return None
            doc = await self._post_json(
                "/astro/getAstroData",
                self.build_payload(identity, coords),
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as exc:
            logger.warning("profile service error: %s", exc)
            return None

        data = doc.get("data") if isinstance(doc, dict) else None
        if not isinstance(data, dict):
            return None
        return ProfileSigns(
            sun_sign=str(data.get("sun_sign") or ""),
            moon_sign=str(data.get("moon_sign") or ""),
        )


__all__ = ["ProfileDataClient", "ProfileSigns"]
