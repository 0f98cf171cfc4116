"""Best-effort place-name geocoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: str
    longitude: str


class GeocodeClient:
    """Resolve a place name to coordinates; any failure yields ``None``."""

    def __init__(self, client: httpx.AsyncClient, *, url: str, api_key: str) -> None:
        self._client = client
        self._url = url
        self._api_key = api_key

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def lookup(self, place: str) -> Coordinates | None:
        if not self.enabled or not place:
            return None
        try:
            resp = await self._client.get(self._url, params={"address": place, "key": self._api_key})
            doc = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("geocode lookup failed for %r: %s", place, exc)
            return None

        if not isinstance(doc, dict) or doc.get("status") != "OK":
            logger.info("geocode: no result for %r", place)
            return None
        try:
            location = doc["results"][0]["geometry"]["location"]
            return Coordinates(latitude=str(location["lat"]), longitude=str(location["lng"]))
        except (KeyError, IndexError, TypeError):
            logger.warning("geocode: malformed response for %r", place)
            return None


__all__ = ["Coordinates", "GeocodeClient"]
