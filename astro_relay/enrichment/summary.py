"""Compose the natural-language profile summary used as session instructions."""

from __future__ import annotations

import logging

from astro_relay.state.session import SubjectIdentity
from astro_relay.config.enrichment import MISSING_FIELD, DEFAULT_LATITUDE, DEFAULT_LONGITUDE

from .geocode import Coordinates, GeocodeClient
from .profile import ProfileSigns, ProfileDataClient

logger = logging.getLogger(__name__)

DEFAULT_COORDINATES = Coordinates(latitude=DEFAULT_LATITUDE, longitude=DEFAULT_LONGITUDE)


def base_summary(identity: SubjectIdentity, coords: Coordinates | None = None) -> str:
    text = (
        f"नाम: {identity.name or MISSING_FIELD}, "
        f"DOB: {identity.birth_date or MISSING_FIELD} {identity.birth_time}, "
        f"POB: {identity.birth_place or MISSING_FIELD}"
    )
    if coords is not None:
        text += f" (lat:{coords.latitude},lon:{coords.longitude})"
    return text


def append_signs(summary: str, signs: ProfileSigns | None) -> str:
    if signs is None or signs.is_empty():
        return summary
    return f"{summary} | Sun: {signs.sun_sign}, Moon: {signs.moon_sign}"


def build_instructions(summary: str, template: str) -> str:
    if "{summary}" in template:
        return template.replace("{summary}", summary)
    return f"{template} {summary}".strip()


class ProfileEnrichmentFetcher:
    def __init__(self, *, geocoder: GeocodeClient, profiles: ProfileDataClient) -> None:
        self._geocoder = geocoder
        self._profiles = profiles

    async def fetch(self, identity: SubjectIdentity) -> str:
        """Never raises: every failure degrades to a shorter summary."""
        try:
            coords = await self._geocoder.lookup(identity.birth_place) or DEFAULT_COORDINATES
            summary = base_summary(identity, coords)
            signs = await self._profiles.fetch_signs(identity, coords)
            return append_signs(summary, signs)
        except Exception:
            logger.exception("enrichment failed; using minimal summary")
            return base_summary(identity)


__all__ = [
    "DEFAULT_COORDINATES",
    "ProfileEnrichmentFetcher",
    "append_signs",
    "base_summary",
    "build_instructions",
]
