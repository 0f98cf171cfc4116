"""Profile enrichment configuration (geocode + profile-data services)."""

from __future__ import annotations

ENV_GEOCODE_URL = "GEOCODE_URL"
ENV_SHIVAM_BASE = "SHIVAM_BASE"
ENV_PROFILE_TIMEZONE = "PROFILE_TIMEZONE"
ENV_ENRICHMENT_HTTP_TIMEOUT_S = "ENRICHMENT_HTTP_TIMEOUT_S"
ENV_PERSONA_INSTRUCTIONS = "PERSONA_INSTRUCTIONS"

DEFAULT_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_PROFILE_TIMEZONE = "5.5"

# New Delhi; used whenever geocoding is skipped or fails.
DEFAULT_LATITUDE = "28.6139"
DEFAULT_LONGITUDE = "77.2090"

DEFAULT_GENDER = "male"
MISSING_FIELD = "N/A"

# 0 disables the timeout: a hung lookup stalls only that connection's init.
DEFAULT_ENRICHMENT_HTTP_TIMEOUT_S = 0.0

DEFAULT_PERSONA_INSTRUCTIONS = (
    "You are Sumit Aggarwal, an experienced Vedic astrologer. Kundli summary: {summary}. "
    "Answer in Hindi clearly and concisely."
)

__all__ = [
    "DEFAULT_ENRICHMENT_HTTP_TIMEOUT_S",
    "DEFAULT_GENDER",
    "DEFAULT_GEOCODE_URL",
    "DEFAULT_LATITUDE",
    "DEFAULT_LONGITUDE",
    "DEFAULT_PERSONA_INSTRUCTIONS",
    "DEFAULT_PROFILE_TIMEZONE",
    "ENV_ENRICHMENT_HTTP_TIMEOUT_S",
    "ENV_GEOCODE_URL",
    "ENV_PERSONA_INSTRUCTIONS",
    "ENV_PROFILE_TIMEZONE",
    "ENV_SHIVAM_BASE",
    "MISSING_FIELD",
]
