"""Secrets configuration."""

from __future__ import annotations

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_SHIVAM_API_KEY = "SHIVAM_API_KEY"
ENV_GEOCODE_KEY = "GEOCODE_KEY"

__all__ = ["ENV_GEOCODE_KEY", "ENV_OPENAI_API_KEY", "ENV_SHIVAM_API_KEY"]
