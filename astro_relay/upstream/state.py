"""Upstream connection lifecycle states."""

from __future__ import annotations

import enum


class UpstreamState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"


__all__ = ["UpstreamState"]
