"""Per-connection state for downstream (browser) WebSocket clients."""

from __future__ import annotations

import enum
import uuid
import asyncio
from typing import Any
from dataclasses import field, dataclass


class DownstreamState(enum.Enum):
    CONNECTED = "connected"
    INITIALIZED = "initialized"
    CLOSED = "closed"


@dataclass(slots=True, eq=False)
class DownstreamConnection:
    websocket: Any
    connection_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: DownstreamState = DownstreamState.CONNECTED
    attached: bool = False
    # Serialises init handling so a later init always supersedes an earlier one.
    init_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    tasks: set[asyncio.Task] = field(default_factory=set)

    def track(self, task: asyncio.Task) -> None:
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)


__all__ = ["DownstreamConnection", "DownstreamState"]
