"""Supervised background loop that runs a coroutine on a fixed interval."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Awaitable

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(self, name: str, tick: Callable[[], Awaitable[None]], *, interval_s: float) -> None:
        self.name = name
        self._tick = tick
        self._interval_s = float(interval_s)
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.wait({self._task})
        self._task = None

    async def _loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._interval_s)
                if self._stop_event.is_set():
                    break
                try:
                    await self._tick()
                except Exception:
                    logger.debug("%s tick failed", self.name, exc_info=True)
        except asyncio.CancelledError:
            return


__all__ = ["PeriodicTask"]
