"""Deletion of stale temporary media files."""

from __future__ import annotations

import time
import logging
from pathlib import Path
from collections.abc import Iterable

from .periodic import PeriodicTask

logger = logging.getLogger(__name__)


def remove_stale_files(directories: Iterable[Path], *, max_age_s: float, now: float | None = None) -> int:
    """Delete regular files older than ``max_age_s``; returns the number removed."""
    cutoff = (time.time() if now is None else now) - max_age_s
    removed = 0
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in directory.iterdir():
            try:
                if not path.is_file() or path.stat().st_mtime >= cutoff:
                    continue
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.warning("media cleanup: cannot remove %s: %s", path, exc)
                continue
            removed += 1
    if removed:
        logger.info("media cleanup: removed %d stale file(s)", removed)
    return removed


def build_cleanup_task(
    directories: tuple[Path, ...],
    *,
    max_age_s: float,
    interval_s: float,
) -> PeriodicTask | None:
    if not directories or max_age_s <= 0 or interval_s <= 0:
        return None

    async def _tick() -> None:
        remove_stale_files(directories, max_age_s=max_age_s)

    return PeriodicTask("media-cleanup", _tick, interval_s=interval_s)


__all__ = ["build_cleanup_task", "remove_stale_files"]
