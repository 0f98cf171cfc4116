from __future__ import annotations

import os
import time
import asyncio

import httpx
import pytest

from astro_relay.maintenance import PeriodicTask, build_cleanup_task, remove_stale_files, build_keep_alive_task
from astro_relay.maintenance.keepalive import ping, normalize_keep_alive_url


def test_remove_stale_files_only_deletes_old_files(tmp_path) -> None:
    old = tmp_path / "old.webm"
    fresh = tmp_path / "fresh.webm"
    nested = tmp_path / "nested"
    for path in (old, fresh):
        path.write_bytes(b"x")
    nested.mkdir()
    now = time.time()
    os.utime(old, (now - 7200, now - 7200))

    removed = remove_stale_files([tmp_path, tmp_path / "missing"], max_age_s=3600, now=now)

    assert removed == 1
    assert not old.exists()
    assert fresh.exists()
    assert nested.is_dir()


def test_cleanup_task_disabled_without_directories(tmp_path) -> None:
    assert build_cleanup_task((), max_age_s=60, interval_s=60) is None
    assert build_cleanup_task((tmp_path,), max_age_s=0, interval_s=60) is None
    assert build_cleanup_task((tmp_path,), max_age_s=60, interval_s=60) is not None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ""),
        ("  ", ""),
        ("astro.onrender.com", "https://astro.onrender.com"),
        ("http://localhost:3000", "http://localhost:3000"),
        ("https://astro.example/health", "https://astro.example/health"),
    ],
)
def test_normalize_keep_alive_url(raw: str, expected: str) -> None:
    assert normalize_keep_alive_url(raw) == expected


@pytest.mark.asyncio
async def test_ping_reports_failures() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "down.test":
            raise httpx.ConnectError("down", request=request)
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await ping(client, "https://up.test/") is True
        assert await ping(client, "https://down.test/") is False
        assert build_keep_alive_task(client, url="", interval_s=30) is None


@pytest.mark.asyncio
async def test_periodic_task_ticks_until_stopped() -> None:
    ticks = 0

    async def tick() -> None:
        nonlocal ticks
        ticks += 1
        if ticks == 1:
            raise RuntimeError("first tick fails")

    task = PeriodicTask("test", tick, interval_s=0.01)
    task.start()
    assert task.running

    async def _wait() -> None:
        while ticks < 3:
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_wait(), timeout=1.0)
    await task.stop()

    assert not task.running
    stopped_at = ticks
    await asyncio.sleep(0.03)
    assert ticks == stopped_at


@pytest.mark.asyncio
async def test_periodic_task_stop_before_first_step() -> None:
    async def tick() -> None:
        return None

    task = PeriodicTask("test", tick, interval_s=10.0)
    task.start()
    await task.stop()

    assert not task.running
