"""Upstream transport contract and the default ``websockets`` implementation."""

from __future__ import annotations

from typing import Any, Protocol
from collections.abc import Callable, Awaitable, AsyncIterator

import websockets


class UpstreamTransport(Protocol):
    """The subset of a ``websockets`` client connection the session manager relies on."""

    close_code: int | None

    async def send(self, message: str) -> None: ...

    async def close(self) -> None: ...

    def __aiter__(self) -> AsyncIterator[str | bytes]: ...


ConnectFn = Callable[[str, dict[str, str]], Awaitable[UpstreamTransport]]


async def websockets_connect(url: str, headers: dict[str, str]) -> Any:
    return await websockets.connect(
        url,
        additional_headers=headers,
        max_size=None,
    )


__all__ = ["ConnectFn", "UpstreamTransport", "websockets_connect"]
