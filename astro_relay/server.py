"""Main FastAPI server for the AstroOne realtime relay."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, WebSocket
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse, JSONResponse

from astro_relay.state import RuntimeDeps
from astro_relay.state.session import SubjectIdentity
from astro_relay.upstream.voices import resolve_voice
from astro_relay.runtime.logging import configure_logging
from astro_relay.enrichment.summary import build_instructions
from astro_relay.realtime.sessions import create_ephemeral_session
from astro_relay.runtime.dependencies import build_runtime_deps
from astro_relay.config.websocket import STATIC_DIR, INDEX_FILENAME, WS_ENDPOINT_PATH
from astro_relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    for task in runtime_deps.background_tasks:
        task.start()
    # Connect in the background so a slow upstream does not hold up startup.
    start_task = asyncio.create_task(runtime_deps.upstream.start())
    logger.info("runtime: ready")
    try:
        yield
    finally:
        start_task.cancel()
        await asyncio.wait({start_task})
        await runtime_deps.shutdown()
        logger.info("runtime: stopped")


app = FastAPI(lifespan=_lifespan)


def _runtime_deps() -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


@app.get("/", response_model=None)
async def root() -> Any:
    index = STATIC_DIR / INDEX_FILENAME
    if index.is_file():
        return FileResponse(index)
    return JSONResponse({"error": f"{INDEX_FILENAME} not found"}, status_code=404)


@app.get("/health")
async def health() -> dict[str, Any]:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        return {"status": "ok"}
    return {
        "status": "ok",
        "upstream": runtime_deps.upstream.snapshot(),
        "connections": runtime_deps.connections.get_connection_count(),
    }


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/session")
async def create_session(request: Request) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    identity = SubjectIdentity.from_message(body)
    if not identity.is_complete():
        return JSONResponse({"error": "Missing required fields"}, status_code=400)

    runtime_deps = _runtime_deps()
    summary = await runtime_deps.enrichment.fetch(identity)
    instructions = build_instructions(summary, runtime_deps.settings.enrichment.persona_instructions)
    voice = resolve_voice(body.get("voice"), runtime_deps.settings.upstream.default_voice)
    try:
        ok, session = await create_ephemeral_session(
            runtime_deps.http_client,
            runtime_deps.settings,
            voice=voice,
            instructions=instructions,
        )
    except httpx.HTTPError as exc:
        logger.error("session creation failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500)

    if not ok:
        return JSONResponse(
            {"error": "OpenAI session creation failed", "details": session},
            status_code=500,
        )
    return JSONResponse({"ok": True, "session": session, "kundli_summary": summary})


@app.websocket(WS_ENDPOINT_PATH)
async def websocket_endpoint(websocket: WebSocket) -> None:
    await handle_websocket_connection(websocket, _runtime_deps())


# Mounted last so the routes above take precedence.
if STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=STATIC_DIR), name="static")
