"""Helper process: FastAPI bridge between the dashboard widget and Gemini Live."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from mirror_live.errors import ConfigError
from mirror_live.state import RuntimeDeps
from mirror_live.runtime.settings import load_settings
from mirror_live.runtime.logging import configure_logging
from mirror_live.runtime.dependencies import build_runtime_deps
from mirror_live.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()

SETTINGS = load_settings()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = build_runtime_deps(SETTINGS)
    app.state.runtime_deps = runtime_deps
    logger.info("runtime: ready")
    if SETTINGS.bridge.autostart:
        try:
            await runtime_deps.controller.start(SETTINGS.live.api_key)
        except ConfigError as exc:
            logger.error("autostart skipped: %s", exc)
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)


def _runtime_deps() -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/session")
async def session_snapshot() -> dict[str, object]:
    deps = _runtime_deps()
    return {
        "state": deps.session.state.value,
        "recording": deps.controller.is_recording,
        "connection_open": deps.session.is_open,
    }


@app.websocket(SETTINGS.bridge.endpoint_path)
async def websocket_endpoint(websocket: WebSocket) -> None:
    await handle_websocket_connection(websocket, _runtime_deps())
