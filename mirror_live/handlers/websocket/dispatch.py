"""Dispatch handlers for presentation commands."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import WebSocket

from mirror_live.state import RuntimeDeps
from mirror_live.audio.chunks import CaptureMode
from mirror_live.config.events import ERROR_CODE_CONNECTION, ERROR_CODE_INVALID_MESSAGE
from mirror_live.config.websocket import (
    CMD_STOP,
    CMD_START,
    CMD_SEND_TEXT,
    CMD_STOP_RECORDING,
    CMD_START_RECORDING,
)

from .errors import send_error

HandlerFn = Callable[[WebSocket, RuntimeDeps, str | None, dict[str, Any]], Awaitable[None]]


async def _handle_start(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    request_id: str | None,
    payload: dict[str, Any],
) -> None:
    key = payload.get("api_key")
    if not isinstance(key, str) or not key.strip():
        key = runtime_deps.settings.live.api_key
    # The connect runs off the message loop so a later stop can cancel it.
    runtime_deps.controller.start_in_background(key)


async def _handle_start_recording(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    request_id: str | None,
    payload: dict[str, Any],
) -> None:
    duration_ms = payload.get("duration_ms")
    if duration_ms is not None and (isinstance(duration_ms, bool) or not isinstance(duration_ms, (int, float))):
        await send_error(
            ws,
            session_id=runtime_deps.session.session_id,
            request_id=request_id,
            code=ERROR_CODE_INVALID_MESSAGE,
            reason="payload.duration_ms must be a number",
        )
        return
    mode = CaptureMode.for_duration(int(duration_ms)) if duration_ms is not None and duration_ms > 0 else None
    await runtime_deps.controller.trigger_recording(mode)


async def _handle_stop_recording(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    request_id: str | None,
    payload: dict[str, Any],
) -> None:
    await runtime_deps.controller.stop_recording()


async def _handle_send_text(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    request_id: str | None,
    payload: dict[str, Any],
) -> None:
    text = payload.get("text")
    if not isinstance(text, str) or not text.strip():
        await send_error(
            ws,
            session_id=runtime_deps.session.session_id,
            request_id=request_id,
            code=ERROR_CODE_INVALID_MESSAGE,
            reason="payload.text (non-empty string) is required",
        )
        return
    if not runtime_deps.session.is_open:
        await send_error(
            ws,
            session_id=runtime_deps.session.session_id,
            request_id=request_id,
            code=ERROR_CODE_CONNECTION,
            reason="not connected; send start first",
        )
        return
    await runtime_deps.controller.send_text(text)


async def _handle_stop(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    request_id: str | None,
    payload: dict[str, Any],
) -> None:
    await runtime_deps.controller.stop()


HANDLERS: dict[str, HandlerFn] = {
    CMD_START: _handle_start,
    CMD_START_RECORDING: _handle_start_recording,
    CMD_STOP_RECORDING: _handle_stop_recording,
    CMD_SEND_TEXT: _handle_send_text,
    CMD_STOP: _handle_stop,
}

__all__ = ["HANDLERS", "HandlerFn"]
