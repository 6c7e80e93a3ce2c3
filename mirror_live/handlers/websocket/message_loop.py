"""Bridge WebSocket message loop."""

from __future__ import annotations

import logging
import contextlib
from typing import Any, Literal

from fastapi import WebSocket, WebSocketDisconnect

from mirror_live.state import RuntimeDeps
from mirror_live.config.events import ERROR_CODE_INVALID_MESSAGE
from mirror_live.config.websocket import (
    CMD_END,
    CMD_PING,
    CMD_PONG,
    WS_KEY_TYPE,
    WS_KEY_PAYLOAD,
    WS_KEY_REQUEST_ID,
    WS_CLOSE_CLIENT_REQUEST_CODE,
)

from .dispatch import HANDLERS
from .parser import parse_client_message
from .errors import send_error, safe_send_envelope

logger = logging.getLogger(__name__)


async def _handle_control_message(
    ws: WebSocket,
    msg_type: str,
    *,
    session_id: str,
    request_id: str | None,
) -> Literal["none", "continue", "close"]:
    if msg_type == CMD_PING:
        await safe_send_envelope(ws, msg_type=CMD_PONG, session_id=session_id, request_id=request_id)
        return "continue"
    if msg_type == CMD_PONG:
        return "continue"
    if msg_type == CMD_END:
        with contextlib.suppress(Exception):
            await ws.close(code=WS_CLOSE_CLIENT_REQUEST_CODE)
        return "close"
    return "none"


async def _parse_or_send_error(ws: WebSocket, raw: str, session_id: str) -> dict[str, Any] | None:
    try:
        return parse_client_message(raw)
    except ValueError as exc:
        await send_error(ws, session_id=session_id, code=ERROR_CODE_INVALID_MESSAGE, reason=str(exc))
        return None


async def run_message_loop(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    session_id = runtime_deps.session.session_id
    try:
        while True:
            raw = await ws.receive_text()
            msg = await _parse_or_send_error(ws, raw, session_id)
            if msg is None:
                continue

            msg_type = msg[WS_KEY_TYPE]
            request_id = msg[WS_KEY_REQUEST_ID]
            payload = msg[WS_KEY_PAYLOAD]

            control = await _handle_control_message(ws, msg_type, session_id=session_id, request_id=request_id)
            if control == "close":
                return
            if control == "continue":
                continue

            handler = HANDLERS.get(msg_type)
            if handler is not None:
                logger.debug("bridge command %s (request_id=%s)", msg_type, request_id)
                await handler(ws, runtime_deps, request_id, payload)
                continue

            await send_error(
                ws,
                session_id=session_id,
                request_id=request_id,
                code=ERROR_CODE_INVALID_MESSAGE,
                reason=f"message type '{msg_type}' is not supported",
            )
    except WebSocketDisconnect:
        return


__all__ = ["run_message_loop"]
