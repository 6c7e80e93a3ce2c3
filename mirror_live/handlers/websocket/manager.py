"""Primary bridge WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from mirror_live.state import RuntimeDeps
from mirror_live.config.events import EVENT_READY, ERROR_CODE_CONFIG, ERROR_CODE_CONNECTION
from mirror_live.config.websocket import WS_CLOSE_BUSY_CODE, WS_CLOSE_UNAUTHORIZED_CODE

from .errors import reject_connection, safe_send_envelope
from .auth import authenticate_websocket
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    session_id = runtime_deps.session.session_id
    if not await authenticate_websocket(ws, expected_token=runtime_deps.settings.bridge.token):
        await reject_connection(
            ws,
            session_id=session_id,
            code=ERROR_CODE_CONFIG,
            reason=(
                "Authentication required. Provide the helper token via 'token' query parameter or"
                " 'X-Helper-Token' header."
            ),
            close_code=WS_CLOSE_UNAUTHORIZED_CODE,
        )
        return False

    if not await runtime_deps.connections.connect(ws):
        await reject_connection(
            ws,
            session_id=session_id,
            code=ERROR_CODE_CONNECTION,
            reason="Helper cannot accept more dashboard clients.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        raise
    await runtime_deps.connections.register(ws)
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    admitted = False
    try:
        if not await _prepare_connection(ws, runtime_deps):
            return
        admitted = True
        logger.info("bridge client accepted. Active: %s", runtime_deps.connections.get_connection_count())

        if runtime_deps.session.is_open:
            # Late joiners still need to know the session is live.
            await safe_send_envelope(ws, msg_type=EVENT_READY, session_id=runtime_deps.session.session_id)

        await run_message_loop(ws, runtime_deps)
    finally:
        if admitted:
            with contextlib.suppress(Exception):
                await runtime_deps.connections.disconnect(ws)
            logger.info("bridge client closed. Active: %s", runtime_deps.connections.get_connection_count())


__all__ = ["handle_websocket_connection"]
