"""Envelope and error helpers for the bridge WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from mirror_live.config.events import EVENT_ERROR
from mirror_live.config.websocket import (
    WS_KEY_TYPE,
    WS_KEY_PAYLOAD,
    WS_KEY_REQUEST_ID,
    WS_KEY_SESSION_ID,
)

logger = logging.getLogger(__name__)


def build_envelope(
    msg_type: str,
    session_id: str,
    payload: dict[str, Any] | None = None,
    *,
    request_id: str | None = None,
) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        WS_KEY_TYPE: msg_type,
        WS_KEY_SESSION_ID: session_id,
        WS_KEY_PAYLOAD: payload or {},
    }
    if request_id:
        envelope[WS_KEY_REQUEST_ID] = request_id
    return envelope


def encode_envelope(envelope: dict[str, Any]) -> str:
    return orjson.dumps(envelope).decode("utf-8")


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_envelope(
    ws: WebSocket,
    *,
    msg_type: str,
    session_id: str,
    payload: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> bool:
    data = build_envelope(msg_type, session_id, payload, request_id=request_id)
    return await safe_send_text(ws, encode_envelope(data))


async def send_error(
    ws: WebSocket,
    *,
    session_id: str,
    code: str,
    reason: str,
    request_id: str | None = None,
) -> bool:
    return await safe_send_envelope(
        ws,
        msg_type=EVENT_ERROR,
        session_id=session_id,
        payload={"reason": reason, "code": code},
        request_id=request_id,
    )


async def reject_connection(
    ws: WebSocket,
    *,
    session_id: str,
    code: str,
    reason: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await send_error(ws, session_id=session_id, code=code, reason=reason)
    try:
        await ws.close(code=close_code, reason=reason)
    except Exception:
        return


__all__ = [
    "build_envelope",
    "encode_envelope",
    "reject_connection",
    "safe_send_envelope",
    "safe_send_text",
    "send_error",
]
