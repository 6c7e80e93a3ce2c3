"""Bridge WebSocket authentication helpers."""

from __future__ import annotations

import hmac

from fastapi import WebSocket

from mirror_live.config.websocket import WS_TOKEN_HEADER, WS_TOKEN_QUERY_PARAM


def get_token(ws: WebSocket) -> str:
    # Query param is easiest for browser widgets.
    token = (ws.query_params.get(WS_TOKEN_QUERY_PARAM) or "").strip()
    if token:
        return token
    return (ws.headers.get(WS_TOKEN_HEADER) or "").strip()


def validate_token(token: str, expected: str) -> bool:
    if not expected:
        # No token configured: the bridge serves a local dashboard only.
        return True
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


async def authenticate_websocket(ws: WebSocket, *, expected_token: str) -> bool:
    return validate_token(get_token(ws), expected_token)


__all__ = ["authenticate_websocket", "get_token", "validate_token"]
