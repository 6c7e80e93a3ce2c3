"""Bridge client admission control and notification fan-out."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from mirror_live.config.websocket import WS_CLOSE_CLIENT_REQUEST_CODE
from mirror_live.handlers.websocket.errors import build_envelope, safe_send_text, encode_envelope

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Admits presentation clients and broadcasts notifications to them.

    Doubles as the core's ``Notifier``: ``emit`` never raises, and a client
    whose send fails is dropped from the fan-out set.
    """

    def __init__(self, *, max_connections: int, session_id: Callable[[], str]) -> None:
        self._max = max(1, int(max_connections))
        self._session_id = session_id
        self._lock = asyncio.Lock()
        self._active: set[int] = set()
        self._clients: dict[int, Any] = {}

    async def connect(self, ws: Any) -> bool:
        """Attempt to admit a websocket connection (without accepting it)."""
        key = id(ws)
        async with self._lock:
            if len(self._active) >= self._max:
                return False
            self._active.add(key)
            return True

    async def register(self, ws: Any) -> None:
        """Start delivering notifications to an accepted client."""
        async with self._lock:
            if id(ws) in self._active:
                self._clients[id(ws)] = ws

    async def disconnect(self, ws: Any) -> None:
        key = id(ws)
        async with self._lock:
            self._active.discard(key)
            self._clients.pop(key, None)

    def get_connection_count(self) -> int:
        return len(self._active)

    async def emit(self, event: str, payload: dict[str, Any] | None = None) -> None:
        try:
            text = encode_envelope(build_envelope(event, self._session_id(), payload))
        except Exception:
            logger.exception("failed to encode %s notification", event)
            return

        clients = list(self._clients.values())
        if not clients:
            logger.debug("notification %s dropped: no bridge clients", event)
            return

        for ws in clients:
            if not await safe_send_text(ws, text):
                logger.info("dropping bridge client after failed send of %s", event)
                await self.disconnect(ws)

    async def close_all(self) -> None:
        clients = list(self._clients.values())
        for ws in clients:
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_CLIENT_REQUEST_CODE)
            await self.disconnect(ws)


__all__ = ["ConnectionManager"]
