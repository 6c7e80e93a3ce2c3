"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mirror_live.state.session import Session
    from mirror_live.state.settings import AppSettings
    from mirror_live.handlers.connections import ConnectionManager
    from mirror_live.realtime.controller import SessionController


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    controller: SessionController
    session: Session
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.controller.stop()
        except Exception:
            logger.exception("runtime shutdown failed")
        try:
            await self.connections.close_all()
        except Exception:
            logger.exception("bridge shutdown failed")


__all__ = ["RuntimeDeps"]
