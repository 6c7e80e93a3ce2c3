"""One-way notification channel toward the presentation layer."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from mirror_live.errors import HelperError
from mirror_live.config.events import EVENT_ERROR

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def emit(self, event: str, payload: dict[str, Any] | None = None) -> None:
        """Deliver an event. Implementations must not raise."""
        ...


def error_payload(exc: HelperError) -> dict[str, Any]:
    return {"reason": exc.reason, "code": exc.code}


async def notify_error(notifier: Notifier, exc: HelperError) -> None:
    logger.warning("%s: %s", exc.code, exc.reason)
    await notifier.emit(EVENT_ERROR, error_payload(exc))


__all__ = ["Notifier", "error_payload", "notify_error"]
