"""Logging initialization."""

from __future__ import annotations

import logging

from mirror_live.config.logging import LOG_LEVEL, LOG_FORMAT, SHOW_WEBSOCKETS_LOGS


def configure_logging() -> None:
    # websockets logs every frame at DEBUG; keep it tame unless explicitly enabled.
    if not SHOW_WEBSOCKETS_LOGS:
        logging.getLogger("websockets").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
