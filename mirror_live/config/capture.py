"""Capture episode scheduling configuration."""

from __future__ import annotations

ENV_CAPTURE_DURATION_MS = "CAPTURE_DURATION_MS"
ENV_CAPTURE_ON_OPEN = "CAPTURE_ON_OPEN"

# 0 means continuous capture until explicitly stopped.
DEFAULT_CAPTURE_DURATION_MS = 0

# Start capturing as soon as the live connection reports open.
DEFAULT_CAPTURE_ON_OPEN = True

__all__ = [
    "DEFAULT_CAPTURE_DURATION_MS",
    "DEFAULT_CAPTURE_ON_OPEN",
    "ENV_CAPTURE_DURATION_MS",
    "ENV_CAPTURE_ON_OPEN",
]
