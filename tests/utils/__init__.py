"""Test doubles for the helper's collaborators.

Focused modules:
- fakes.py: fake live client/connection, fake capture process, recording notifier, fake bridge websocket
"""

from __future__ import annotations

from .fakes import (
    FakeSpawner,
    FakeLiveClient,
    FakeConnection,
    RecordingNotifier,
    FakeCaptureProcess,
    FakeBridgeWebSocket,
    make_settings,
    make_audio_config,
    wait_until,
)

__all__ = [
    "FakeBridgeWebSocket",
    "FakeCaptureProcess",
    "FakeConnection",
    "FakeLiveClient",
    "FakeSpawner",
    "RecordingNotifier",
    "make_audio_config",
    "make_settings",
    "wait_until",
]
