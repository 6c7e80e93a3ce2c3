"""Shared error types for the live session helper."""

from __future__ import annotations

from dataclasses import dataclass

from mirror_live.config.events import (
    ERROR_CODE_SEND,
    ERROR_CODE_CONFIG,
    ERROR_CODE_PROTOCOL,
    ERROR_CODE_RECORDING,
    ERROR_CODE_CONNECTION,
)


@dataclass(frozen=True, slots=True)
class HelperError(Exception):
    reason: str

    code = "internal_error"

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class ConfigError(HelperError):
    """Raised when the helper is missing a credential or setting it cannot run without."""

    code = ERROR_CODE_CONFIG


@dataclass(frozen=True, slots=True)
class LiveConnectionError(HelperError):
    """Connect, open or close failure on the remote live service."""

    code = ERROR_CODE_CONNECTION


@dataclass(frozen=True, slots=True)
class RecordingError(HelperError):
    """Capture spawn, stream or process failure."""

    code = ERROR_CODE_RECORDING


@dataclass(frozen=True, slots=True)
class SendError(HelperError):
    """Transmission failure for a single audio chunk."""

    sequence_number: int = 0

    code = ERROR_CODE_SEND


@dataclass(frozen=True, slots=True)
class ProtocolError(HelperError):
    """Malformed or blocked service response."""

    code = ERROR_CODE_PROTOCOL


__all__ = [
    "ConfigError",
    "HelperError",
    "LiveConnectionError",
    "ProtocolError",
    "RecordingError",
    "SendError",
]
