"""Outward notification protocol (event names, error codes, status strings)."""

from __future__ import annotations

EVENT_READY = "ready"
EVENT_RECORDING_STARTED = "recordingStarted"
EVENT_RECORDING_STOPPED = "recordingStopped"
EVENT_AUDIO_SENT = "audioSent"
EVENT_TEXT_UPDATE = "textUpdate"
EVENT_AUDIO_READY = "audioReady"
EVENT_IMAGE_GENERATING = "imageGenerating"
EVENT_IMAGE_GENERATED = "imageGenerated"
EVENT_TURN_COMPLETE = "turnComplete"
EVENT_ERROR = "error"

# error payload "code" values
ERROR_CODE_CONFIG = "config_error"
ERROR_CODE_CONNECTION = "connection_error"
ERROR_CODE_RECORDING = "recording_error"
ERROR_CODE_SEND = "send_error"
ERROR_CODE_PROTOCOL = "protocol_error"
ERROR_CODE_INVALID_MESSAGE = "invalid_message"

REASON_CLOSED_UNEXPECTEDLY = "closed unexpectedly"

STATUS_LISTENING = "Listening..."
STATUS_IN_PROGRESS = ""
STATUS_IMAGE_ERROR = "Error receiving image"

BLOCK_REASON_MARKER = "[Blocked: {reason}]"

__all__ = [
    "BLOCK_REASON_MARKER",
    "ERROR_CODE_CONFIG",
    "ERROR_CODE_CONNECTION",
    "ERROR_CODE_INVALID_MESSAGE",
    "ERROR_CODE_PROTOCOL",
    "ERROR_CODE_RECORDING",
    "ERROR_CODE_SEND",
    "EVENT_AUDIO_READY",
    "EVENT_AUDIO_SENT",
    "EVENT_ERROR",
    "EVENT_IMAGE_GENERATED",
    "EVENT_IMAGE_GENERATING",
    "EVENT_READY",
    "EVENT_RECORDING_STARTED",
    "EVENT_RECORDING_STOPPED",
    "EVENT_TEXT_UPDATE",
    "EVENT_TURN_COMPLETE",
    "REASON_CLOSED_UNEXPECTEDLY",
    "STATUS_IMAGE_ERROR",
    "STATUS_IN_PROGRESS",
    "STATUS_LISTENING",
]
