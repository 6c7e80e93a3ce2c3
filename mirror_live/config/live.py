"""Remote live service configuration and protocol constants."""

from __future__ import annotations

ENV_GEMINI_MODEL_ID = "GEMINI_MODEL_ID"
ENV_GEMINI_API_HOST = "GEMINI_API_HOST"
ENV_GEMINI_API_VERSION = "GEMINI_API_VERSION"
ENV_GEMINI_RESPONSE_MODALITIES = "GEMINI_RESPONSE_MODALITIES"
ENV_GEMINI_OUTPUT_TRANSCRIPTION = "GEMINI_OUTPUT_TRANSCRIPTION"
ENV_GEMINI_CONNECT_TIMEOUT_S = "GEMINI_CONNECT_TIMEOUT_S"

DEFAULT_GEMINI_MODEL_ID = "gemini-2.0-flash-exp"
DEFAULT_GEMINI_API_HOST = "generativelanguage.googleapis.com"
DEFAULT_GEMINI_API_VERSION = "v1alpha"
DEFAULT_GEMINI_OUTPUT_TRANSCRIPTION = False
# 0 disables the connect timeout.
DEFAULT_GEMINI_CONNECT_TIMEOUT_S = 30.0

MODALITY_AUDIO = "AUDIO"
MODALITY_TEXT = "TEXT"
SUPPORTED_MODALITIES = (MODALITY_AUDIO, MODALITY_TEXT)

# Single-turn audio variant; the chat variant sets GEMINI_RESPONSE_MODALITIES=TEXT.
DEFAULT_GEMINI_RESPONSE_MODALITIES: tuple[str, ...] = (MODALITY_AUDIO,)

GEMINI_LIVE_PATH_TEMPLATE = "/ws/google.ai.generativelanguage.{version}.GenerativeService.BidiGenerateContent"

# Tool name the service uses to announce an image render.
IMAGE_TOOL_NAME = "generate_image"

# Inline images can be large.
GEMINI_MAX_MESSAGE_BYTES = 32 * 1024 * 1024

__all__ = [
    "DEFAULT_GEMINI_API_HOST",
    "DEFAULT_GEMINI_API_VERSION",
    "DEFAULT_GEMINI_CONNECT_TIMEOUT_S",
    "DEFAULT_GEMINI_MODEL_ID",
    "DEFAULT_GEMINI_OUTPUT_TRANSCRIPTION",
    "DEFAULT_GEMINI_RESPONSE_MODALITIES",
    "ENV_GEMINI_API_HOST",
    "ENV_GEMINI_API_VERSION",
    "ENV_GEMINI_CONNECT_TIMEOUT_S",
    "ENV_GEMINI_MODEL_ID",
    "ENV_GEMINI_OUTPUT_TRANSCRIPTION",
    "ENV_GEMINI_RESPONSE_MODALITIES",
    "GEMINI_LIVE_PATH_TEMPLATE",
    "GEMINI_MAX_MESSAGE_BYTES",
    "IMAGE_TOOL_NAME",
    "MODALITY_AUDIO",
    "MODALITY_TEXT",
    "SUPPORTED_MODALITIES",
]
