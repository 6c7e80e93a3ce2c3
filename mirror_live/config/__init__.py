"""Configuration module exports (env names, defaults and protocol constants only)."""

from .audio import (
    AUDIO_MIME_TEMPLATE,
    DEFAULT_AUDIO_SAMPLE_RATE_HZ,
)
from .live import (
    MODALITY_TEXT,
    MODALITY_AUDIO,
)

__all__ = [
    "AUDIO_MIME_TEMPLATE",
    "DEFAULT_AUDIO_SAMPLE_RATE_HZ",
    "MODALITY_AUDIO",
    "MODALITY_TEXT",
]
