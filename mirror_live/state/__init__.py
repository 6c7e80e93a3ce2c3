from .runtime import RuntimeDeps
from .session import Session, SessionState
from .turn import ImagePhase, TurnBuffer, ImageGenerationState
from .settings import (
    AppSettings,
    AudioConfig,
    LiveSettings,
    BridgeSettings,
    CaptureSettings,
)

__all__ = [
    "AppSettings",
    "AudioConfig",
    "BridgeSettings",
    "CaptureSettings",
    "ImageGenerationState",
    "ImagePhase",
    "LiveSettings",
    "RuntimeDeps",
    "Session",
    "SessionState",
    "TurnBuffer",
]
