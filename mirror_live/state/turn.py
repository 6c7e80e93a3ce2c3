"""Reply-side state owned by the response dispatcher (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


@dataclass(slots=True)
class TurnBuffer:
    text: str = ""
    # True until the first text of a reply arrives; a reply arriving while True starts a new turn.
    turn_complete: bool = True

    def reset(self) -> None:
        self.text = ""
        self.turn_complete = True


class ImagePhase(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATED = "generated"


@dataclass(slots=True)
class ImageGenerationState:
    phase: ImagePhase = ImagePhase.IDLE
    image: str | None = None

    def reset(self) -> None:
        self.phase = ImagePhase.IDLE
        self.image = None


__all__ = ["ImageGenerationState", "ImagePhase", "TurnBuffer"]
