from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ImageGenerating:
    call_id: str = ""


__all__ = ["ImageGenerating"]
