from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ImageGenerated:
    # None when the service sent an image part without data.
    image: str | None
    mime_type: str = ""


__all__ = ["ImageGenerated"]
