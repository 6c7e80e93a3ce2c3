from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AudioBlob:
    data: str
    mime_type: str = ""


__all__ = ["AudioBlob"]
