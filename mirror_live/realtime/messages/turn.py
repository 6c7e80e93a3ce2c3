from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TurnComplete:
    pass


__all__ = ["TurnComplete"]
