from __future__ import annotations

from typing import Union

from .text import TextDelta
from .audio import AudioBlob
from .turn import TurnComplete
from .feedback import PromptFeedback
from .setup_complete import SetupComplete
from .image_generated import ImageGenerated
from .image_generating import ImageGenerating

ServerEvent = Union[SetupComplete, TextDelta, AudioBlob, PromptFeedback, ImageGenerating, ImageGenerated, TurnComplete]

__all__ = ["ServerEvent"]
