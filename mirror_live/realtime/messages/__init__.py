"""Tagged variants for inbound live-service messages."""

from .text import TextDelta
from .audio import AudioBlob
from .turn import TurnComplete
from .events import ServerEvent
from .feedback import PromptFeedback
from .parser import parse_server_message
from .setup_complete import SetupComplete
from .image_generated import ImageGenerated
from .image_generating import ImageGenerating

__all__ = [
    "AudioBlob",
    "ImageGenerated",
    "ImageGenerating",
    "PromptFeedback",
    "ServerEvent",
    "SetupComplete",
    "TextDelta",
    "TurnComplete",
    "parse_server_message",
]
