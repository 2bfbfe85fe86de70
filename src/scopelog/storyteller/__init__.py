from .core import Storyteller, default_storyteller
from .listeners.rich import RichListener
from .types import LogRecord, StoryListener

__all__ = [
    "LogRecord",
    "RichListener",
    "StoryListener",
    "Storyteller",
    "default_storyteller",
]
