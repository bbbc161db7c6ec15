from __future__ import annotations

from .buffer import TextBuffer
from .editor import Editor
from .protocol import ChainHost

__all__ = [
    "ChainHost",
    "Editor",
    "TextBuffer",
]
