from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TextBuffer:
    """In-memory text with a single cursor."""

    text: str = ""
    cursor: int = 0

    def insert(self, s: str) -> None:
        """Insert ``s`` at the cursor and move the cursor past it."""

        self.text = self.text[: self.cursor] + s + self.text[self.cursor :]
        self.cursor += len(s)

    def delete_range(self, start: int, end: int) -> str:
        """Delete ``[start, end)`` and return the removed text.

        A cursor inside the range lands on ``start``; one after it shifts left.
        """

        start, end = sorted((self._clamp(start), self._clamp(end)))
        deleted = self.text[start:end]
        self.text = self.text[:start] + self.text[end:]
        if self.cursor >= end:
            self.cursor -= end - start
        elif self.cursor > start:
            self.cursor = start
        return deleted

    def move_cursor(self, pos: int) -> int:
        """Move the cursor to ``pos`` clamped to the text; return the old one."""

        prev = self.cursor
        self.cursor = self._clamp(pos)
        return prev

    def render(self, mark: str = "|") -> str:
        return self.text[: self.cursor] + mark + self.text[self.cursor :]

    def _clamp(self, pos: int) -> int:
        return max(0, min(pos, len(self.text)))
