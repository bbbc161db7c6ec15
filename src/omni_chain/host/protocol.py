from __future__ import annotations

from typing import Any, Callable, Protocol

from omni_chain.chain.ir import Position


class ChainHost(Protocol):
    """What the sequencer needs from the editor it runs in."""

    def get_cursor_position(self) -> Position: ...

    def set_cursor_position(self, position: Position) -> None: ...

    def insert_text(self, text: str) -> None: ...

    def delete_range(self, start: Position, end: Position) -> None: ...

    def invoke_interactively(self, command: Callable[..., Any]) -> None: ...

    def was_immediately_repeated(self) -> bool:
        """True iff the previous command was the one running now."""
        ...

    def get_numeric_prefix_argument(self) -> int:
        """Numeric prefix of the running command, 1 when none was given."""
        ...

    def warn(self, category: str, message: str) -> None: ...
