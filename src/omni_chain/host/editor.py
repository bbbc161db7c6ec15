from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from omni_chain.chain.ir import ChainSpec, Position
from omni_chain.sequencer.builder import build_dispatcher
from omni_chain.sequencer.session import ChainDispatcher, SequencerContext

from .buffer import TextBuffer


logger = logging.getLogger(__name__)

Command = Callable[[], Any]


class Editor:
    """Minimal single-buffer editor implementing ``ChainHost``.

    Commands run through a small command loop that remembers the previous
    command and the numeric prefix of the current one.
    """

    def __init__(self, text: str = "", cursor: Optional[int] = None) -> None:
        self.buffer = TextBuffer(text=text, cursor=len(text) if cursor is None else cursor)
        self.warnings: List[Tuple[str, str]] = []
        self._keymap: Dict[str, Command] = {}
        self._last_command: Optional[Command] = None
        self._this_command: Optional[Command] = None
        self._prefix = 1

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> Position:
        return self.buffer.cursor

    # keymap / command loop

    def bind(self, key: str, command: Command) -> None:
        self._keymap[key] = command

    def lookup(self, key: str) -> Optional[Command]:
        return self._keymap.get(key)

    def press(self, key: str, *, prefix: int = 1) -> None:
        """Run the command bound to ``key`` as one command-loop iteration."""

        command = self._keymap.get(key)
        if command is None:
            self._last_command = None
            raise LookupError(f"key {key!r} is not bound")
        self.run(command, prefix=prefix)

    def run(self, command: Command, *, prefix: int = 1) -> None:
        self._this_command = command
        self._prefix = prefix
        try:
            command()
        finally:
            self._last_command = command
            self._this_command = None
            self._prefix = 1

    def load_chains(
        self,
        specs: Iterable[ChainSpec],
        *,
        context: Optional[SequencerContext] = None,
    ) -> Dict[str, ChainDispatcher]:
        """Build a dispatcher per spec and bind it to the spec's key."""

        dispatchers: Dict[str, ChainDispatcher] = {}
        for spec in specs:
            dispatcher = build_dispatcher(
                spec.elements,
                host=self,
                prefix_fallback=spec.fallback,
                marker=spec.marker,
                context=context,
            )
            self.bind(spec.key, dispatcher)
            dispatchers[spec.key] = dispatcher
            logger.debug("bound chain to %r", spec.key)
        return dispatchers

    # ChainHost

    def get_cursor_position(self) -> Position:
        return self.buffer.cursor

    def set_cursor_position(self, position: Position) -> None:
        self.buffer.move_cursor(position)

    def insert_text(self, text: str) -> None:
        self.buffer.insert(text)

    def delete_range(self, start: Position, end: Position) -> None:
        self.buffer.delete_range(start, end)

    def invoke_interactively(self, command: Callable[..., Any]) -> None:
        command()

    def was_immediately_repeated(self) -> bool:
        return self._this_command is not None and self._this_command is self._last_command

    def get_numeric_prefix_argument(self) -> int:
        return self._prefix

    def warn(self, category: str, message: str) -> None:
        logger.warning("[%s] %s", category, message)
        self.warnings.append((category, message))
