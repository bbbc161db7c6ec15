from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Callable, List, Literal, Optional, Tuple, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CURSOR_MARKER = "_|_"


class Undefined(Enum):
    """Result of an insert phase that had no insert function to run."""

    UNDEFINED = "undefined"

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = Undefined.UNDEFINED


class LoopMarker(Enum):
    """Chain element splitting the one-shot prefix from the repeating tail."""

    LOOP = "loop"

    def __repr__(self) -> str:
        return "LOOP"


LOOP = LoopMarker.LOOP

Position: TypeAlias = int
Region: TypeAlias = Tuple[Position, Position]


class Action(BaseModel):
    """One chain step: an insert phase and the cleanup that undoes it.

    ``insert`` takes no arguments; whatever it returns is handed to
    ``cleanup`` on the next transition.
    """

    model_config = ConfigDict(frozen=True)

    insert: Optional[Callable[[], Any]] = None
    cleanup: Optional[Callable[..., Any]] = None


SENTINEL = Action()


class TextElement(BaseModel):
    """Literal text, optionally holding one cursor marker."""

    kind: Literal["text"] = "text"
    text: str
    marker: str = DEFAULT_CURSOR_MARKER

    def split(self) -> Tuple[str, str]:
        before, found, after = self.text.partition(self.marker)
        if not found:
            return self.text, ""
        return before, after


class PairElement(BaseModel):
    """Text inserted around the cursor: ``before`` left of it, ``after`` right."""

    kind: Literal["pair"] = "pair"
    before: str
    after: str = ""


class CallableElement(BaseModel):
    """A user command run interactively; leaves nothing to clean up."""

    kind: Literal["callable"] = "callable"
    command: Callable[..., Any]


class ActionElement(BaseModel):
    """A ready-made action, used as is."""

    kind: Literal["action"] = "action"
    action: Action


class ListElement(BaseModel):
    """Nested elements run together as a single step."""

    kind: Literal["list"] = "list"
    members: List[Element] = Field(default_factory=list)


Element = Annotated[
    Union[TextElement, PairElement, CallableElement, ActionElement, ListElement],
    Field(discriminator="kind"),
]

ListElement.model_rebuild()


class Chain(BaseModel):
    """Built sequence of actions for one dispatcher.

    ``actions[0]`` is always the sentinel. A looping chain wraps from its last
    action back to ``loop_start``; otherwise stepping past the end yields
    ``None``.
    """

    model_config = ConfigDict(frozen=True)

    actions: Tuple[Action, ...]
    loop_start: Optional[int] = None

    def successor(self, index: Optional[int]) -> Optional[int]:
        if index is None:
            return None
        if index + 1 < len(self.actions):
            return index + 1
        return self.loop_start

    @property
    def loops(self) -> bool:
        return self.loop_start is not None


class ChainSpec(BaseModel):
    """Declarative chain bound to a key, as read from config."""

    key: str
    elements: List[Any] = Field(default_factory=list)
    fallback: Optional[Any] = None
    marker: str = DEFAULT_CURSOR_MARKER
    description: Optional[str] = None
