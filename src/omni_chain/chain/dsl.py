from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Sequence

from .errors import ConfigurationError
from .ir import (
    UNDEFINED,
    Action,
    ActionElement,
    CallableElement,
    DEFAULT_CURSOR_MARKER,
    Element,
    ListElement,
    LoopMarker,
    PairElement,
    Region,
    TextElement,
)

if TYPE_CHECKING:
    from omni_chain.host.protocol import ChainHost


_RECORD_KEYS = frozenset({"insert", "cleanup"})


def _describe(raw: Any) -> str:
    return f"{raw!r} ({type(raw).__name__})"


def _parse_record(raw: Mapping[Any, Any]) -> ActionElement:
    unknown = set(raw) - _RECORD_KEYS
    if unknown:
        raise ConfigurationError(
            f"invalid chain element {_describe(raw)}: unknown keys {sorted(map(str, unknown))}"
        )
    for name in _RECORD_KEYS:
        fn = raw.get(name)
        if fn is not None and not callable(fn):
            raise ConfigurationError(
                f"invalid chain element {_describe(raw)}: {name!r} must be callable or None"
            )
    return ActionElement(action=Action(insert=raw.get("insert"), cleanup=raw.get("cleanup")))


def parse_element(raw: Any, *, marker: str = DEFAULT_CURSOR_MARKER) -> Element:
    """Classify one raw chain element into its tagged variant."""

    if not marker:
        raise ConfigurationError("cursor marker must not be empty")
    if isinstance(raw, Action):
        return ActionElement(action=raw)
    if isinstance(raw, str):
        return TextElement(text=raw, marker=marker)
    if isinstance(raw, tuple):
        if len(raw) == 2 and all(isinstance(part, str) for part in raw):
            return PairElement(before=raw[0], after=raw[1])
        raise ConfigurationError(
            f"invalid chain element {_describe(raw)}: a pair must be two strings"
        )
    if isinstance(raw, Mapping):
        return _parse_record(raw)
    if isinstance(raw, list):
        return ListElement(members=[parse_element(member, marker=marker) for member in raw])
    if isinstance(raw, LoopMarker):
        raise ConfigurationError("the loop marker is only allowed at the top level of a chain")
    if callable(raw):
        return CallableElement(command=raw)
    raise ConfigurationError(f"invalid chain element {_describe(raw)}")


def _pair_action(before: str, after: str, host: ChainHost) -> Action:
    text = before + after

    def insert() -> Region:
        start = host.get_cursor_position()
        host.insert_text(text)
        host.set_cursor_position(host.get_cursor_position() - len(after))
        return start, start + len(text)

    def cleanup(region: Region) -> None:
        host.delete_range(*region)

    return Action(insert=insert, cleanup=cleanup)


def _callable_action(command: Callable[..., Any], host: ChainHost) -> Action:
    def insert() -> Any:
        host.invoke_interactively(command)
        return UNDEFINED

    return Action(insert=insert)


def run_cleanup(cleanup: Callable[..., Any], value: Any) -> None:
    """Call ``cleanup`` with ``value``, or with nothing if no insert ran."""

    if value is UNDEFINED:
        cleanup()
    else:
        cleanup(value)


def compose_actions(actions: Iterable[Action]) -> Action:
    """Run inserts in order and cleanups in reverse order.

    The composite insert returns one value per member, ``UNDEFINED`` where a
    member has no insert; each member cleanup gets back its own value.
    """

    members: Sequence[Action] = tuple(actions)

    def insert() -> tuple[Any, ...]:
        values = []
        for action in members:
            values.append(action.insert() if action.insert is not None else UNDEFINED)
        return tuple(values)

    def cleanup(values: Sequence[Any]) -> None:
        for action, value in reversed(list(zip(members, values))):
            if action.cleanup is not None:
                run_cleanup(action.cleanup, value)

    return Action(insert=insert, cleanup=cleanup)


def lower_element(element: Element, host: ChainHost) -> Action:
    """Build the action an element stands for, bound to ``host``."""

    if isinstance(element, ActionElement):
        return element.action
    if isinstance(element, TextElement):
        return _pair_action(*element.split(), host)
    if isinstance(element, PairElement):
        return _pair_action(element.before, element.after, host)
    if isinstance(element, CallableElement):
        return _callable_action(element.command, host)
    if isinstance(element, ListElement):
        return compose_actions(lower_element(member, host) for member in element.members)
    raise ConfigurationError(f"unsupported element kind: {element!r}")


def normalize_element(raw: Any, host: ChainHost, *, marker: str = DEFAULT_CURSOR_MARKER) -> Action:
    """Turn a raw chain element into an action bound to ``host``."""

    return lower_element(parse_element(raw, marker=marker), host)
