from __future__ import annotations

import pytest

from omni_chain.chain.dsl import compose_actions, lower_element, normalize_element, parse_element
from omni_chain.chain.errors import ConfigurationError
from omni_chain.chain.ir import (
    LOOP,
    UNDEFINED,
    Action,
    ActionElement,
    CallableElement,
    ListElement,
    PairElement,
    TextElement,
)
from omni_chain.host.editor import Editor


def _noop() -> None:
    return None


def test_parse_text_splits_on_marker() -> None:
    element = parse_element("<b>_|_</b>")

    assert isinstance(element, TextElement)
    assert element.split() == ("<b>", "</b>")


def test_parse_text_without_marker() -> None:
    element = parse_element("plain")

    assert isinstance(element, TextElement)
    assert element.split() == ("plain", "")


def test_parse_text_custom_marker() -> None:
    element = parse_element("f(@)", marker="@")

    assert element.split() == ("f(", ")")


def test_parse_shapes() -> None:
    action = Action(insert=_noop)

    assert parse_element(action).action is action
    assert isinstance(parse_element(("[", "]")), PairElement)
    assert isinstance(parse_element(_noop), CallableElement)
    assert isinstance(parse_element({"cleanup": _noop}), ActionElement)

    nested = parse_element(["a", ("(", ")"), ["b"]])
    assert isinstance(nested, ListElement)
    assert [m.kind for m in nested.members] == ["text", "pair", "list"]


@pytest.mark.parametrize(
    "raw",
    [
        42,
        None,
        3.5,
        ("only-one",),
        ("a", 1),
        {"insert": "not callable"},
        {"insert": _noop, "undo": _noop},
        ["a", LOOP],
        [1],
    ],
)
def test_parse_rejects_unknown_shapes(raw) -> None:
    with pytest.raises(ConfigurationError):
        parse_element(raw)


def test_pair_insert_places_cursor_between() -> None:
    editor = Editor("xy", cursor=1)
    action = normalize_element(("(", ")"), editor)

    region = action.insert()

    assert editor.text == "x()y"
    assert editor.cursor == 2
    assert region == (1, 3)


def test_pair_cleanup_restores_buffer() -> None:
    editor = Editor("hello world", cursor=5)
    action = normalize_element("<em>_|_</em>", editor)

    action.cleanup(action.insert())

    assert editor.text == "hello world"


def test_callable_runs_interactively_without_cleanup() -> None:
    calls: list[str] = []
    editor = Editor()
    action = normalize_element(lambda: calls.append("ran"), editor)

    assert action.insert() is UNDEFINED
    assert action.cleanup is None
    assert calls == ["ran"]


def test_record_keeps_missing_phases_absent() -> None:
    action = normalize_element({"insert": _noop}, Editor())

    assert action.insert is _noop
    assert action.cleanup is None


def test_nested_list_inserts_in_order_and_cleans_up_in_reverse() -> None:
    log: list[str] = []

    def tracked(name: str) -> dict:
        return {
            "insert": lambda: log.append(f"insert {name}") or name,
            "cleanup": lambda value: log.append(f"cleanup {value}"),
        }

    action = normalize_element([tracked("a"), tracked("b"), tracked("c")], Editor())
    values = action.insert()
    action.cleanup(values)

    assert values == ("a", "b", "c")
    assert log == [
        "insert a",
        "insert b",
        "insert c",
        "cleanup c",
        "cleanup b",
        "cleanup a",
    ]


def test_composed_text_is_undone_back_to_front() -> None:
    editor = Editor("<>", cursor=1)
    action = normalize_element(["(_|_)", "[_|_]"], editor)

    values = action.insert()
    assert editor.text == "<([])>"
    assert editor.cursor == 3

    action.cleanup(values)
    assert editor.text == "<>"


def test_compose_skips_missing_phases() -> None:
    received: list[tuple] = []

    composite = compose_actions(
        [
            Action(cleanup=lambda *args: received.append(args)),
            Action(insert=lambda: None, cleanup=lambda *args: received.append(args)),
            Action(),
        ]
    )
    values = composite.insert()
    composite.cleanup(values)

    assert values == (UNDEFINED, None, UNDEFINED)
    assert received == [(None,), ()]


def test_lower_returns_action_literal_unchanged() -> None:
    action = Action()

    assert lower_element(parse_element(action), Editor()) is action


def test_parse_rejects_empty_marker() -> None:
    with pytest.raises(ConfigurationError, match="marker"):
        parse_element("a", marker="")
