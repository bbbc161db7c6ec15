from __future__ import annotations

from omni_chain.host.editor import Editor
from omni_chain.sequencer.builder import build_dispatcher
from omni_chain.sequencer.control import disable_point_recovery, terminate
from omni_chain.sequencer.recovery import CursorRecoveryService
from omni_chain.sequencer.session import SequencerContext


def test_terminate_from_insert_forces_restart() -> None:
    context = SequencerContext()
    editor = Editor()
    dispatcher = build_dispatcher(
        ["a", {"insert": lambda: terminate(context)}, "c"],
        host=editor,
        context=context,
    )
    editor.bind("K", dispatcher)

    editor.press("K")
    editor.press("K")
    assert editor.text == ""
    assert context.active is dispatcher.session
    assert dispatcher.session.terminated

    editor.press("K")
    assert editor.text == "a"
    assert not dispatcher.session.terminated


def test_terminate_from_cleanup_forces_restart() -> None:
    context = SequencerContext()
    editor = Editor()
    dispatcher = build_dispatcher(
        [{"insert": lambda: editor.insert_text("a"), "cleanup": lambda *_: terminate(context)}, "b"],
        host=editor,
        context=context,
    )
    editor.bind("K", dispatcher)

    editor.press("K")
    editor.press("K")
    # the first step inserted "a" by hand, so its cleanup leaves it in place
    assert (editor.text, editor.cursor) == ("ba", 1)

    editor.press("K")
    assert editor.text == "baa"


def test_terminate_without_active_chain_is_noop() -> None:
    context = SequencerContext()

    terminate(context)

    assert context.active is None


def test_disable_point_recovery_leaves_cursor_where_steps_put_it() -> None:
    context = SequencerContext()
    editor = Editor("xy")
    dispatcher = build_dispatcher(
        [lambda: editor.set_cursor_position(0), "b"],
        host=editor,
        context=context,
    )
    editor.bind("K", dispatcher)

    disable_point_recovery(context)
    editor.press("K")
    editor.press("K")

    assert editor.text == "bxy"
    assert context.recovery.anchor is None


def test_disable_point_recovery_mid_chain_drops_anchor() -> None:
    context = SequencerContext()
    editor = Editor()
    dispatcher = build_dispatcher(["a", "b", "c"], host=editor, context=context)
    editor.bind("K", dispatcher)

    editor.press("K")
    assert context.recovery.anchor == 0

    disable_point_recovery(context)
    editor.press("K")
    editor.press("K")

    assert context.recovery.anchor is None
    assert editor.text == "c"


def test_dispatchers_share_context_anchor() -> None:
    context = SequencerContext()
    editor = Editor("12345", cursor=2)
    first = build_dispatcher(["a"], host=editor, context=context)
    second = build_dispatcher(["b"], host=editor, context=context)
    editor.bind("A", first)
    editor.bind("B", second)

    editor.press("A")
    assert context.recovery.anchor == 2

    editor.set_cursor_position(0)
    editor.press("B")
    assert context.recovery.anchor == 0
    assert context.active is second.session


def test_recovery_service_capture_and_restore() -> None:
    service = CursorRecoveryService()
    editor = Editor("abc", cursor=1)

    service.restore_if_set(editor)
    assert editor.cursor == 1

    service.capture(editor)
    editor.set_cursor_position(3)
    service.restore_if_set(editor)
    assert editor.cursor == 1

    service.disable()
    service.capture(editor)
    assert service.anchor is None
    assert service.disabled
