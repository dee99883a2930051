from __future__ import annotations

from typing import Optional, Sequence

import pytest

from modal_edit import Editor
from modal_edit.actions import motions
from modal_edit.buffer import CursorPosition, Register, TextBuffer, WindowInfo
from modal_edit.keymaps import Key, NormalCommand, default_keymap
from modal_edit.modes import (
    DispatchError,
    EditorMode,
    OperatorArgs,
    OperatorDispatcher,
    PendingOperator,
)


def make_editor(
    lines: Optional[Sequence[str]] = None, cursor: CursorPosition = CursorPosition(0, 0)
) -> Editor:
    editor = Editor(buffer=TextBuffer(lines) if lines is not None else None)
    editor.context.cursor = cursor
    return editor


# -- counts and line operators -------------------------------------------


def test_count_then_dd_deletes_that_many_lines() -> None:
    editor = make_editor(["1", "2", "3", "4", "5"], CursorPosition(1, 0))

    editor.feed("3dd")

    assert editor.buffer.lines() == ("1", "5")
    assert editor.cursor == CursorPosition(1, 0)
    assert editor.message == "3 fewer lines"
    assert editor.pending is PendingOperator.NONE
    assert editor.count is None
    assert editor.modified


def test_dd_count_is_clamped_to_remaining_lines() -> None:
    editor = make_editor(["a", "b"], CursorPosition(1, 0))

    editor.feed("5dd")

    assert editor.buffer.lines() == ("a",)
    assert editor.cursor == CursorPosition(0, 0)
    assert editor.message == "1 fewer lines"


def test_count_yy_then_put_inserts_copies() -> None:
    editor = make_editor(["a", "b", "c"])

    editor.feed("2yy")
    assert editor.message == "2 lines yanked"
    assert editor.buffer.lines() == ("a", "b", "c")
    assert not editor.modified

    editor.feed("p")

    assert editor.buffer.lines() == ("a", "a", "b", "b", "c")
    assert editor.cursor == CursorPosition(1, 0)


@pytest.mark.parametrize("keys", ["dy", "yd"])
def test_cut_yanks_then_deletes(keys: str) -> None:
    editor = make_editor(["a", "b", "c"])

    editor.feed(keys)

    assert editor.buffer.lines() == ("b", "c")
    assert editor.register.lines == ("a",)
    assert editor.message == "1 fewer lines"


def test_dd_leaves_register_alone() -> None:
    editor = make_editor(["a", "b"])
    editor.register.replace(["kept"])

    editor.feed("dd")

    assert editor.register.lines == ("kept",)


def test_first_operator_key_waits_with_count() -> None:
    editor = make_editor(["a", "b", "c"])

    editor.feed("2d")

    assert editor.pending is PendingOperator.DELETE
    assert editor.count == 2
    assert editor.buffer.lines() == ("a", "b", "c")


def test_unrelated_key_cancels_pending_operator() -> None:
    editor = make_editor(["1", "2", "3", "4", "5"])

    editor.feed("2dl")

    assert editor.pending is PendingOperator.NONE
    assert editor.count is None
    assert editor.buffer.lines() == ("1", "2", "3", "4", "5")
    assert editor.cursor == CursorPosition(4, 0)


def test_unmapped_key_cancels_pending_operator() -> None:
    editor = make_editor(["1", "2"])

    editor.feed("dQ")

    assert editor.pending is PendingOperator.NONE
    assert editor.buffer.lines() == ("1", "2")


def test_zero_accumulates_only_after_a_digit() -> None:
    editor = make_editor(["abcdefghijkl"], CursorPosition(0, 5))

    editor.feed("0")
    assert editor.cursor == CursorPosition(0, 0)
    assert editor.count is None

    editor.feed("10x")

    assert editor.buffer.lines() == ("kl",)
    assert editor.count is None


# -- single-key operators -------------------------------------------------


def test_x_then_o_scenario() -> None:
    editor = make_editor(["abc", "def"])

    editor.feed("x")
    assert editor.buffer.lines() == ("bc", "def")
    assert editor.cursor == CursorPosition(0, 0)

    editor.feed("o")

    assert editor.buffer.lines() == ("bc", "", "def")
    assert editor.mode is EditorMode.INSERT
    assert editor.cursor == CursorPosition(1, 0)


def test_x_at_line_end_steps_left() -> None:
    editor = make_editor(["abc"], CursorPosition(0, 2))

    editor.feed("x")

    assert editor.buffer.lines() == ("ab",)
    assert editor.cursor == CursorPosition(0, 1)


def test_x_on_empty_line_changes_nothing() -> None:
    editor = make_editor(["", "a"])

    editor.feed("x")

    assert editor.buffer.lines() == ("", "a")
    assert not editor.modified


def test_replace_with_count_is_clamped() -> None:
    editor = make_editor(["abcd"], CursorPosition(0, 1))

    editor.feed("2rz")
    assert editor.buffer.lines() == ("azzd",)
    assert editor.cursor == CursorPosition(0, 1)

    editor.feed("9ry")
    assert editor.buffer.lines() == ("ayyy",)


def test_replace_cancelled_by_escape() -> None:
    editor = make_editor(["abcd"])

    editor.feed("r<Esc>")

    assert editor.buffer.lines() == ("abcd",)
    assert editor.pending is PendingOperator.NONE
    assert editor.mode is EditorMode.NORMAL


def test_put_before_current_line() -> None:
    editor = make_editor(["a", "b"], CursorPosition(1, 0))

    editor.feed("yyP")

    assert editor.buffer.lines() == ("a", "b", "b")
    assert editor.cursor == CursorPosition(1, 0)


def test_put_from_empty_register_is_noop() -> None:
    editor = make_editor(["a"])

    editor.feed("p")

    assert editor.buffer.lines() == ("a",)
    assert not editor.modified


def test_redraw_requests_repaint() -> None:
    editor = make_editor(["a"])

    assert editor.handle_key(Key.of("z")) is True
    assert not editor.modified


@pytest.mark.parametrize("keys", ["x", "dd", "yy", "$", "g", "rz", "<Down>"])
def test_empty_buffer_operators_are_noops(keys: str) -> None:
    editor = make_editor()

    editor.feed(keys)

    assert editor.buffer.is_empty()
    assert editor.cursor == CursorPosition(0, 0)
    assert not editor.modified


# -- motions --------------------------------------------------------------


def test_right_wraps_onto_next_line() -> None:
    editor = make_editor(["abc", "de"], CursorPosition(0, 1))

    editor.feed("3 ")

    assert editor.cursor == CursorPosition(1, 1)


def test_right_stops_at_end_of_buffer() -> None:
    editor = make_editor(["ab"])

    editor.feed("5<Right>")

    assert editor.cursor == CursorPosition(0, 1)


def test_left_wraps_onto_previous_line() -> None:
    editor = make_editor(["abc", "de"], CursorPosition(1, 0))

    editor.feed("2<BS>")

    assert editor.cursor == CursorPosition(0, 1)


def test_left_stops_at_origin() -> None:
    editor = make_editor(["abc", "de"], CursorPosition(1, 1))

    editor.feed("9<Left>")

    assert editor.cursor == CursorPosition(0, 0)


def test_dollar_goes_to_last_character() -> None:
    editor = make_editor(["abc"])

    editor.feed("$")

    assert editor.cursor == CursorPosition(0, 2)


def test_goto_line_with_and_without_count() -> None:
    editor = make_editor(["a", "b", "c", "d"])

    editor.feed("g")
    assert editor.cursor.line == 3

    editor.feed("2g")
    assert editor.cursor.line == 1

    editor.feed("99g")
    assert editor.cursor.line == 3

    editor.feed("b")
    assert editor.cursor.line == 0


def test_window_top_and_bottom_use_estimate() -> None:
    editor = make_editor([str(idx) for idx in range(50)])

    editor.feed("l")
    assert editor.cursor.line == 22

    editor.feed("h")
    assert editor.cursor.line == 0


def test_down_reclamps_column() -> None:
    editor = make_editor(["abcdef", "ab"], CursorPosition(0, 5))

    editor.feed("<Down>")

    assert editor.cursor == CursorPosition(1, 1)


def test_enter_and_minus_move_to_line_start() -> None:
    editor = make_editor(["ab", "cd", "ef", "gh"], CursorPosition(0, 1))

    editor.feed("2<CR>")
    assert editor.cursor == CursorPosition(2, 0)

    editor.feed("-")
    assert editor.cursor == CursorPosition(1, 0)


def test_insert_end_reaches_append_point() -> None:
    editor = make_editor(["abc"])

    editor.feed("i<End>")

    assert editor.cursor == CursorPosition(0, 3)


def test_insert_right_at_append_point_wraps() -> None:
    editor = make_editor(["abc", "de"])

    editor.feed("i<End><Right>")

    assert editor.cursor == CursorPosition(1, 0)


def test_insert_down_clamps_to_line_length() -> None:
    editor = make_editor(["abcdef", "ab"], CursorPosition(0, 5))

    editor.feed("i<End><Down>")

    assert editor.cursor == CursorPosition(1, 2)


def test_escape_from_append_point_steps_back() -> None:
    editor = make_editor(["abc"])

    editor.feed("i<End><Esc>")

    assert editor.mode is EditorMode.NORMAL
    assert editor.cursor == CursorPosition(0, 2)


@pytest.mark.parametrize("keys", ["<End>", "<End><Right>", "<Down><End>", "<Up>xyz", "<CR>"])
def test_insert_cursor_stays_within_line_length(keys: str) -> None:
    editor = make_editor(["abcdef", "xy", ""], CursorPosition(1, 1))

    editor.feed("i" + keys)

    assert 0 <= editor.cursor.col <= editor.buffer.line_length(editor.cursor.line)


@pytest.mark.parametrize("keys", ["$", "<End>", "5 ", "<Down>", "l", "x", "g"])
def test_normal_cursor_never_rests_past_last_char(keys: str) -> None:
    editor = make_editor(["abcdef", "xy", "", "long line here"], CursorPosition(0, 3))

    editor.feed(keys)

    line_length = editor.buffer.line_length(editor.cursor.line)
    if line_length == 0:
        assert editor.cursor.col == 0
    else:
        assert 0 <= editor.cursor.col < line_length


# -- dispatch contract ----------------------------------------------------


def make_args(command: object, *, pending: PendingOperator = PendingOperator.NONE) -> OperatorArgs:
    return OperatorArgs(
        key=Key.of("?"),
        buffer=TextBuffer(["abc"]),
        register=Register(),
        cursor=CursorPosition(0, 0),
        window=WindowInfo(),
        mode=EditorMode.NORMAL,
        command=command,  # type: ignore[arg-type]
        pending=pending,
    )


def test_handler_rejects_foreign_command() -> None:
    with pytest.raises(DispatchError):
        motions.move_cursor(make_args(NormalCommand.PUT_AFTER))


def test_dispatcher_requires_every_command() -> None:
    handlers = {NormalCommand.RIGHT: motions.move_cursor}

    with pytest.raises(DispatchError):
        OperatorDispatcher(
            EditorMode.NORMAL, NormalCommand, handlers, keymap=default_keymap()
        )
