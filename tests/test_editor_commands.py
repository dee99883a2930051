from __future__ import annotations

import errno
from pathlib import Path
from typing import Iterable, Optional, Sequence

import pytest

from modal_edit import Editor
from modal_edit.buffer import CursorPosition, TextBuffer
from modal_edit.editor import WRAP_MESSAGE
from modal_edit.host import LocalFilesystem, ScriptedKeyboard
from modal_edit.host.display import FILLER, INSERT_BANNER, RecordingDisplay, render_frame
from modal_edit.modes import EditorMode
from modal_edit.runtime import EditorSettings
from modal_edit.viewport import Viewport

UNSAVED = "ERR: No write since last change (add ! to override)"


def make_editor(lines: Optional[Sequence[str]] = None, **kwargs: object) -> Editor:
    return Editor(buffer=TextBuffer(lines) if lines is not None else None, **kwargs)  # type: ignore[arg-type]


def write_file(path: Path, *lines: str) -> str:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return str(path)


# -- :q ---------------------------------------------------------------------


def test_quit_unmodified_buffer() -> None:
    editor = make_editor(["a"])

    editor.feed(":q<CR>")

    assert editor.quit
    assert editor.mode is EditorMode.NORMAL


def test_quit_refuses_unsaved_changes() -> None:
    editor = make_editor(["abc"])
    editor.feed("x:q<CR>")

    assert not editor.quit
    assert editor.message == UNSAVED

    editor.feed(":q!<CR>")

    assert editor.quit


def test_unknown_command_reports_error() -> None:
    editor = make_editor(["a"])

    editor.feed(":xyz<CR>")

    assert editor.message == "ERR: Not an editor command: xyz"
    assert editor.mode is EditorMode.NORMAL


def test_bare_colon_does_nothing() -> None:
    editor = make_editor(["a"])

    editor.feed(":<CR>")

    assert editor.message is None
    assert not editor.quit


# -- :e ---------------------------------------------------------------------


def test_edit_loads_file(tmp_path: Path) -> None:
    path = write_file(tmp_path / "notes.txt", "one", "two", "three")
    editor = make_editor(["old"])

    editor.feed(f":e {path}<CR>")

    assert editor.buffer.lines() == ("one", "two", "three")
    assert editor.file == path
    assert not editor.modified
    assert editor.cursor == CursorPosition(0, 0)


def test_edit_refuses_to_drop_changes(tmp_path: Path) -> None:
    path = write_file(tmp_path / "notes.txt", "fresh")
    editor = make_editor(["abc"])
    editor.feed("x")

    editor.feed(f":e {path}<CR>")
    assert editor.message == UNSAVED
    assert editor.buffer.lines() == ("bc",)

    editor.feed(f":e! {path}<CR>")
    assert editor.buffer.lines() == ("fresh",)
    assert not editor.modified


def test_edit_without_argument_reloads_current_file(tmp_path: Path) -> None:
    path = write_file(tmp_path / "notes.txt", "abc")
    editor = make_editor()
    editor.open(path)
    editor.feed("x")

    editor.feed(":e!<CR>")

    assert editor.buffer.lines() == ("abc",)


def test_edit_missing_file(tmp_path: Path) -> None:
    missing = str(tmp_path / "missing.txt")
    editor = make_editor(["a"])

    editor.feed(f":e {missing}<CR>")

    assert editor.message == f"ERR: Could not open `{missing}': file does not exist"
    assert editor.buffer.lines() == ("a",)


def test_edit_directory(tmp_path: Path) -> None:
    editor = make_editor(["a"])

    editor.feed(f":e {tmp_path}<CR>")

    assert editor.message == f"ERR: Could not open `{tmp_path}': not a regular file"


def test_edit_without_any_name() -> None:
    editor = make_editor(["a"])

    editor.feed(":e<CR>")

    assert editor.message == "ERR: No file name"


def test_edit_clamps_cursor_to_new_contents(tmp_path: Path) -> None:
    path = write_file(tmp_path / "short.txt", "xy")
    editor = make_editor(["a", "b", "c", "abcdef"])
    editor.feed("g$")

    assert editor.open(path)

    assert editor.cursor == CursorPosition(0, 1)
    assert editor.viewport.top_line == 0


# -- :w ---------------------------------------------------------------------


def test_write_without_name() -> None:
    editor = make_editor(["a"])

    editor.feed(":w<CR>")

    assert editor.message == "ERR: No file name"


def test_write_new_file(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    editor = make_editor(["alpha", "beta"])
    editor.feed("x")

    editor.feed(f":w {target}<CR>")

    assert target.read_text(encoding="utf-8") == "lpha\nbeta\n"
    assert editor.message == f'"{target}" 2 lines written'
    assert not editor.modified
    assert editor.file is None


def test_write_existing_other_file_needs_force(tmp_path: Path) -> None:
    target = write_file(tmp_path / "other.txt", "keep")
    editor = make_editor(["new"])

    editor.feed(f":w {target}<CR>")
    assert editor.message == "ERR: File exists (add ! to override)"
    assert Path(target).read_text(encoding="utf-8") == "keep\n"

    editor.feed(f":w! {target}<CR>")
    assert Path(target).read_text(encoding="utf-8") == "new\n"


def test_write_current_file_needs_no_force(tmp_path: Path) -> None:
    path = write_file(tmp_path / "notes.txt", "abc")
    editor = make_editor()
    editor.open(path)
    editor.feed("x")

    editor.feed(":w<CR>")

    assert Path(path).read_text(encoding="utf-8") == "bc\n"
    assert editor.message == f'"{path}" 1 lines written'
    assert not editor.modified


def test_forced_write_onto_directory(tmp_path: Path) -> None:
    editor = make_editor(["a"])

    editor.feed(f":w! {tmp_path}<CR>")

    assert editor.message == (
        f"ERR: Could not open `{tmp_path}' for writing: not a regular file"
    )


def test_crlf_file_round_trips_unchanged(tmp_path: Path) -> None:
    target = tmp_path / "dos.txt"
    target.write_bytes(b"one\r\ntwo\r\n")
    editor = make_editor()
    editor.open(str(target))

    assert editor.buffer.lines() == ("one\r", "two\r")

    editor.feed(":w!<CR>")

    assert target.read_bytes() == b"one\r\ntwo\r\n"


def test_lone_carriage_return_does_not_split_line(tmp_path: Path) -> None:
    target = tmp_path / "mac.txt"
    target.write_bytes(b"a\rb\n")
    editor = make_editor()

    editor.open(str(target))

    assert editor.buffer.num_lines() == 1
    assert editor.buffer.get_line(0) == "a\rb"


def test_missing_final_newline_and_raw_bytes(tmp_path: Path) -> None:
    target = tmp_path / "raw.txt"
    target.write_bytes(b"\xff\xfe\nlast")
    editor = make_editor()
    editor.open(str(target))

    assert editor.buffer.num_lines() == 2
    assert editor.buffer.get_line(1) == "last"

    editor.feed(":w<CR>")

    assert target.read_bytes() == b"\xff\xfe\nlast\n"


class DeniedFilesystem(LocalFilesystem):
    def exists(self, path: str) -> bool:
        return False

    def write_lines(self, path: str, lines: Iterable[str]) -> None:
        raise PermissionError(errno.EACCES, "Permission denied", path)


def test_write_failure_becomes_message() -> None:
    editor = make_editor(["a"], filesystem=DeniedFilesystem())
    editor.feed("x")

    assert editor.write("locked.txt") is False

    assert editor.message == "ERR: Could not open `locked.txt' for writing: Permission denied"
    assert editor.modified


# -- :r and :f --------------------------------------------------------------


def test_read_inserts_after_cursor_line(tmp_path: Path) -> None:
    path = write_file(tmp_path / "insert.txt", "x", "y")
    editor = make_editor(["a", "b"])

    editor.feed(f":r {path}<CR>")

    assert editor.buffer.lines() == ("a", "x", "y", "b")
    assert editor.message == f'"{path}" 2 lines read'
    assert editor.modified


def test_read_requires_argument() -> None:
    editor = make_editor(["a"])

    editor.feed(":r<CR>")

    assert editor.message == "ERR: No file name"


def test_read_refuses_force() -> None:
    editor = make_editor(["a"])

    editor.feed(":r! x<CR>")

    assert editor.message == "ERR: No ! allowed"


def test_file_info_without_name_or_lines() -> None:
    editor = make_editor()

    editor.feed(":f<CR>")

    assert editor.message == '"[No Name]" --No lines in buffer--'


def test_file_info_with_position_and_modified_flag(tmp_path: Path) -> None:
    path = write_file(tmp_path / "three.txt", "ab", "c", "d")
    editor = make_editor()
    editor.open(path)

    editor.feed(":f<CR>")
    assert editor.message == f'"{path}" 3 lines --33%--'

    editor.feed("gx:file<CR>")
    assert editor.message == f'"{path}" [Modified] 3 lines --100%--'


# -- search -----------------------------------------------------------------


def test_search_moves_to_next_match() -> None:
    editor = make_editor(["foo", "bar", "foo bar"])

    editor.feed("/foo<CR>")

    assert editor.cursor == CursorPosition(2, 0)
    assert editor.message is None


def test_search_wraps_with_message() -> None:
    editor = make_editor(["foo", "bar", "foo bar"])
    editor.context.cursor = CursorPosition(2, 0)

    editor.feed("/foo<CR>")

    assert editor.cursor == CursorPosition(0, 0)
    assert editor.message == WRAP_MESSAGE


def test_search_miss_keeps_cursor() -> None:
    editor = make_editor(["abc", "def"])
    editor.context.cursor = CursorPosition(1, 1)

    editor.feed("/zzz<CR>")

    assert editor.cursor == CursorPosition(1, 1)
    assert editor.message == "ERR: Search string not found: zzz"


def test_empty_search_is_noop() -> None:
    editor = make_editor(["abc"])

    editor.feed("/<CR>")

    assert editor.cursor == CursorPosition(0, 0)
    assert editor.message is None


# -- messages ---------------------------------------------------------------


def test_next_motion_clears_message() -> None:
    editor = make_editor(["abc", "def"])
    editor.feed(":xyz<CR>")
    assert editor.message is not None

    editor.feed("<Down>")

    assert editor.message is None


# -- main loop and frames ---------------------------------------------------


def test_main_loop_runs_until_quit(tmp_path: Path) -> None:
    target = tmp_path / "session.txt"
    editor = make_editor()
    keyboard = ScriptedKeyboard(f"ihello<Esc>:w {target}<CR>:q<CR>ignored")
    display = RecordingDisplay()

    status = editor.main_loop(keyboard, display)

    assert status == 0
    assert editor.quit
    assert target.read_text(encoding="utf-8") == "hello\n"
    assert keyboard.remaining == len("ignored")
    assert any(frame.status == INSERT_BANNER for frame in display.frames)
    assert any(frame.status.endswith("1 lines written") for frame in display.frames)


def test_main_loop_stops_on_interrupt() -> None:
    editor = make_editor(["a"])
    display = RecordingDisplay()

    status = editor.main_loop(ScriptedKeyboard("x"), display)

    assert status == 0
    assert not editor.quit
    assert editor.buffer.lines() == ("",)
    assert display.last is not None
    assert display.last.rows[0] == ""


def test_frame_shows_pending_count() -> None:
    editor = make_editor(["a", "b"])

    editor.feed("12")

    assert editor.frame().count == "12"


def test_frame_cursor_moves_to_command_line() -> None:
    editor = make_editor(["a"])

    editor.feed(":wr")
    frame = editor.frame()

    assert frame.status == ":wr"
    assert frame.cursor_on_status
    assert frame.cursor == (3, 0)


def test_render_frame_fills_rows_and_gutter() -> None:
    buffer = TextBuffer(["abc", "de"])
    viewport = Viewport(width=10, height=4)

    frame = render_frame(buffer, viewport, CursorPosition(1, 1))

    assert frame.rows == ("abc", "de", FILLER, FILLER)
    assert frame.gutter == ("  1", "  2", "", "")
    assert frame.cursor == (1, 1)
    assert frame.status == ""
    assert frame.text().splitlines()[0] == "  1 abc"


def test_render_frame_status_priority() -> None:
    buffer = TextBuffer(["abc"])
    viewport = Viewport(width=10, height=2)

    insert = render_frame(buffer, viewport, CursorPosition(0, 0), insert_mode=True)
    message = render_frame(
        buffer, viewport, CursorPosition(0, 0), insert_mode=True, message="hello"
    )
    command = render_frame(
        buffer,
        viewport,
        CursorPosition(0, 0),
        command_line="/ab",
        command_cursor=3,
        message="hello",
    )

    assert insert.status == INSERT_BANNER
    assert message.status == "hello"
    assert command.status == "/ab"
    assert command.cursor == (3, 0)


def test_render_frame_wraps_long_lines() -> None:
    buffer = TextBuffer(["abcdefg", "h"])
    viewport = Viewport(width=3, height=5, wrap=True)

    frame = render_frame(buffer, viewport, CursorPosition(0, 4))

    assert frame.rows == ("abc", "def", "g", "h", FILLER)
    assert frame.gutter == ("  1", "", "", "  2", "")
    assert frame.cursor == (1, 1)


def test_resize_updates_viewport_and_settings() -> None:
    editor = make_editor([str(idx) for idx in range(30)])
    editor.feed("g")

    editor.resize(40, 5)

    assert editor.settings == EditorSettings(width=40, height=5)
    assert editor.viewport.height == 5
    assert len(editor.frame().rows) == 5
    assert editor.viewport.top_line == 25


@pytest.mark.parametrize("size", [(0, 10), (10, 0)])
def test_resize_rejects_empty_window(size: tuple) -> None:
    editor = make_editor(["a"])

    with pytest.raises(ValueError):
        editor.resize(*size)
