"""Executable Textual app hosting the editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from rich import text as rich_text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from modal_edit.editor import Editor
from modal_edit.host.display import Frame
from modal_edit.runtime import EditorSettings, telemetry

from .controller import TextualUIHooks, TextualVimAdapter

COUNT_COLUMN_OFFSET = 10


def _with_cursor(text: rich_text.Text, row: str, column: Optional[int]) -> None:
    if column is None:
        text.append(row)
        return
    padded = row.ljust(column + 1)
    text.append(padded[:column])
    text.append(padded[column], style="reverse")
    text.append(padded[column + 1 :])


def frame_to_text(frame: Frame) -> rich_text.Text:
    """Render the text area: gutter, rows, and a reverse-video cursor cell."""

    text = rich_text.Text(no_wrap=True, overflow="crop")
    cursor_x, cursor_y = frame.cursor
    for y, (number, row) in enumerate(zip(frame.gutter, frame.rows)):
        if y:
            text.append("\n")
        text.append(f"{number:<{frame.gutter_width}}", style="dim")
        on_row = not frame.cursor_on_status and y == cursor_y
        _with_cursor(text, row, cursor_x if on_row else None)
    return text


def status_to_text(frame: Frame, width: int) -> rich_text.Text:
    text = rich_text.Text(no_wrap=True, overflow="crop")
    column = frame.cursor[0] if frame.cursor_on_status else None
    status = frame.status
    if frame.count is not None:
        status = status.ljust(max(width - COUNT_COLUMN_OFFSET, 0)) + frame.count
    _with_cursor(text, status, column)
    return text


class ModalEditApp(App[None]):
    """Full-screen host: one text area plus a status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#text-area {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        super().__init__()
        self.editor = Editor(settings or EditorSettings.from_env())
        self.adapter: TextualVimAdapter | None = None
        self._path = path
        self._text_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("modal_edit.adapters.textual")

    def compose(self) -> ComposeResult:
        self._text_widget = Static("", id="text-area", markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._text_widget
        yield self._status_widget

    def on_mount(self) -> None:
        if self._path:
            self.editor.open(self._path)
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualVimAdapter(self.editor, hooks)
        size = self.size
        self._resize(size.width, size.height)

    def on_resize(self, event: events.Resize) -> None:
        self._resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        event.stop()
        event.prevent_default()
        self.adapter.handle_textual_key(event.key, character=event.character)

    def _resize(self, width: int, height: int) -> None:
        if self.adapter is None:
            return
        gutter = self.editor.settings.gutter_width
        self.adapter.resize(width - gutter, height - 1)

    def _update_frame(self, frame: Frame) -> None:
        if self._text_widget:
            self._text_widget.update(frame_to_text(frame))
        if self._status_widget:
            self._status_widget.update(status_to_text(frame, self.size.width))

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modal-edit", description="Modal terminal text editor."
    )
    parser.add_argument("path", nargs="?", help="file to open at startup")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset="editor")
    app = ModalEditApp(path=args.path)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
