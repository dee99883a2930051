"""The editor: owns all state, applies operator results, runs commands."""

from __future__ import annotations

from typing import Callable, Dict, Optional, cast

from modal_edit.actions.command import (
    CommandError,
    ParsedCommand,
    SearchMiss,
    Verb,
    find_forward,
    parse_command_line,
)
from modal_edit.buffer import CursorPosition, Register, TextBuffer, clamp_cursor
from modal_edit.host.display import Display, Frame, render_frame
from modal_edit.host.filesystem import Filesystem, LocalFilesystem
from modal_edit.host.keyboard import Keyboard
from modal_edit.keymaps import INTERRUPT, Key, Keymap, KeySequence
from modal_edit.modes import (
    CommandMode,
    EditorMode,
    ModeBus,
    ModeContext,
    ModeManager,
    NormalMode,
    PendingOperator,
)
from modal_edit.runtime import EditorSettings, telemetry
from modal_edit.viewport import Viewport

LOGGER_NAME = "modal_edit.editor"
WRAP_MESSAGE = "search hit BOTTOM, continuing at TOP"
UNSAVED_CHANGES = "No write since last change (add ! to override)"


class Editor:
    """Single owner of the buffer, register, cursor, viewport and modes.

    Processing a key is synchronous and deterministic; the only I/O goes
    through the injected ``Filesystem`` and, in ``main_loop``, the
    ``Keyboard`` and ``Display`` collaborators.
    """

    def __init__(
        self,
        settings: Optional[EditorSettings] = None,
        *,
        filesystem: Optional[Filesystem] = None,
        keymap: Optional[Keymap] = None,
        buffer: Optional[TextBuffer] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.filesystem: Filesystem = filesystem or LocalFilesystem()
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=buffer if buffer is not None else TextBuffer(name="main"),
            register=Register(),
            viewport=Viewport.from_settings(self.settings),
            bus=self.bus,
            settings=self.settings,
        )
        self.modes = ModeManager(self.context, keymap=keymap)
        self.file: Optional[str] = None
        self.modified = False
        self.quit = False
        self.message: Optional[str] = None
        self._commands: Dict[Verb, Callable[[ParsedCommand], None]] = {
            Verb.FILE: self._file_info,
            Verb.QUIT: self._quit,
            Verb.EDIT: self._edit,
            Verb.WRITE: self._write,
            Verb.READ: self._read,
        }

    # -- state accessors ----------------------------------------------

    @property
    def buffer(self) -> TextBuffer:
        return self.context.buffer

    @property
    def register(self) -> Register:
        return self.context.register

    @property
    def viewport(self) -> Viewport:
        return self.context.viewport

    @property
    def cursor(self) -> CursorPosition:
        return self.context.cursor

    @property
    def mode(self) -> EditorMode:
        return self.modes.current

    @property
    def normal(self) -> NormalMode:
        return cast(NormalMode, self.modes.get(EditorMode.NORMAL))

    @property
    def command_mode(self) -> CommandMode:
        return cast(CommandMode, self.modes.get(EditorMode.COMMAND))

    @property
    def count(self) -> Optional[int]:
        return self.normal.count

    @property
    def pending(self) -> PendingOperator:
        return self.normal.pending

    # -- key processing -----------------------------------------------

    def handle_key(self, key: Key) -> bool:
        """Process one key; returns whether the screen needs repainting."""

        with telemetry.span(
            "editor::handle_key",
            logger_name=LOGGER_NAME,
            component="editor",
            metadata={"key": key.token, "mode": self.mode.value},
        ) as handle:
            result = self.modes.handle_key(key)

            needs_repaint = result.buffer_changed or result.repaint or result.mode_changed
            if result.buffer_changed:
                self.modified = True

            target = result.cursor if result.cursor is not None else self.cursor
            needs_repaint = needs_repaint or result.cursor_moved
            self._place_cursor(target)

            if needs_repaint or self.count is not None:
                self.message = None
            if result.message:
                self._show(result.message)

            if result.submitted is not None:
                handle.add_metadata("submitted", result.submitted)
                self._run_command_line(result.submitted)
                needs_repaint = True

        return needs_repaint

    def feed(self, keys: str) -> None:
        """Process keys written as text, e.g. ``"3dd"`` or ``"ihi<Esc>"``."""

        for key in KeySequence.from_text(keys):
            self.handle_key(key)

    def _place_cursor(self, cursor: CursorPosition) -> None:
        append = self.mode is EditorMode.INSERT
        self.context.cursor = clamp_cursor(self.buffer, cursor, append=append)
        self.viewport.adjust(self.buffer, self.context.cursor)

    def _run_command_line(self, text: str) -> None:
        if text.startswith(":"):
            self.execute_command(text)
        elif text.startswith("/"):
            self.search(text[1:])

    # -- messages -----------------------------------------------------

    def _show(self, message: str) -> None:
        self.message = message
        self.bus.emit("editor.message", message)

    def _error(self, reason: str) -> None:
        telemetry.record_event(
            "editor.error",
            level="warning",
            data={"reason": reason, "file": self.file or ""},
            logger_name=LOGGER_NAME,
        )
        self._show(f"ERR: {reason}")

    # -- ex commands --------------------------------------------------

    def execute_command(self, text: str) -> None:
        try:
            parsed = parse_command_line(text)
        except CommandError as exc:
            self._error(str(exc))
            return
        if parsed is None:
            return

        self.message = None
        with telemetry.span(
            f"command::{parsed.verb.full}",
            logger_name=LOGGER_NAME,
            component="commands",
            metadata={"force": parsed.force, "argument": parsed.argument or ""},
        ):
            self._commands[parsed.verb](parsed)

    def _file_info(self, parsed: ParsedCommand) -> None:
        del parsed
        name = self.file or "[No Name]"
        stats = "--No lines in buffer--"
        num_lines = self.buffer.num_lines()
        if num_lines:
            percentage = (self.cursor.line + 1) * 100 // num_lines
            stats = f"{num_lines} lines --{percentage}%--"
        if self.modified:
            stats = f"[Modified] {stats}"
        self._show(f'"{name}" {stats}')

    def _quit(self, parsed: ParsedCommand) -> None:
        if self.modified and not parsed.force:
            self._error(UNSAVED_CHANGES)
            return
        self.quit = True
        self.bus.emit("editor.quit", None)

    def _edit(self, parsed: ParsedCommand) -> None:
        path = parsed.argument or self.file
        if path is None:
            self._error("No file name")
            return
        self.open(path, force=parsed.force)

    def _write(self, parsed: ParsedCommand) -> None:
        path = parsed.argument or self.file
        if path is None:
            self._error("No file name")
            return
        self.write(path, force=parsed.force)

    def _read(self, parsed: ParsedCommand) -> None:
        if parsed.argument is None:
            self._error("No file name")
            return
        self.read(parsed.argument)

    # -- file operations ----------------------------------------------

    def _check_readable(self, path: str, resolved: str) -> bool:
        if not self.filesystem.exists(resolved):
            self._error(f"Could not open `{path}': file does not exist")
            return False
        if not self.filesystem.is_regular_file(resolved):
            self._error(f"Could not open `{path}': not a regular file")
            return False
        return True

    def open(self, path: str, *, force: bool = False) -> bool:
        """Replace the buffer with ``path``; refuses to drop unsaved changes."""

        resolved = self.filesystem.expand(path)
        if not self._check_readable(path, resolved):
            return False
        if self.modified and not force:
            self._error(UNSAVED_CHANGES)
            return False

        try:
            self.buffer.read(resolved, filesystem=self.filesystem)
        except OSError as exc:
            self._error(f"Could not open `{path}': {exc.strerror or exc}")
            return False

        self.file = resolved
        self.modified = False
        self.viewport.reset()
        self._place_cursor(self.cursor)
        telemetry.record_event(
            "editor.open",
            data={"path": resolved, "lines": self.buffer.num_lines()},
            logger_name=LOGGER_NAME,
        )
        return True

    def read(self, path: str) -> bool:
        """Insert the lines of ``path`` after the cursor line."""

        resolved = self.filesystem.expand(path)
        if not self._check_readable(path, resolved):
            return False

        try:
            count = self.buffer.read(
                resolved, at_line=self.cursor.line, filesystem=self.filesystem
            )
        except OSError as exc:
            self._error(f"Could not open `{path}': {exc.strerror or exc}")
            return False

        self.modified = True
        self._place_cursor(self.cursor)
        self._show(f'"{resolved}" {count} lines read')
        return True

    def write(self, path: str, *, force: bool = False) -> bool:
        resolved = self.filesystem.expand(path)
        if self.filesystem.exists(resolved) and resolved != self.file:
            if not force:
                self._error("File exists (add ! to override)")
                return False
            if not self.filesystem.is_regular_file(resolved):
                self._error(f"Could not open `{path}' for writing: not a regular file")
                return False

        try:
            count = self.buffer.write(resolved, filesystem=self.filesystem)
        except OSError as exc:
            self._error(f"Could not open `{path}' for writing: {exc.strerror or exc}")
            return False

        self.modified = False
        self._show(f'"{resolved}" {count} lines written')
        return True

    # -- search -------------------------------------------------------

    def search(self, needle: str) -> bool:
        if not needle:
            return False
        try:
            hit = find_forward(self.buffer, self.cursor, needle)
        except SearchMiss as exc:
            self._error(str(exc))
            return False

        self._place_cursor(hit.position)
        if hit.wrapped:
            self._show(WRAP_MESSAGE)
        return True

    # -- display ------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        self.settings = self.settings.resized(width, height)
        self.context.settings = self.settings
        self.viewport.resize(width, height)
        self.viewport.adjust(self.buffer, self.cursor)

    def frame(self) -> Frame:
        mode = self.mode
        command_line = None
        command_cursor = 0
        if mode is EditorMode.COMMAND:
            command_line = self.command_mode.line.text
            command_cursor = self.command_mode.line.cursor
        return render_frame(
            self.buffer,
            self.viewport,
            self.cursor,
            insert_mode=mode is EditorMode.INSERT,
            command_line=command_line,
            command_cursor=command_cursor,
            message=self.message,
            count=self.count if mode is EditorMode.NORMAL else None,
            gutter_width=self.settings.gutter_width,
        )

    def main_loop(self, keyboard: Keyboard, display: Display) -> int:
        """Read keys until ``:q`` or the interrupt key; returns an exit status."""

        frame = self.frame()
        display.paint(frame)
        with telemetry.span("editor::main_loop", logger_name=LOGGER_NAME, component="editor"):
            while not self.quit:
                key = keyboard.next_key()
                if key == INTERRUPT:
                    telemetry.record_event("editor.interrupt", logger_name=LOGGER_NAME)
                    break
                repaint = self.handle_key(key)
                current = self.frame()
                if repaint or current != frame:
                    display.paint(current)
                frame = current
        return 0


__all__ = ["Editor", "WRAP_MESSAGE"]
