"""Command-line mode with inline editing of ``:`` commands and ``/`` searches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from modal_edit.keymaps import CommandLineCommand, Keymap
from modal_edit.keymaps.models import Key

from .base_mode import EditorMode, Mode, ModeContext, OperatorArgs, OperatorResult
from .operator_pipeline import build_command_dispatcher


@dataclass(slots=True)
class CommandLine:
    """Text being typed, prefix character included, and its edit cursor."""

    text: str = ""
    cursor: int = 0

    @classmethod
    def start(cls, prefix: str) -> "CommandLine":
        return cls(text=prefix, cursor=len(prefix))

    @property
    def prefix(self) -> str:
        return self.text[:1]

    def insert(self, char: str) -> None:
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += len(char)

    def backspace(self) -> bool:
        """Delete before the cursor; ``False`` when only the prefix is left."""

        if self.cursor <= 1:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True


class CommandMode(Mode):
    name = EditorMode.COMMAND

    def __init__(self, context: ModeContext, *, keymap: Keymap) -> None:
        super().__init__(context)
        self.line = CommandLine()
        self.dispatcher = build_command_dispatcher(
            keymap,
            {
                CommandLineCommand.CANCEL: self.cancel,
                CommandLineCommand.BACKSPACE: self.delete_char,
                CommandLineCommand.SUBMIT: self.submit,
            },
            fallback=self.type_char,
        )

    def on_enter(self, previous: Optional[EditorMode], **options: object) -> None:
        del previous
        self.line = CommandLine.start(str(options.get("prefix") or ":"))
        self.context.bus.emit("command.start", self.line.prefix)

    def on_exit(self, next_mode: Optional[EditorMode]) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.line.text)
        self.line = CommandLine()

    @property
    def current_command(self) -> str:
        return self.line.text

    def handle_key(self, key: Key) -> OperatorResult:
        command = self.dispatcher.resolve(key)
        return self.dispatcher.dispatch(self.snapshot(key, command))

    def cancel(self, args: OperatorArgs) -> OperatorResult:
        del args
        return OperatorResult(switch_to=EditorMode.NORMAL, status="command_cancel")

    def delete_char(self, args: OperatorArgs) -> OperatorResult:
        del args
        if self.line.backspace():
            return OperatorResult(status="editing")
        return OperatorResult(switch_to=EditorMode.NORMAL, status="command_cancel")

    def submit(self, args: OperatorArgs) -> OperatorResult:
        del args
        text = self.line.text
        self.context.bus.emit("command.submit", text)
        return OperatorResult(
            switch_to=EditorMode.NORMAL, status="command_submit", submitted=text
        )

    def type_char(self, args: OperatorArgs) -> OperatorResult:
        if not args.key.printable:
            return OperatorResult(consumed=False, status="ignored")
        assert args.key.char is not None
        self.line.insert(args.key.char)
        return OperatorResult(status="editing")


__all__ = ["CommandLine", "CommandMode"]
