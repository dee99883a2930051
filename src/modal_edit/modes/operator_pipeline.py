"""Exhaustive command-to-operator dispatch tables."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Type

from modal_edit.keymaps import CommandLineCommand, InsertCommand, Keymap, NormalCommand
from modal_edit.keymaps.models import Command, Key
from modal_edit.runtime import telemetry

from .base_mode import (
    DispatchError,
    EditorMode,
    OperatorArgs,
    OperatorFunction,
    OperatorResult,
)


class OperatorDispatcher:
    """Routes a key to the operator bound to its command in one mode.

    Every member of ``commands`` must have a handler; an incomplete table is
    rejected when the dispatcher is built rather than when a key arrives.
    Keys the keymap does not bind go to ``fallback``.
    """

    def __init__(
        self,
        mode: EditorMode,
        commands: Type[Enum],
        handlers: Mapping[Command, OperatorFunction],
        *,
        keymap: Keymap,
        fallback: Optional[OperatorFunction] = None,
    ) -> None:
        missing = [command.name for command in commands if command not in handlers]
        if missing:
            raise DispatchError(
                f"{mode.value} dispatcher", f"missing handlers for {', '.join(missing)}"
            )
        unknown = [command for command in keymap.commands(mode.value) if command not in handlers]
        if unknown:
            raise DispatchError(f"{mode.value} dispatcher", f"unhandled bindings {unknown!r}")
        self.mode = mode
        self.commands = commands
        self._handlers = dict(handlers)
        self._keymap = keymap
        self._fallback = fallback

    def resolve(self, key: Key) -> Optional[Command]:
        return self._keymap.lookup(self.mode.value, key)

    def dispatch(self, args: OperatorArgs) -> OperatorResult:
        command = args.command
        if command is None:
            if self._fallback is None:
                return OperatorResult(consumed=False, status="unmapped")
            handler = self._fallback
        else:
            handler = self._handlers[command]
        with telemetry.span(
            f"operator::{getattr(handler, '__name__', 'fallback')}",
            component="operators",
            metadata={
                "mode": self.mode.value,
                "key": args.key.token,
                "command": command.name if command is not None else "-",
                "count": args.count,
            },
        ):
            return handler(args)


def build_normal_dispatcher(keymap: Keymap) -> OperatorDispatcher:
    from modal_edit.actions import core, edits, motions, operators

    handlers: dict[Command, OperatorFunction] = {
        NormalCommand.COUNT_DIGIT: edits.handle_digit,
        NormalCommand.RIGHT: motions.move_cursor,
        NormalCommand.LEFT: motions.move_cursor,
        NormalCommand.LINE_END: motions.move_cursor,
        NormalCommand.GOTO_LINE: motions.scroll_buffer,
        NormalCommand.WINDOW_TOP: motions.scroll_buffer,
        NormalCommand.WINDOW_BOTTOM: motions.scroll_buffer,
        NormalCommand.BUFFER_TOP: motions.scroll_buffer,
        NormalCommand.DOWN: motions.scroll_buffer,
        NormalCommand.UP: motions.scroll_buffer,
        NormalCommand.NEXT_LINE_START: motions.move_to_start_of_line,
        NormalCommand.PREV_LINE_START: motions.move_to_start_of_line,
        NormalCommand.LINE_START: motions.move_to_start_of_line,
        NormalCommand.DELETE_CHAR: edits.delete_chars,
        NormalCommand.REPLACE_CHAR: edits.replace_chars,
        NormalCommand.DELETE_OPERATOR: operators.do_pending_operator,
        NormalCommand.YANK_OPERATOR: operators.do_pending_operator,
        NormalCommand.PUT_AFTER: edits.put_lines,
        NormalCommand.PUT_BEFORE: edits.put_lines,
        NormalCommand.INSERT: core.start_insert,
        NormalCommand.APPEND: core.start_insert,
        NormalCommand.OPEN_LINE: core.start_insert,
        NormalCommand.COMMAND_LINE: core.start_command,
        NormalCommand.SEARCH: core.start_command,
        NormalCommand.REDRAW: edits.redraw,
    }
    return OperatorDispatcher(
        EditorMode.NORMAL,
        NormalCommand,
        handlers,
        keymap=keymap,
        fallback=edits.ignore_key,
    )


def build_insert_dispatcher(keymap: Keymap) -> OperatorDispatcher:
    from modal_edit.actions import core, edits, motions

    handlers: dict[Command, OperatorFunction] = {
        InsertCommand.RIGHT: motions.move_cursor,
        InsertCommand.LEFT: motions.move_cursor,
        InsertCommand.LINE_END: motions.move_cursor,
        InsertCommand.DOWN: motions.scroll_buffer,
        InsertCommand.UP: motions.scroll_buffer,
        InsertCommand.LINE_START: motions.move_to_start_of_line,
        InsertCommand.LEAVE: core.start_normal,
        InsertCommand.BACKSPACE: edits.delete_chars,
        InsertCommand.BREAK_LINE: edits.break_line,
    }
    return OperatorDispatcher(
        EditorMode.INSERT,
        InsertCommand,
        handlers,
        keymap=keymap,
        fallback=edits.insert_char,
    )


def build_command_dispatcher(
    keymap: Keymap, handlers: Mapping[Command, OperatorFunction], fallback: OperatorFunction
) -> OperatorDispatcher:
    return OperatorDispatcher(
        EditorMode.COMMAND,
        CommandLineCommand,
        handlers,
        keymap=keymap,
        fallback=fallback,
    )


__all__ = [
    "OperatorDispatcher",
    "build_normal_dispatcher",
    "build_insert_dispatcher",
    "build_command_dispatcher",
]
