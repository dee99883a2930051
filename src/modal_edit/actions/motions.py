"""Cursor motions for Normal and Insert mode."""

from __future__ import annotations

from modal_edit.buffer import CursorPosition, last_valid_column
from modal_edit.keymaps.models import InsertCommand, NormalCommand
from modal_edit.modes.base_mode import (
    DispatchError,
    EditorMode,
    OperatorArgs,
    OperatorResult,
)

_RIGHT = {NormalCommand.RIGHT, InsertCommand.RIGHT}
_LEFT = {NormalCommand.LEFT, InsertCommand.LEFT}
_LINE_END = {NormalCommand.LINE_END, InsertCommand.LINE_END}
_DOWN = {NormalCommand.DOWN, InsertCommand.DOWN}
_UP = {NormalCommand.UP, InsertCommand.UP}
_LINE_START = {
    NormalCommand.LINE_START,
    NormalCommand.COUNT_DIGIT,
    InsertCommand.LINE_START,
}


def _last_valid(args: OperatorArgs, line: int) -> int:
    return last_valid_column(args.buffer, line, append=args.mode is EditorMode.INSERT)


def move_cursor(args: OperatorArgs) -> OperatorResult:
    """Horizontal motions; Right/Left wrap across line boundaries."""

    if args.buffer.is_empty():
        return OperatorResult()

    line, col = args.cursor
    to_move = args.count or 1
    last_line = args.buffer.num_lines() - 1

    if args.command in _RIGHT:
        while to_move:
            last = _last_valid(args, line)
            if col + to_move <= last:
                col += to_move
                break
            if line < last_line:
                to_move -= last - col + 1
                line, col = line + 1, 0
            else:
                col = last
                break
    elif args.command in _LEFT:
        while to_move:
            if col >= to_move:
                col -= to_move
                break
            if line > 0:
                to_move -= col + 1
                line -= 1
                col = _last_valid(args, line)
            else:
                col = 0
                break
    elif args.command in _LINE_END:
        col = _last_valid(args, line)
    else:
        raise DispatchError("move_cursor", args.command, args.key)

    return OperatorResult(cursor=CursorPosition(line, col))


def scroll_buffer(args: OperatorArgs) -> OperatorResult:
    """Vertical jumps: ``g``, ``h``, ``l``, ``b`` and the Up/Down arrows."""

    if args.buffer.is_empty():
        return OperatorResult()

    num_lines = args.buffer.num_lines()
    line, col = args.cursor
    command = args.command

    if command is NormalCommand.GOTO_LINE:
        line = min((args.count or num_lines) - 1, num_lines - 1)
    elif command is NormalCommand.WINDOW_TOP:
        line = args.window.top_line
    elif command is NormalCommand.WINDOW_BOTTOM:
        # Uses the configured estimate, not the rendered height.
        line = min(args.window.top_line + args.visible_height, num_lines - 1)
    elif command is NormalCommand.BUFFER_TOP:
        line = 0
    elif command in _DOWN:
        line = min(line + (args.count or 1), num_lines - 1)
    elif command in _UP:
        line = max(line - (args.count or 1), 0)
    else:
        raise DispatchError("scroll_buffer", command, args.key)

    line = max(line, 0)
    col = min(col, _last_valid(args, line))
    return OperatorResult(cursor=CursorPosition(line, col))


def move_to_start_of_line(args: OperatorArgs) -> OperatorResult:
    if args.buffer.is_empty():
        return OperatorResult()

    line = args.cursor.line
    if args.command is NormalCommand.NEXT_LINE_START:
        line = min(line + (args.count or 1), args.buffer.num_lines() - 1)
    elif args.command is NormalCommand.PREV_LINE_START:
        line = max(line - (args.count or 1), 0)
    elif args.command not in _LINE_START:
        raise DispatchError("move_to_start_of_line", args.command, args.key)

    return OperatorResult(cursor=CursorPosition(line, 0))


__all__ = ["move_cursor", "scroll_buffer", "move_to_start_of_line"]
