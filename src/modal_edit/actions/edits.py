"""Character-level edits, counts, puts and the unmapped-key fallbacks."""

from __future__ import annotations

from modal_edit.buffer import CursorPosition
from modal_edit.keymaps.models import InsertCommand, NormalCommand
from modal_edit.modes.base_mode import (
    DispatchError,
    OperatorArgs,
    OperatorResult,
    PendingOperator,
)

from .motions import move_to_start_of_line


def handle_digit(args: OperatorArgs) -> OperatorResult:
    """Grow the pending count; a leading ``0`` is the start-of-line motion."""

    char = args.key.char
    if char is None or not char.isdigit():
        raise DispatchError("handle_digit", args.command, args.key)
    if char == "0" and args.count is None:
        return move_to_start_of_line(args)
    return OperatorResult(
        pending=args.pending,
        count=(args.count or 0) * 10 + int(char),
        status="count",
    )


def delete_chars(args: OperatorArgs) -> OperatorResult:
    """``x`` in Normal mode and Backspace in Insert mode."""

    buffer = args.buffer
    if buffer.is_empty():
        return OperatorResult()

    line, col = args.cursor
    if args.command is NormalCommand.DELETE_CHAR:
        length = buffer.line_length(line)
        if length == 0:
            return OperatorResult()
        count = min(args.count or 1, length - col)
        buffer.erase(args.cursor, count)
        remaining = buffer.line_length(line)
        cursor = None
        if remaining == 0:
            cursor = CursorPosition(line, 0)
        elif col >= remaining:
            cursor = CursorPosition(line, col - 1)
        return OperatorResult(cursor=cursor, buffer_changed=True)

    if args.command is InsertCommand.BACKSPACE:
        if col > 0:
            target = CursorPosition(line, col - 1)
            buffer.erase(target, 1)
            return OperatorResult(cursor=target, buffer_changed=True)
        if line > 0:
            target = CursorPosition(line - 1, buffer.line_length(line - 1))
            buffer.join_lines(target.line, 2)
            return OperatorResult(cursor=target, buffer_changed=True)
        return OperatorResult()

    raise DispatchError("delete_chars", args.command, args.key)


def break_line(args: OperatorArgs) -> OperatorResult:
    args.buffer.break_line(args.cursor)
    return OperatorResult(
        cursor=CursorPosition(args.cursor.line + 1, 0), buffer_changed=True
    )


def replace_chars(args: OperatorArgs) -> OperatorResult:
    """``r`` waits for one more key, then overwrites ``count`` characters.

    The count is clamped to the characters left on the line; the cursor
    stays where it is.
    """

    buffer = args.buffer
    if buffer.is_empty():
        return OperatorResult()

    if args.pending is not PendingOperator.REPLACE:
        if args.command is not NormalCommand.REPLACE_CHAR:
            raise DispatchError("replace_chars", args.command, args.key)
        return OperatorResult(
            pending=PendingOperator.REPLACE, count=args.count, status="pending"
        )

    if not args.key.printable:
        return OperatorResult(status="cancelled")

    assert args.key.char is not None
    count = min(args.count or 1, buffer.line_length(args.cursor.line) - args.cursor.col)
    if count < 1:
        return OperatorResult()
    buffer.erase(args.cursor, count)
    buffer.insert(args.cursor, args.key.char, count)
    return OperatorResult(buffer_changed=True)


def put_lines(args: OperatorArgs) -> OperatorResult:
    """``p`` puts below the cursor line, ``P`` above it."""

    if args.register.is_empty():
        return OperatorResult()

    line = args.cursor.line
    if args.command is NormalCommand.PUT_AFTER:
        args.buffer.put_from(args.register, line)
        return OperatorResult(cursor=CursorPosition(line + 1, 0), buffer_changed=True)
    if args.command is NormalCommand.PUT_BEFORE:
        args.buffer.put_from(args.register, line - 1)
        return OperatorResult(cursor=CursorPosition(line, 0), buffer_changed=True)
    raise DispatchError("put_lines", args.command, args.key)


def redraw(args: OperatorArgs) -> OperatorResult:
    del args
    return OperatorResult(repaint=True)


def insert_char(args: OperatorArgs) -> OperatorResult:
    """Insert-mode fallback: type the printable character and advance."""

    key = args.key
    if not key.printable:
        return OperatorResult(consumed=False, status="ignored")
    assert key.char is not None
    args.buffer.insert(args.cursor, key.char)
    return OperatorResult(
        cursor=args.cursor.with_col(args.cursor.col + 1), buffer_changed=True
    )


def ignore_key(args: OperatorArgs) -> OperatorResult:
    """Normal-mode fallback for keys with no binding."""

    del args
    return OperatorResult(consumed=False, status="ignored")


__all__ = [
    "handle_digit",
    "delete_chars",
    "break_line",
    "replace_chars",
    "put_lines",
    "redraw",
    "insert_char",
    "ignore_key",
]
