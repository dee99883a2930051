"""Mode-changing operators."""

from __future__ import annotations

from modal_edit.buffer import CursorPosition
from modal_edit.keymaps.models import NormalCommand
from modal_edit.modes.base_mode import (
    DispatchError,
    EditorMode,
    OperatorArgs,
    OperatorResult,
)

_COMMAND_PREFIXES = {
    NormalCommand.COMMAND_LINE: ":",
    NormalCommand.SEARCH: "/",
}


def start_insert(args: OperatorArgs) -> OperatorResult:
    """``i`` keeps the cursor, ``a`` steps past it, ``o`` opens a line below."""

    command = args.command
    if command is NormalCommand.INSERT:
        return OperatorResult(switch_to=EditorMode.INSERT)

    if command is NormalCommand.APPEND:
        cursor = None
        if args.buffer.line_length(args.cursor.line) > 0:
            cursor = args.cursor.with_col(args.cursor.col + 1)
        return OperatorResult(cursor=cursor, switch_to=EditorMode.INSERT)

    if command is NormalCommand.OPEN_LINE:
        args.buffer.insert_line(args.cursor.line)
        return OperatorResult(
            cursor=CursorPosition(args.cursor.line + 1, 0),
            buffer_changed=True,
            switch_to=EditorMode.INSERT,
        )

    raise DispatchError("start_insert", command, args.key)


def start_command(args: OperatorArgs) -> OperatorResult:
    try:
        prefix = _COMMAND_PREFIXES[args.command]  # type: ignore[index]
    except KeyError as exc:
        raise DispatchError("start_command", args.command, args.key) from exc
    return OperatorResult(switch_to=EditorMode.COMMAND, command_prefix=prefix)


def start_normal(args: OperatorArgs) -> OperatorResult:
    """Leave Insert mode, stepping one column left."""

    return OperatorResult(
        cursor=args.cursor.with_col(max(args.cursor.col - 1, 0)),
        switch_to=EditorMode.NORMAL,
    )


__all__ = ["start_insert", "start_command", "start_normal"]
