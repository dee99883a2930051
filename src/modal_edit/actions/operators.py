"""Two-key line operators: ``dd``, ``dy``, ``yy`` and ``yd``."""

from __future__ import annotations

from dataclasses import replace

from modal_edit.buffer import CursorPosition
from modal_edit.keymaps.models import NormalCommand
from modal_edit.modes.base_mode import (
    DispatchError,
    OperatorArgs,
    OperatorResult,
    PendingOperator,
)

_OPERATOR_FOR_COMMAND = {
    NormalCommand.DELETE_OPERATOR: PendingOperator.DELETE,
    NormalCommand.YANK_OPERATOR: PendingOperator.YANK,
}


def do_pending_operator(args: OperatorArgs) -> OperatorResult:
    """First key stores the operator; the second key resolves it.

    The count typed before the first key survives until resolution.
    """

    operator = _OPERATOR_FOR_COMMAND.get(args.command)  # type: ignore[arg-type]
    if operator is None:
        raise DispatchError("do_pending_operator", args.command, args.key)

    if args.pending is PendingOperator.NONE:
        return OperatorResult(pending=operator, count=args.count, status="pending")
    if args.pending is PendingOperator.DELETE:
        return delete_lines(args)
    if args.pending is PendingOperator.YANK:
        return yank_lines(args)
    raise DispatchError("do_pending_operator", args.pending, args.key)


def delete_lines(args: OperatorArgs) -> OperatorResult:
    """``dd`` deletes, ``dy`` yanks into the register first."""

    buffer = args.buffer
    if buffer.is_empty():
        return OperatorResult()

    count = args.count or 1
    if args.command is NormalCommand.YANK_OPERATOR:
        buffer.yank_to(args.register, args.cursor.line, count)
    elif args.command is not NormalCommand.DELETE_OPERATOR:
        raise DispatchError("delete_lines", args.command, args.key)

    removed = buffer.delete_lines(args.cursor.line, count)

    line = min(args.cursor.line, max(0, buffer.num_lines() - 1))
    col = min(args.cursor.col, max(0, buffer.line_length(line) - 1))
    return OperatorResult(
        cursor=CursorPosition(line, col),
        buffer_changed=True,
        message=f"{removed} fewer lines",
    )


def yank_lines(args: OperatorArgs) -> OperatorResult:
    """``yy`` copies; ``yd`` behaves exactly like ``dy``."""

    buffer = args.buffer
    if buffer.is_empty():
        return OperatorResult()

    if args.command is NormalCommand.DELETE_OPERATOR:
        return delete_lines(replace(args, command=NormalCommand.YANK_OPERATOR))
    if args.command is not NormalCommand.YANK_OPERATOR:
        raise DispatchError("yank_lines", args.command, args.key)

    yanked = buffer.yank_to(args.register, args.cursor.line, args.count or 1)
    return OperatorResult(message=f"{yanked} lines yanked")


__all__ = ["do_pending_operator", "delete_lines", "yank_lines"]
