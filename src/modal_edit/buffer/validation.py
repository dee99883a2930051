"""Cursor validity rules shared by operators and the editor."""

from __future__ import annotations

from .document import TextBuffer
from .errors import BufferContractError
from .state import ORIGIN, CursorPosition


def last_valid_column(buffer: TextBuffer, line: int, *, append: bool) -> int:
    """Rightmost column the cursor may rest on.

    ``append`` is true in Insert mode, where the cursor may sit just past the
    last character. Otherwise it stops on the last character, and an empty
    line only allows column 0.
    """

    length = buffer.line_length(line)
    if length == 0:
        return 0
    return length if append else length - 1


def clamp_cursor(
    buffer: TextBuffer, cursor: CursorPosition, *, append: bool
) -> CursorPosition:
    if buffer.is_empty():
        return ORIGIN
    line = max(0, min(cursor.line, buffer.num_lines() - 1))
    col = max(0, min(cursor.col, last_valid_column(buffer, line, append=append)))
    return CursorPosition(line, col)


def ensure_cursor(buffer: TextBuffer, cursor: CursorPosition) -> CursorPosition:
    if buffer.is_empty():
        if cursor != ORIGIN:
            raise BufferContractError("Cursor must be at origin", cursor=cursor)
        return cursor
    if cursor.line < 0 or cursor.line >= buffer.num_lines():
        raise BufferContractError("Line out of range", cursor=cursor)
    if cursor.col < 0 or cursor.col > buffer.line_length(cursor.line):
        raise BufferContractError("Column out of range", cursor=cursor)
    return cursor


__all__ = ["last_valid_column", "clamp_cursor", "ensure_cursor"]
