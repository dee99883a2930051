"""Cursor and window position value types."""

from __future__ import annotations

from typing import NamedTuple


class CursorPosition(NamedTuple):
    """Zero-based (line, column) position inside a ``TextBuffer``."""

    line: int = 0
    col: int = 0

    def with_col(self, col: int) -> "CursorPosition":
        return self._replace(col=col)


class WindowInfo(NamedTuple):
    """First visible buffer line and, when not wrapping, first visible column."""

    top_line: int = 0
    left_col: int = 0


ORIGIN = CursorPosition(0, 0)

__all__ = ["CursorPosition", "WindowInfo", "ORIGIN"]
