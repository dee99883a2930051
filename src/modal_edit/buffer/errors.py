"""Exceptions raised by the buffer layer."""

from __future__ import annotations

from typing import Optional

from .state import CursorPosition


class BufferContractError(RuntimeError):
    """A buffer precondition was violated by the caller.

    These indicate a bug in an operator or the editor, not a user mistake, and
    are never rendered as status-line errors.
    """

    def __init__(self, message: str, *, cursor: Optional[CursorPosition] = None):
        super().__init__(message)
        self.cursor = cursor


__all__ = ["BufferContractError"]
