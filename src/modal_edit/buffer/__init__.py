"""Text buffer, register, and cursor value types."""

from .document import TextBuffer
from .errors import BufferContractError
from .registers import Register
from .state import ORIGIN, CursorPosition, WindowInfo
from .validation import clamp_cursor, ensure_cursor, last_valid_column

__all__ = [
    "TextBuffer",
    "Register",
    "CursorPosition",
    "WindowInfo",
    "ORIGIN",
    "BufferContractError",
    "clamp_cursor",
    "ensure_cursor",
    "last_valid_column",
]
