"""Visible window over the buffer, kept consistent with the cursor."""

from __future__ import annotations

from typing import Tuple

from modal_edit.buffer import CursorPosition, TextBuffer, WindowInfo
from modal_edit.runtime.settings import HSCROLL_STEP, EditorSettings

ScreenPoint = Tuple[int, int]  # (x, y)


class Viewport:
    """Top line, left column and wrap mode of the editing window."""

    def __init__(
        self,
        *,
        width: int,
        height: int,
        wrap: bool = False,
        hscroll_step: int = HSCROLL_STEP,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("viewport dimensions must be positive")
        self.width = width
        self.height = height
        self.wrap = wrap
        self.hscroll_step = hscroll_step
        self.window = WindowInfo()

    @classmethod
    def from_settings(cls, settings: EditorSettings) -> "Viewport":
        return cls(
            width=settings.width,
            height=settings.height,
            wrap=settings.wrap,
            hscroll_step=settings.hscroll_step,
        )

    @property
    def top_line(self) -> int:
        return self.window.top_line

    @property
    def left_col(self) -> int:
        return self.window.left_col

    def reset(self) -> None:
        self.window = WindowInfo()

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("viewport dimensions must be positive")
        self.width = width
        self.height = height

    def line_virtual_height(self, text: str) -> int:
        """Screen rows a buffer line occupies."""

        if not self.wrap:
            return 1
        return (len(text) + 1) // self.width + 1

    def screen_position(self, buffer: TextBuffer, cursor: CursorPosition) -> ScreenPoint:
        y = 0
        for idx in range(self.window.top_line, cursor.line):
            y += self.line_virtual_height(buffer.get_line(idx))
        if self.wrap:
            return cursor.col % self.width, y + cursor.col // self.width
        return cursor.col - self.window.left_col, y

    def adjust(self, buffer: TextBuffer, cursor: CursorPosition) -> WindowInfo:
        """Scroll just enough to bring ``cursor`` on screen.

        With wrapping on, scrolling stops once the cursor line is the top
        line: a line wrapping to more rows than ``height`` leaves a cursor
        on its later rows below the window.
        """

        top, left = self.window
        if top > cursor.line:
            top = cursor.line
        self.window = WindowInfo(top, left)

        # A wrapped line taller than the window cannot be scrolled past itself.
        while top < cursor.line and self.screen_position(buffer, cursor)[1] >= self.height:
            top += 1
            self.window = WindowInfo(top, left)

        if self.wrap:
            left = 0
        else:
            step = min(self.hscroll_step, self.width)
            while cursor.col - left >= self.width:
                left += step
            while left > cursor.col:
                left -= step
            left = max(0, left)
        self.window = WindowInfo(top, left)
        return self.window


__all__ = ["Viewport", "ScreenPoint"]
