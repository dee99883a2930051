"""Display collaborator and the pure frame renderer it consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from modal_edit.buffer import CursorPosition, TextBuffer
from modal_edit.runtime.settings import GUTTER_WIDTH
from modal_edit.viewport import Viewport

FILLER = "~"
INSERT_BANNER = "-- INSERT --"


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything a display needs to paint one screen.

    ``rows`` and ``gutter`` are parallel and exactly ``viewport.height`` long.
    ``cursor`` is relative to the text area, or to the status line when
    ``cursor_on_status`` is set.
    """

    rows: Tuple[str, ...]
    gutter: Tuple[str, ...]
    status: str
    count: Optional[str]
    cursor: Tuple[int, int]
    cursor_on_status: bool = False
    gutter_width: int = GUTTER_WIDTH

    def text(self) -> str:
        """Plain-text rendering, mainly for logs and tests."""

        lines = [
            f"{number:<{self.gutter_width}}{row}" for number, row in zip(self.gutter, self.rows)
        ]
        lines.append(self.status)
        return "\n".join(lines)


class Display(Protocol):
    def paint(self, frame: Frame) -> None:
        """Show ``frame``; must not touch editor state."""
        ...


class RecordingDisplay:
    """Keeps every painted frame; used for headless runs."""

    def __init__(self) -> None:
        self.frames: List[Frame] = []

    def paint(self, frame: Frame) -> None:
        self.frames.append(frame)

    @property
    def last(self) -> Optional[Frame]:
        return self.frames[-1] if self.frames else None


def _split_rows(viewport: Viewport, text: str) -> List[str]:
    if not viewport.wrap:
        left = viewport.left_col
        return [text[left : left + viewport.width]]
    width = viewport.width
    chunks = [text[start : start + width] for start in range(0, len(text), width)]
    height = viewport.line_virtual_height(text)
    chunks.extend([""] * (height - len(chunks)))
    return chunks


def render_frame(
    buffer: TextBuffer,
    viewport: Viewport,
    cursor: CursorPosition,
    *,
    insert_mode: bool = False,
    command_line: Optional[str] = None,
    command_cursor: int = 0,
    message: Optional[str] = None,
    count: Optional[int] = None,
    gutter_width: int = GUTTER_WIDTH,
) -> Frame:
    """Lay out the visible part of ``buffer``.

    Status priority: an open command line, then the last message, then the
    Insert banner.
    """

    rows: List[str] = []
    gutter: List[str] = []
    number_width = max(gutter_width - 1, 1)

    for idx in range(viewport.top_line, buffer.num_lines()):
        if len(rows) >= viewport.height:
            break
        for offset, chunk in enumerate(_split_rows(viewport, buffer.get_line(idx))):
            if len(rows) >= viewport.height:
                break
            rows.append(chunk)
            gutter.append(f"{idx + 1:>{number_width}}" if offset == 0 else "")

    while len(rows) < viewport.height:
        rows.append(FILLER)
        gutter.append("")

    if command_line is not None:
        status = command_line
        position = (command_cursor, 0)
        on_status = True
    else:
        status = message if message is not None else (INSERT_BANNER if insert_mode else "")
        position = viewport.screen_position(buffer, cursor)
        on_status = False

    return Frame(
        rows=tuple(rows),
        gutter=tuple(gutter),
        status=status,
        count=str(count) if count is not None else None,
        cursor=position,
        cursor_on_status=on_status,
        gutter_width=gutter_width,
    )


__all__ = ["Display", "Frame", "RecordingDisplay", "render_frame", "FILLER", "INSERT_BANNER"]
