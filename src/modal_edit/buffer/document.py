"""Line-oriented text storage owned by the editor."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Sequence

from modal_edit.host.filesystem import Filesystem, LocalFilesystem
from modal_edit.runtime import telemetry

from .errors import BufferContractError
from .registers import Register
from .state import ORIGIN, CursorPosition


class TextBuffer:
    """Ordered list of lines with the primitive edits operators are built from.

    A buffer may hold zero lines, which is not the same as holding one empty
    line. Operations that can grow an empty buffer (``insert``,
    ``insert_line``, ``break_line``, ``put_from``) only accept the origin in
    that state and create the first line implicitly.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None, *, name: str = "buffer"):
        self.name = name
        self._lines: List[str] = list(lines) if lines is not None else []
        self.version = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "buffer") -> "TextBuffer":
        return cls(text.splitlines(), name=name)

    # -- accessors -----------------------------------------------------

    def num_lines(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def line_length(self, idx: int) -> int:
        if self.is_empty():
            return 0
        return len(self.get_line(idx))

    def get_line(self, idx: int) -> str:
        self._check_line(idx)
        return self._lines[idx]

    def lines(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    # -- character edits ---------------------------------------------

    def erase(self, pos: CursorPosition, count: int) -> None:
        self._check_line(pos.line, cursor=pos)
        line = self._lines[pos.line]
        if count < 1 or pos.col < 0 or pos.col + count > len(line):
            raise BufferContractError(
                f"cannot erase {count} chars at column {pos.col} of a "
                f"{len(line)}-char line",
                cursor=pos,
            )
        with self._mutation("erase", pos=pos, count=count):
            self._lines[pos.line] = line[: pos.col] + line[pos.col + count :]

    def insert(self, pos: CursorPosition, ch: str, count: int = 1) -> None:
        if len(ch) != 1 or count < 1:
            raise BufferContractError(
                f"insert needs one character and a positive count, got {ch!r} x {count}",
                cursor=pos,
            )
        with self._mutation("insert", pos=pos, count=count):
            self._grow_if_empty(pos)
            self._check_column(pos)
            line = self._lines[pos.line]
            self._lines[pos.line] = line[: pos.col] + ch * count + line[pos.col :]

    # -- line edits ---------------------------------------------------

    def insert_line(self, line: int) -> None:
        """Insert an empty line immediately after ``line``."""

        with self._mutation("insert_line", line=line):
            self._grow_if_empty(CursorPosition(line, 0))
            self._check_line(line)
            self._lines.insert(line + 1, "")

    def break_line(self, pos: CursorPosition) -> None:
        with self._mutation("break_line", pos=pos):
            self._grow_if_empty(pos)
            self._check_column(pos)
            text = self._lines[pos.line]
            self._lines[pos.line] = text[: pos.col]
            self._lines.insert(pos.line + 1, text[pos.col :])

    def join_lines(self, line: int, count: int) -> None:
        """Concatenate ``count`` lines starting at ``line`` into one."""

        if count <= 1:
            return
        self._check_line(line)
        if line + count > len(self._lines):
            raise BufferContractError(
                f"cannot join {count} lines from line {line} of {len(self._lines)}"
            )
        with self._mutation("join_lines", line=line, count=count):
            self._lines[line : line + count] = ["".join(self._lines[line : line + count])]

    def delete_lines(self, line: int, count: int) -> int:
        """Delete up to ``count`` lines from ``line``; returns how many went."""

        if count < 1:
            return 0
        self._check_line(line)
        count = min(count, len(self._lines) - line)
        with self._mutation("delete_lines", line=line, count=count):
            del self._lines[line : line + count]
        return count

    # -- register transfer -------------------------------------------

    def yank_to(self, register: Register, line: int, count: int) -> int:
        self._check_line(line)
        count = min(count, len(self._lines) - line)
        register.replace(self._lines[line : line + count])
        return count

    def put_from(self, register: Register, line: int) -> None:
        """Insert the register's lines after ``line`` (``-1`` puts at the top)."""

        if register.is_empty():
            return
        with self._mutation("put_from", line=line, count=len(register.lines)):
            if self.is_empty() and line == -1:
                self._lines.extend(register.lines)
                return
            self._grow_if_empty(CursorPosition(line, 0))
            if line != -1:
                self._check_line(line)
            self._lines[line + 1 : line + 1] = register.lines

    # -- file transfer ------------------------------------------------

    def read(
        self,
        path: str,
        at_line: Optional[int] = None,
        *,
        filesystem: Optional[Filesystem] = None,
    ) -> int:
        """Load ``path``; replaces everything unless ``at_line`` is given.

        With ``at_line`` the file's lines are inserted after that line and the
        existing content is kept. Returns the number of lines read.
        """

        fs = filesystem or LocalFilesystem()
        incoming = fs.read_lines(path)
        with self._mutation("read", path=path, lines=len(incoming)):
            if at_line is None:
                self._lines = list(incoming)
            elif self.is_empty():
                self._lines.extend(incoming)
            else:
                self._check_line(at_line)
                self._lines[at_line + 1 : at_line + 1] = incoming
        return len(incoming)

    def write(self, path: str, *, filesystem: Optional[Filesystem] = None) -> int:
        fs = filesystem or LocalFilesystem()
        with telemetry.span(
            "buffer::write",
            component="buffer",
            metadata={"buffer": self.name, "path": path},
        ):
            fs.write_lines(path, self.lines())
        return len(self._lines)

    # -- internals ----------------------------------------------------

    @contextmanager
    def _mutation(self, label: str, **metadata: object) -> Iterator[None]:
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, **metadata},
        ):
            yield
            self.version += 1

    def _grow_if_empty(self, pos: CursorPosition) -> None:
        if not self.is_empty():
            return
        if pos != ORIGIN:
            raise BufferContractError(
                "an empty buffer can only be edited at the origin", cursor=pos
            )
        self._lines.append("")

    def _check_line(self, idx: int, *, cursor: Optional[CursorPosition] = None) -> None:
        if idx < 0 or idx >= len(self._lines):
            raise BufferContractError(
                f"line {idx} out of range for {len(self._lines)} lines", cursor=cursor
            )

    def _check_column(self, pos: CursorPosition) -> None:
        self._check_line(pos.line, cursor=pos)
        limit = len(self._lines[pos.line])
        if pos.col < 0 or pos.col > limit:
            raise BufferContractError("column out of range", cursor=pos)


__all__ = ["TextBuffer"]
