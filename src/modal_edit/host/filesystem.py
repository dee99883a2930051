"""Filesystem collaborator used for opening, reading and writing files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Protocol


class Filesystem(Protocol):
    """Everything the editor needs from the filesystem.

    Every method may raise ``OSError``; the editor turns those into status
    messages instead of letting them escape.
    """

    def exists(self, path: str) -> bool:
        ...

    def is_regular_file(self, path: str) -> bool:
        ...

    def read_lines(self, path: str) -> List[str]:
        ...

    def write_lines(self, path: str, lines: Iterable[str]) -> None:
        ...

    def expand(self, path: str) -> str:
        ...


class LocalFilesystem:
    """``Filesystem`` backed by the local disk."""

    def __init__(self, *, encoding: str = "utf-8", errors: str = "surrogateescape"):
        self.encoding = encoding
        self.errors = errors

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_regular_file(self, path: str) -> bool:
        return Path(path).is_file()

    def read_lines(self, path: str) -> List[str]:
        """Split on line feeds only; a carriage return stays part of the line."""

        with open(path, encoding=self.encoding, errors=self.errors, newline="") as fh:
            lines = fh.read().split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def write_lines(self, path: str, lines: Iterable[str]) -> None:
        with open(path, "w", encoding=self.encoding, errors=self.errors, newline="") as fh:
            for line in lines:
                fh.write(line)
                fh.write("\n")

    def expand(self, path: str) -> str:
        return os.path.expandvars(os.path.expanduser(path))


__all__ = ["Filesystem", "LocalFilesystem"]
