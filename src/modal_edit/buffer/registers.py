"""The single unnamed register used by yank, cut and put."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(slots=True)
class Register:
    """Holds the most recently yanked or cut line range."""

    lines: Tuple[str, ...] = ()

    def replace(self, lines: Iterable[str]) -> None:
        self.lines = tuple(lines)

    def is_empty(self) -> bool:
        return not self.lines


__all__ = ["Register"]
