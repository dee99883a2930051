"""Ex-style command-line parsing and forward search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from modal_edit.buffer import CursorPosition, TextBuffer


class CommandError(RuntimeError):
    """A command line the user typed cannot be executed as written."""


class SearchMiss(LookupError):
    """The needle does not occur anywhere in the buffer."""

    def __init__(self, needle: str):
        super().__init__(f"Search string not found: {needle}")
        self.needle = needle


class Verb(Enum):
    """Known commands with the shortest abbreviation each accepts."""

    FILE = ("f", "file")
    QUIT = ("q", "quit")
    EDIT = ("e", "edit")
    WRITE = ("w", "write")
    READ = ("r", "read")

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def full(self) -> str:
        return self.value[1]


def command_matches(token: str, required_prefix: str, verb: str) -> bool:
    """``w``, ``wr`` and ``write`` all match ``write``; ``wx`` does not."""

    return token.startswith(required_prefix) and verb.startswith(token)


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    verb: Verb
    force: bool = False
    argument: Optional[str] = None


def parse_command_line(text: str) -> Optional[ParsedCommand]:
    """Parse ``:verb[!] [argument]``.

    Returns ``None`` for a bare ``:``. Raises ``CommandError`` with the
    user-facing reason otherwise.
    """

    body = text[1:] if text.startswith(":") else text
    if not body:
        return None

    token, _, rest = body.partition(" ")
    force = token.endswith("!")
    if force:
        token = token[:-1]

    rest = rest.strip(" ")
    if " " in rest:
        raise CommandError("Trailing characters")
    argument = rest or None

    verb = next(
        (candidate for candidate in Verb if command_matches(token, candidate.prefix, candidate.full)),
        None,
    )
    if verb is None:
        raise CommandError(f"Not an editor command: {token}")

    if verb is Verb.FILE and (force or argument is not None):
        raise CommandError("Trailing characters")
    if verb is Verb.QUIT and argument is not None:
        raise CommandError("Trailing characters")
    if verb is Verb.READ and force:
        raise CommandError("No ! allowed")

    return ParsedCommand(verb=verb, force=force, argument=argument)


@dataclass(frozen=True, slots=True)
class SearchHit:
    position: CursorPosition
    wrapped: bool = False


def find_forward(buffer: TextBuffer, cursor: CursorPosition, needle: str) -> SearchHit:
    """Literal substring search starting just after ``cursor``.

    Scans to the end of the buffer, then wraps to line 0 and scans up to and
    including the cursor line.
    """

    for line in range(cursor.line, buffer.num_lines()):
        start = cursor.col + 1 if line == cursor.line else 0
        col = buffer.get_line(line).find(needle, start)
        if col != -1:
            return SearchHit(CursorPosition(line, col))

    for line in range(0, min(cursor.line + 1, buffer.num_lines())):
        col = buffer.get_line(line).find(needle)
        if col != -1:
            return SearchHit(CursorPosition(line, col), wrapped=True)

    raise SearchMiss(needle)


__all__ = [
    "CommandError",
    "ParsedCommand",
    "SearchHit",
    "SearchMiss",
    "Verb",
    "command_matches",
    "find_forward",
    "parse_command_line",
]
