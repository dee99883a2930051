"""Keys, key sequences, command identities and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Union


class NamedKey(str, Enum):
    """Non-printable keys the keyboard collaborator can report."""

    RIGHT = "Right"
    LEFT = "Left"
    UP = "Up"
    DOWN = "Down"
    ENTER = "Enter"
    ESCAPE = "Esc"
    BACKSPACE = "BS"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"


@dataclass(frozen=True, slots=True)
class Key:
    """A single key press: a character, a named key, or a control chord."""

    char: Optional[str] = None
    named: Optional[NamedKey] = None
    ctrl: bool = False

    def __post_init__(self) -> None:
        if (self.char is None) == (self.named is None):
            raise ValueError("Key needs exactly one of `char` or `named`")
        if self.char is not None and len(self.char) != 1:
            raise ValueError(f"Key char must be a single character, got {self.char!r}")
        if self.ctrl and self.named is not None:
            raise ValueError("ctrl chords are only supported on characters")

    @classmethod
    def of(cls, char: str) -> "Key":
        return cls(char=char)

    @classmethod
    def control(cls, char: str) -> "Key":
        return cls(char=char.lower(), ctrl=True)

    @property
    def printable(self) -> bool:
        return self.char is not None and not self.ctrl and self.char.isprintable()

    @property
    def token(self) -> str:
        if self.named is not None:
            return f"<{self.named.value}>"
        assert self.char is not None
        if self.ctrl:
            return f"<C-{self.char}>"
        if self.char == "<":
            return "<lt>"
        return self.char


# Reserved interrupt key: ends the main loop unconditionally.
INTERRUPT = Key.control("c")

_ALIASES: dict[str, Key] = {
    "esc": Key(named=NamedKey.ESCAPE),
    "escape": Key(named=NamedKey.ESCAPE),
    "cr": Key(named=NamedKey.ENTER),
    "enter": Key(named=NamedKey.ENTER),
    "return": Key(named=NamedKey.ENTER),
    "bs": Key(named=NamedKey.BACKSPACE),
    "backspace": Key(named=NamedKey.BACKSPACE),
    "left": Key(named=NamedKey.LEFT),
    "right": Key(named=NamedKey.RIGHT),
    "up": Key(named=NamedKey.UP),
    "down": Key(named=NamedKey.DOWN),
    "home": Key(named=NamedKey.HOME),
    "end": Key(named=NamedKey.END),
    "pageup": Key(named=NamedKey.PAGE_UP),
    "pagedown": Key(named=NamedKey.PAGE_DOWN),
    "space": Key.of(" "),
    "lt": Key.of("<"),
}


def parse_key(token: str) -> Key:
    """Parse one token such as ``x``, ``<Esc>`` or ``<C-c>``."""

    if len(token) == 1:
        return Key.of(token)
    if not (token.startswith("<") and token.endswith(">")):
        raise ValueError(f"Unrecognised key token {token!r}")
    inner = token[1:-1]
    if inner.lower().startswith("c-") and len(inner) == 3:
        return Key.control(inner[2])
    try:
        return _ALIASES[inner.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown key name {token!r}") from exc


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of keys, mostly for scripting the editor."""

    keys: Tuple[Key, ...]

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(key.token for key in self.keys)

    @classmethod
    def from_text(cls, text: str) -> "KeySequence":
        """``"3dd"`` is three keys; ``"ihi<Esc>"`` ends with Escape."""

        keys: list[Key] = []
        idx = 0
        while idx < len(text):
            if text[idx] == "<":
                end = text.find(">", idx)
                if end > idx + 1:
                    keys.append(parse_key(text[idx : end + 1]))
                    idx = end + 1
                    continue
            keys.append(Key.of(text[idx]))
            idx += 1
        return cls(tuple(keys))


class NormalCommand(Enum):
    """Every command reachable from Normal mode."""

    COUNT_DIGIT = "count_digit"
    RIGHT = "right"
    LEFT = "left"
    LINE_END = "line_end"
    GOTO_LINE = "goto_line"
    WINDOW_TOP = "window_top"
    WINDOW_BOTTOM = "window_bottom"
    BUFFER_TOP = "buffer_top"
    DOWN = "down"
    UP = "up"
    NEXT_LINE_START = "next_line_start"
    PREV_LINE_START = "prev_line_start"
    LINE_START = "line_start"
    DELETE_CHAR = "delete_char"
    REPLACE_CHAR = "replace_char"
    DELETE_OPERATOR = "delete_operator"
    YANK_OPERATOR = "yank_operator"
    PUT_AFTER = "put_after"
    PUT_BEFORE = "put_before"
    INSERT = "insert"
    APPEND = "append"
    OPEN_LINE = "open_line"
    COMMAND_LINE = "command_line"
    SEARCH = "search"
    REDRAW = "redraw"


class InsertCommand(Enum):
    """Keys Insert mode treats as commands rather than text."""

    RIGHT = "right"
    LEFT = "left"
    DOWN = "down"
    UP = "up"
    LINE_END = "line_end"
    LINE_START = "line_start"
    LEAVE = "leave"
    BACKSPACE = "backspace"
    BREAK_LINE = "break_line"


class CommandLineCommand(Enum):
    """Editing keys of the command line."""

    CANCEL = "cancel"
    BACKSPACE = "backspace"
    SUBMIT = "submit"


Command = Union[NormalCommand, InsertCommand, CommandLineCommand]


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key with a command in one mode."""

    id: str
    mode: str
    key: Key
    command: Command
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")


__all__ = [
    "NamedKey",
    "Key",
    "INTERRUPT",
    "parse_key",
    "KeySequence",
    "NormalCommand",
    "InsertCommand",
    "CommandLineCommand",
    "Command",
    "Binding",
]
