"""Built-in key bindings for Normal, Insert and Command mode."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import (
    Binding,
    CommandLineCommand,
    InsertCommand,
    Key,
    NamedKey,
    NormalCommand,
)
from .registry import KeymapRegistry

_RIGHT = Key(named=NamedKey.RIGHT)
_LEFT = Key(named=NamedKey.LEFT)
_UP = Key(named=NamedKey.UP)
_DOWN = Key(named=NamedKey.DOWN)
_ENTER = Key(named=NamedKey.ENTER)
_ESCAPE = Key(named=NamedKey.ESCAPE)
_BACKSPACE = Key(named=NamedKey.BACKSPACE)
_HOME = Key(named=NamedKey.HOME)
_END = Key(named=NamedKey.END)


def _bind(
    mode: str, command, description: str, *keys: Key
) -> tuple[Binding, ...]:
    return tuple(
        Binding(
            id=f"{mode}.{command.value}.{key.token}",
            mode=mode,
            key=key,
            command=command,
            description=description,
        )
        for key in keys
    )


NORMAL_BINDINGS: tuple[Binding, ...] = (
    *_bind(
        "normal",
        NormalCommand.COUNT_DIGIT,
        "Accumulate a repeat count ('0' alone goes to column 0)",
        *(Key.of(digit) for digit in "0123456789"),
    ),
    *_bind("normal", NormalCommand.RIGHT, "Move right, wrapping lines", Key.of(" "), _RIGHT),
    *_bind("normal", NormalCommand.LEFT, "Move left, wrapping lines", _BACKSPACE, _LEFT),
    *_bind("normal", NormalCommand.LINE_END, "Go to end of line", Key.of("$"), _END),
    *_bind("normal", NormalCommand.GOTO_LINE, "Go to line N (default last)", Key.of("g")),
    *_bind("normal", NormalCommand.WINDOW_TOP, "Go to top of window", Key.of("h")),
    *_bind("normal", NormalCommand.WINDOW_BOTTOM, "Go to bottom of window", Key.of("l")),
    *_bind("normal", NormalCommand.BUFFER_TOP, "Go to first line", Key.of("b")),
    *_bind("normal", NormalCommand.DOWN, "Move down N lines", _DOWN),
    *_bind("normal", NormalCommand.UP, "Move up N lines", _UP),
    *_bind("normal", NormalCommand.NEXT_LINE_START, "Start of Nth next line", _ENTER),
    *_bind("normal", NormalCommand.PREV_LINE_START, "Start of Nth previous line", Key.of("-")),
    *_bind("normal", NormalCommand.LINE_START, "Go to column 0", _HOME),
    *_bind("normal", NormalCommand.DELETE_CHAR, "Delete characters", Key.of("x")),
    *_bind("normal", NormalCommand.REPLACE_CHAR, "Replace characters", Key.of("r")),
    *_bind("normal", NormalCommand.DELETE_OPERATOR, "dd delete / dy cut", Key.of("d")),
    *_bind("normal", NormalCommand.YANK_OPERATOR, "yy yank / yd cut", Key.of("y")),
    *_bind("normal", NormalCommand.PUT_AFTER, "Put lines below", Key.of("p")),
    *_bind("normal", NormalCommand.PUT_BEFORE, "Put lines above", Key.of("P")),
    *_bind("normal", NormalCommand.INSERT, "Insert before cursor", Key.of("i")),
    *_bind("normal", NormalCommand.APPEND, "Append after cursor", Key.of("a")),
    *_bind("normal", NormalCommand.OPEN_LINE, "Open a line below", Key.of("o")),
    *_bind("normal", NormalCommand.COMMAND_LINE, "Enter command line", Key.of(":"), Key.of(";")),
    *_bind("normal", NormalCommand.SEARCH, "Search forward", Key.of("/")),
    *_bind("normal", NormalCommand.REDRAW, "Redraw the screen", Key.of("z")),
)

INSERT_BINDINGS: tuple[Binding, ...] = (
    *_bind("insert", InsertCommand.RIGHT, "Move right", _RIGHT),
    *_bind("insert", InsertCommand.LEFT, "Move left", _LEFT),
    *_bind("insert", InsertCommand.DOWN, "Move down", _DOWN),
    *_bind("insert", InsertCommand.UP, "Move up", _UP),
    *_bind("insert", InsertCommand.LINE_END, "Go to end of line", _END),
    *_bind("insert", InsertCommand.LINE_START, "Go to column 0", _HOME),
    *_bind("insert", InsertCommand.LEAVE, "Return to Normal mode", _ESCAPE),
    *_bind("insert", InsertCommand.BACKSPACE, "Delete before cursor", _BACKSPACE),
    *_bind("insert", InsertCommand.BREAK_LINE, "Split the line", _ENTER),
)

COMMAND_BINDINGS: tuple[Binding, ...] = (
    *_bind("command", CommandLineCommand.CANCEL, "Abandon the command line", _ESCAPE),
    *_bind("command", CommandLineCommand.BACKSPACE, "Delete last character", _BACKSPACE),
    *_bind("command", CommandLineCommand.SUBMIT, "Execute the command line", _ENTER),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = NORMAL_BINDINGS + INSERT_BINDINGS + COMMAND_BINDINGS


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in bindings, then ``extra_bindings`` on top."""

    excluded = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = [
    "load_default_keymaps",
    "DEFAULT_BINDINGS",
    "NORMAL_BINDINGS",
    "INSERT_BINDINGS",
    "COMMAND_BINDINGS",
]
