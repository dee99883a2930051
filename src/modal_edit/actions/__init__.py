"""Operator functions the dispatch tables are built from."""

from .core import start_command, start_insert, start_normal
from .edits import (
    break_line,
    delete_chars,
    handle_digit,
    ignore_key,
    insert_char,
    put_lines,
    redraw,
    replace_chars,
)
from .motions import move_cursor, move_to_start_of_line, scroll_buffer
from .operators import delete_lines, do_pending_operator, yank_lines
from .command import (
    CommandError,
    ParsedCommand,
    SearchHit,
    SearchMiss,
    Verb,
    command_matches,
    find_forward,
    parse_command_line,
)

__all__ = [
    "start_command",
    "start_insert",
    "start_normal",
    "break_line",
    "delete_chars",
    "handle_digit",
    "ignore_key",
    "insert_char",
    "put_lines",
    "redraw",
    "replace_chars",
    "move_cursor",
    "move_to_start_of_line",
    "scroll_buffer",
    "delete_lines",
    "do_pending_operator",
    "yank_lines",
    "CommandError",
    "ParsedCommand",
    "SearchHit",
    "SearchMiss",
    "Verb",
    "command_matches",
    "find_forward",
    "parse_command_line",
]
