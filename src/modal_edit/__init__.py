"""Editing core of a modal, vim-style terminal text editor."""

from .editor import Editor

__all__ = [
    "Editor",
    "actions",
    "adapters",
    "buffer",
    "host",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
