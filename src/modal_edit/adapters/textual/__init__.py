"""Textual host: the controller is importable without Textual installed."""

from .controller import TextualUIHooks, TextualVimAdapter, key_from_textual

__all__ = ["TextualUIHooks", "TextualVimAdapter", "key_from_textual"]
