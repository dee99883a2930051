"""Insert mode: bound keys edit or move, everything printable is typed."""

from __future__ import annotations

from modal_edit.keymaps import Keymap
from modal_edit.keymaps.models import Key

from .base_mode import EditorMode, Mode, ModeContext, OperatorResult
from .operator_pipeline import build_insert_dispatcher


class InsertMode(Mode):
    name = EditorMode.INSERT

    def __init__(self, context: ModeContext, *, keymap: Keymap) -> None:
        super().__init__(context)
        self.dispatcher = build_insert_dispatcher(keymap)

    def handle_key(self, key: Key) -> OperatorResult:
        command = self.dispatcher.resolve(key)
        return self.dispatcher.dispatch(self.snapshot(key, command))


__all__ = ["InsertMode"]
