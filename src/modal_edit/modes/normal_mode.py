"""Normal mode: motions, counts and operator-pending commands."""

from __future__ import annotations

from typing import Optional

from modal_edit.keymaps import Keymap, NormalCommand
from modal_edit.keymaps.models import Key
from modal_edit.runtime import telemetry

from .base_mode import EditorMode, Mode, ModeContext, OperatorResult, PendingOperator
from .operator_pipeline import build_normal_dispatcher

# Keys that keep a pending ``d``/``y`` alive instead of cancelling it.
_CONTINUES_OPERATOR = {
    NormalCommand.DELETE_OPERATOR,
    NormalCommand.YANK_OPERATOR,
    NormalCommand.COUNT_DIGIT,
}


class NormalMode(Mode):
    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext, *, keymap: Keymap) -> None:
        super().__init__(context)
        self.dispatcher = build_normal_dispatcher(keymap)
        self.pending = PendingOperator.NONE
        self.count: Optional[int] = None

    def on_enter(self, previous: Optional[EditorMode], **options: object) -> None:
        del previous, options
        self.reset_pending()

    def on_exit(self, next_mode: Optional[EditorMode]) -> None:
        del next_mode
        self.reset_pending()

    def reset_pending(self) -> None:
        self.pending = PendingOperator.NONE
        self.count = None

    def handle_key(self, key: Key) -> OperatorResult:
        if self.pending is PendingOperator.REPLACE:
            args = self.snapshot(
                key,
                NormalCommand.REPLACE_CHAR,
                pending=self.pending,
                count=self.count,
            )
            return self._apply(self.dispatcher.dispatch(args))

        command = self.dispatcher.resolve(key)
        if self.pending is not PendingOperator.NONE and command not in _CONTINUES_OPERATOR:
            telemetry.record_event(
                "operator.cancel",
                level="debug",
                data={"pending": self.pending.value, "key": key.token},
                logger_name="modal_edit.modes.normal",
            )
            self.reset_pending()

        args = self.snapshot(key, command, pending=self.pending, count=self.count)
        return self._apply(self.dispatcher.dispatch(args))

    def _apply(self, result: OperatorResult) -> OperatorResult:
        self.pending = result.pending
        self.count = result.count
        return result


__all__ = ["NormalMode"]
