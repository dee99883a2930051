"""Mode manager coordinating the Normal, Insert and Command pipelines."""

from __future__ import annotations

from typing import Dict, Optional, Type

from modal_edit.keymaps import Keymap, default_keymap
from modal_edit.keymaps.models import Key
from modal_edit.runtime import telemetry

from .base_mode import EditorMode, Mode, ModeContext, OperatorResult
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap: Keymap | None = None,
        register_defaults: bool = True,
    ) -> None:
        self.context = context
        self.keymap = keymap or default_keymap()
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        if register_defaults:
            for mode_cls in (NormalMode, InsertMode, CommandMode):
                self.register_mode(mode_cls, keymap=self.keymap)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def current(self) -> EditorMode:
        if self._active is None:
            raise RuntimeError("No active mode registered")
        return self._active

    def get(self, name: EditorMode) -> Mode:
        try:
            return self._modes[name]
        except KeyError as exc:
            raise KeyError(f"Unknown mode '{name.value}'") from exc

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: EditorMode, **options: object) -> None:
        target = self.get(name)
        previous = self.active_mode
        if previous is target:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        target.on_enter(previous.name if previous else None, **options)
        telemetry.record_event(
            "mode.switch",
            data={
                "mode": name.value,
                "previous": previous.name.value if previous else "-",
            },
        )
        self.context.bus.emit("mode.switch", name)

    def handle_key(self, key: Key) -> OperatorResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.token, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: OperatorResult) -> OperatorResult:
        if result.switch_to is not None:
            options: Dict[str, object] = {}
            if result.command_prefix is not None:
                options["prefix"] = result.command_prefix
            self.switch_mode(result.switch_to, **options)
        return result


__all__ = ["ModeManager"]
