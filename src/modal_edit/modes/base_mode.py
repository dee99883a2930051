"""Base classes and the operator contract shared by every editor mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from modal_edit.buffer import CursorPosition, ORIGIN, Register, TextBuffer, WindowInfo
from modal_edit.keymaps.models import Command, Key
from modal_edit.runtime.settings import VISIBLE_HEIGHT_ESTIMATE, EditorSettings
from modal_edit.viewport import Viewport


class EditorMode(str, Enum):
    """The three modes; values double as keymap table names."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


class PendingOperator(Enum):
    """First key of a compound command that is still waiting for its second."""

    NONE = "none"
    DELETE = "d"
    YANK = "y"
    REPLACE = "r"


class DispatchError(RuntimeError):
    """A handler received a command it does not serve.

    This signals a mismatch between a keymap and its dispatch table, never a
    user mistake, so it is not rendered on the status line.
    """

    def __init__(self, handler: str, command: object, key: Optional[Key] = None):
        token = key.token if key is not None else "?"
        super().__init__(f"{handler} cannot serve {command!r} (key {token})")
        self.handler = handler
        self.command = command
        self.key = key


@dataclass(frozen=True, slots=True)
class OperatorArgs:
    """Snapshot handed to an operator function."""

    key: Key
    buffer: TextBuffer
    register: Register
    cursor: CursorPosition
    window: WindowInfo
    mode: EditorMode
    command: Optional[Command] = None
    pending: PendingOperator = PendingOperator.NONE
    count: Optional[int] = None
    visible_height: int = VISIBLE_HEIGHT_ESTIMATE


@dataclass(frozen=True, slots=True)
class OperatorResult:
    """What an operator did; the editor applies it after re-clamping."""

    consumed: bool = True
    cursor: Optional[CursorPosition] = None
    buffer_changed: bool = False
    switch_to: Optional[EditorMode] = None
    message: Optional[str] = None
    status: str = "ok"
    pending: PendingOperator = PendingOperator.NONE
    count: Optional[int] = None
    repaint: bool = False
    command_prefix: Optional[str] = None
    submitted: Optional[str] = None

    @property
    def cursor_moved(self) -> bool:
        return self.cursor is not None

    @property
    def mode_changed(self) -> bool:
        return self.switch_to is not None


OperatorFunction = Callable[[OperatorArgs], OperatorResult]


@dataclass(slots=True)
class ModeContext:
    """Mutable editor state every mode reads from."""

    buffer: TextBuffer
    register: Register
    viewport: Viewport
    bus: "ModeBus"
    settings: EditorSettings = field(default_factory=EditorSettings)
    cursor: CursorPosition = ORIGIN


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: EditorMode

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[EditorMode], **options: object
    ) -> None:  # pragma: no cover - default no-op
        del previous, options

    def on_exit(
        self, next_mode: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: Key
    ) -> OperatorResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def snapshot(
        self,
        key: Key,
        command: Optional[Command] = None,
        *,
        pending: PendingOperator = PendingOperator.NONE,
        count: Optional[int] = None,
    ) -> OperatorArgs:
        ctx = self.context
        return OperatorArgs(
            key=key,
            buffer=ctx.buffer,
            register=ctx.register,
            cursor=ctx.cursor,
            window=ctx.viewport.window,
            mode=self.name,
            command=command,
            pending=pending,
            count=count,
            visible_height=ctx.settings.visible_height_estimate,
        )


__all__ = [
    "DispatchError",
    "EditorMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "OperatorArgs",
    "OperatorFunction",
    "OperatorResult",
    "PendingOperator",
]
