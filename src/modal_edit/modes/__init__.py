"""Mode manager, operator dispatch, and the three editing modes."""

from .base_mode import (
    DispatchError,
    EditorMode,
    Mode,
    ModeBus,
    ModeContext,
    OperatorArgs,
    OperatorResult,
    PendingOperator,
)
from .operator_pipeline import (
    OperatorDispatcher,
    build_insert_dispatcher,
    build_normal_dispatcher,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandLine, CommandMode
from .mode_manager import ModeManager

__all__ = [
    "DispatchError",
    "EditorMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "OperatorArgs",
    "OperatorResult",
    "PendingOperator",
    "OperatorDispatcher",
    "build_insert_dispatcher",
    "build_normal_dispatcher",
    "NormalMode",
    "InsertMode",
    "CommandLine",
    "CommandMode",
    "ModeManager",
]
