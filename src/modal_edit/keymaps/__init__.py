"""Key model, command identities and the default keymap."""

from modal_edit.runtime import telemetry

from .models import (
    INTERRUPT,
    Binding,
    Command,
    CommandLineCommand,
    InsertCommand,
    Key,
    KeySequence,
    NamedKey,
    NormalCommand,
    parse_key,
)
from .registry import Keymap, KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import load_default_keymaps


def default_keymap() -> Keymap:
    """Build and freeze a registry seeded with the default bindings."""

    registry = KeymapRegistry(logger_name="modal_edit.keymaps")
    load_default_keymaps(registry)
    stats = registry.stats()
    telemetry.record_event(
        "keymaps.loaded",
        level="debug",
        data={"bindings": stats.binding_count, "modes": ",".join(stats.modes)},
        logger_name="modal_edit.keymaps",
    )
    return registry.freeze()


__all__ = [
    "Binding",
    "Command",
    "CommandLineCommand",
    "INTERRUPT",
    "InsertCommand",
    "Key",
    "KeySequence",
    "Keymap",
    "KeymapConflictError",
    "KeymapRegistry",
    "NamedKey",
    "NormalCommand",
    "RegistryStats",
    "default_keymap",
    "load_default_keymaps",
    "parse_key",
]
