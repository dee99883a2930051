"""Keymap registry that collects bindings and freezes them into tables."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from modal_edit.runtime.telemetry import span

from .models import Binding, Command, Key


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a key is bound twice in the same mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.key.token} in {binding.mode} mode"
        )
        self.binding = binding
        self.existing = existing


class Keymap:
    """Immutable per-mode ``Key -> command`` tables."""

    def __init__(self, tables: Mapping[str, Mapping[Key, Command]]) -> None:
        self._tables: Mapping[str, Mapping[Key, Command]] = MappingProxyType(
            {mode: MappingProxyType(dict(table)) for mode, table in tables.items()}
        )

    def lookup(self, mode: str, key: Key) -> Optional[Command]:
        return self._tables.get(mode, {}).get(key)

    def table(self, mode: str) -> Mapping[Key, Command]:
        return self._tables.get(mode, MappingProxyType({}))

    def commands(self, mode: str) -> frozenset[Command]:
        return frozenset(self.table(mode).values())


class KeymapRegistry:
    """Owns binding metadata until the editor freezes it."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._by_key: Dict[str, Dict[Key, str]] = {}
        self._logger_name = logger_name

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            mode_index = self._by_key.setdefault(binding.mode, {})
            existing_id = mode_index.get(binding.key)
            if existing_id is not None and existing_id != binding.id:
                existing = self._bindings[existing_id]
                if not replace:
                    handle.add_metadata("conflict", existing_id)
                    raise KeymapConflictError(binding, existing)
                self._remove(existing)

            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._remove(self._bindings[binding.id])

            self._bindings[binding.id] = binding
            self._by_key.setdefault(binding.mode, {})[binding.key] = binding.id
            return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._bindings),
            modes=tuple(sorted(mode for mode, keys in self._by_key.items() if keys)),
        )

    def freeze(self) -> Keymap:
        tables: Dict[str, Dict[Key, Command]] = {}
        for binding in self.iter_bindings():
            tables.setdefault(binding.mode, {})[binding.key] = binding.command
        return Keymap(tables)

    def _remove(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        mode_index = self._by_key.get(binding.mode)
        if mode_index and mode_index.get(binding.key) == binding.id:
            del mode_index[binding.key]


__all__ = ["Keymap", "KeymapRegistry", "KeymapConflictError", "RegistryStats"]
