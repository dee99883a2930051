"""Keyboard collaborator: the only place the editor ever waits."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Protocol, Union

from modal_edit.keymaps.models import INTERRUPT, Key, KeySequence


class Keyboard(Protocol):
    def next_key(self) -> Key:
        """Block until the next key press and return it."""
        ...


class ScriptedKeyboard:
    """Replays a fixed run of keys, then reports the interrupt key forever."""

    def __init__(self, keys: Union[str, Iterable[Key]] = ()) -> None:
        if isinstance(keys, str):
            keys = KeySequence.from_text(keys)
        self._keys = deque(keys)

    def feed(self, keys: Union[str, Iterable[Key]]) -> None:
        if isinstance(keys, str):
            keys = KeySequence.from_text(keys)
        self._keys.extend(keys)

    @property
    def remaining(self) -> int:
        return len(self._keys)

    def next_key(self) -> Key:
        if not self._keys:
            return INTERRUPT
        return self._keys.popleft()


__all__ = ["Keyboard", "ScriptedKeyboard"]
