"""Textual-agnostic controller translating host key names into editor keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from modal_edit.editor import Editor
from modal_edit.host.display import Frame
from modal_edit.keymaps.models import INTERRUPT, Key, NamedKey


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


_NAMED_KEYS: Dict[str, Key] = {
    "escape": Key(named=NamedKey.ESCAPE),
    "enter": Key(named=NamedKey.ENTER),
    "return": Key(named=NamedKey.ENTER),
    "backspace": Key(named=NamedKey.BACKSPACE),
    "ctrl+h": Key(named=NamedKey.BACKSPACE),
    "left": Key(named=NamedKey.LEFT),
    "right": Key(named=NamedKey.RIGHT),
    "up": Key(named=NamedKey.UP),
    "down": Key(named=NamedKey.DOWN),
    "home": Key(named=NamedKey.HOME),
    "end": Key(named=NamedKey.END),
    "pageup": Key(named=NamedKey.PAGE_UP),
    "pagedown": Key(named=NamedKey.PAGE_DOWN),
    "space": Key.of(" "),
}


def key_from_textual(key: str, character: Optional[str] = None) -> Optional[Key]:
    """Map a Textual ``events.Key`` (name plus character) onto ``Key``.

    Returns ``None`` for keys the editor has no representation for.
    """

    named = _NAMED_KEYS.get(key)
    if named is not None:
        return named
    if key.startswith("ctrl+") and len(key) == len("ctrl+") + 1:
        return Key.control(key[-1])
    if character and len(character) == 1 and character.isprintable():
        return Key.of(character)
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    exit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Feeds host key events to an ``Editor`` and pushes frames back out."""

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._frame: Optional[Frame] = None
        self._subscribe_events()
        self.refresh(force=True)

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> bool:
        """Dispatch one host key; returns ``False`` once the editor is done."""

        translated = key_from_textual(key, character)
        self._log_state("key ->", key=key, character=character)
        if translated is None:
            return not self.editor.quit
        if translated == INTERRUPT:
            self.hooks.exit()
            return False

        repaint = self.editor.handle_key(translated)
        self.refresh(force=repaint)
        self._log_state("result <-", repaint=repaint, message=self.editor.message)
        if self.editor.quit:
            self.hooks.exit()
            return False
        return True

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        self.editor.resize(width, height)
        self.refresh(force=True)

    def refresh(self, *, force: bool = False) -> None:
        frame = self.editor.frame()
        if force or frame != self._frame:
            self._frame = frame
            self.hooks.update_frame(frame)

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in (
            "mode.switch",
            "command.start",
            "command.submit",
            "editor.message",
            "editor.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._log_state("event ->", event=name, payload=payload)
            )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        editor = self.editor
        return {
            "mode": editor.mode.value,
            "cursor": tuple(editor.cursor),
            "pending": editor.pending.value,
            "count": editor.count,
            "modified": editor.modified,
            "buffer_version": editor.buffer.version,
        }


__all__ = ["TextualVimAdapter", "TextualUIHooks", "key_from_textual"]
