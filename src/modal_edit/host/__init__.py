"""Collaborators the editor talks to: filesystem, keyboard, display.

``modal_edit.host.display`` is imported on its own because it renders buffer
objects, and the buffer package itself depends on ``host.filesystem``.
"""

from .filesystem import Filesystem, LocalFilesystem
from .keyboard import Keyboard, ScriptedKeyboard

__all__ = ["Filesystem", "LocalFilesystem", "Keyboard", "ScriptedKeyboard"]
