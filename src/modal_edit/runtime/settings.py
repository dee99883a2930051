"""Editor settings resolved from defaults and ``MODAL_EDIT_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_WIDTH = 76
DEFAULT_HEIGHT = 23
HSCROLL_STEP = 20
VISIBLE_HEIGHT_ESTIMATE = 22
GUTTER_WIDTH = 4


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Geometry and behaviour knobs shared by the editor and its hosts."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    wrap: bool = False
    hscroll_step: int = HSCROLL_STEP
    visible_height_estimate: int = VISIBLE_HEIGHT_ESTIMATE
    gutter_width: int = GUTTER_WIDTH

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("viewport dimensions must be positive")
        if self.hscroll_step <= 0:
            raise ValueError("hscroll_step must be positive")
        if self.visible_height_estimate < 0:
            raise ValueError("visible_height_estimate cannot be negative")

    def resized(self, width: int, height: int) -> "EditorSettings":
        return replace(self, width=width, height=height)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "EditorSettings":
        env = os.environ if environ is None else environ

        def _int(name: str, fallback: int) -> int:
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is None:
                return fallback
            try:
                return int(raw)
            except ValueError:
                return fallback

        wrap_raw = env.get(f"{ENV_PREFIX}WRAP")
        wrap = False
        if wrap_raw is not None:
            wrap = wrap_raw.strip().lower() in {"1", "true", "yes", "on"}

        return cls(
            width=_int("WIDTH", DEFAULT_WIDTH),
            height=_int("HEIGHT", DEFAULT_HEIGHT),
            wrap=wrap,
            hscroll_step=_int("HSCROLL_STEP", HSCROLL_STEP),
            visible_height_estimate=_int(
                "VISIBLE_HEIGHT", VISIBLE_HEIGHT_ESTIMATE
            ),
            gutter_width=_int("GUTTER_WIDTH", GUTTER_WIDTH),
        )


__all__ = ["EditorSettings"]
