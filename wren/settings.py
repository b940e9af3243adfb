# wren/settings.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class LoaderSettings:
    """Worker pool and import options for ModelLoader."""

    max_workers: int = 2
    flip_textures: bool = True


@dataclass(frozen=True, slots=True)
class CycleSettings:
    """Timing policy for the load/display/dispose loop."""

    assets: Tuple[str, ...] = field(default_factory=tuple)
    display_seconds: float = 2.0
    pause_seconds: float = 1.0
    # None loops forever.
    max_cycles: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.assets:
            raise ValueError("CycleSettings needs at least one asset")
        if self.display_seconds < 0 or self.pause_seconds < 0:
            raise ValueError("Hold durations must not be negative")
        if self.max_cycles is not None and self.max_cycles < 1:
            raise ValueError("max_cycles must be positive or None")
