"""Display sources that can be recorded."""
from __future__ import annotations

from typing import Any, Protocol, Tuple

__all__ = ["DisplaySource", "ScreenSource"]


class DisplaySource(Protocol):
    """What a recording session needs from the display being recorded.

    ``sig_sync(float)`` is a bound Qt signal emitted once per rendered frame
    with a timestamp (ms) that is meaningful only relative to earlier ones.
    """

    sig_sync: Any

    def snapshot(self) -> Any:
        ...

    def cursor_position(self) -> Tuple[int, int]:
        ...


def __getattr__(name: str):  # pragma: no cover - thin lazy loader
    if name == "ScreenSource":
        from .screen import ScreenSource

        return ScreenSource
    raise AttributeError(name)
