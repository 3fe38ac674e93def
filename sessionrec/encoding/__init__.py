"""Frame encoders turning accepted frames into an artifact."""
from __future__ import annotations

from typing import Any, Protocol

from .gif import GifEncoder, encode_gif
from .threads import FuncThread

__all__ = ["FrameEncoder", "GifEncoder", "encode_gif", "FuncThread"]


class FrameEncoder(Protocol):
    """What a recording session needs from an encoder.

    ``sig_finished(bytes)`` and ``sig_error(str)`` must be bound Qt signals;
    one of them fires exactly once after :meth:`render`.
    """

    sig_finished: Any
    sig_error: Any

    def add_frame(self, bitmap: Any, delay_ms: float) -> None:
        ...

    def render(self) -> None:
        ...
