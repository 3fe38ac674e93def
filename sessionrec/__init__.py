"""Record a live display session into an animated GIF."""
from __future__ import annotations

from .core import (
    DEFAULT_BASE_DIR,
    FrameDecision,
    FrameScheduler,
    RecordConfig,
    artifact_path,
    ensure_out_dir,
    project_timestamp,
)
from .encoding import GifEncoder, encode_gif
from .recording import (
    EncoderError,
    RecordingSession,
    RecordingState,
    RecordingStateError,
    start_recording,
    stop_recording,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BASE_DIR",
    "FrameDecision",
    "FrameScheduler",
    "RecordConfig",
    "artifact_path",
    "ensure_out_dir",
    "project_timestamp",
    "GifEncoder",
    "encode_gif",
    "EncoderError",
    "RecordingSession",
    "RecordingState",
    "RecordingStateError",
    "start_recording",
    "stop_recording",
    "ScreenSource",
    "main",
    "MainWindow",
]


def __getattr__(name: str):  # pragma: no cover - thin lazy loader
    if name == "ScreenSource":
        from .sources.screen import ScreenSource

        return ScreenSource
    if name in {"main", "MainWindow"}:
        from . import gui

        return getattr(gui, name)
    raise AttributeError(name)
