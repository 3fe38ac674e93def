"""Recording session lifecycle."""
from __future__ import annotations

from .session import (
    EncoderError,
    RecordingSession,
    RecordingState,
    RecordingStateError,
    start_recording,
    stop_recording,
)

__all__ = [
    "EncoderError",
    "RecordingSession",
    "RecordingState",
    "RecordingStateError",
    "start_recording",
    "stop_recording",
]
