"""Core domain models and helpers for recording sessions."""
from __future__ import annotations

from .config import DEFAULT_MINIMUM_FRAME_DELAY_MS, RecordConfig
from .paths import DEFAULT_BASE_DIR, artifact_path, ensure_out_dir, timestamped_subdir
from .scheduler import REJECTED, FrameDecision, FrameScheduler, project_timestamp

__all__ = [
    "RecordConfig",
    "DEFAULT_MINIMUM_FRAME_DELAY_MS",
    "DEFAULT_BASE_DIR",
    "ensure_out_dir",
    "timestamped_subdir",
    "artifact_path",
    "FrameDecision",
    "FrameScheduler",
    "REJECTED",
    "project_timestamp",
]
