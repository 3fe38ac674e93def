"""File system helpers for output/session directories."""
from __future__ import annotations

import os
from datetime import datetime


__all__ = ["DEFAULT_BASE_DIR", "ARTIFACT_NAME", "ensure_out_dir", "timestamped_subdir", "artifact_path"]


DEFAULT_BASE_DIR = "save/session_gif"
ARTIFACT_NAME = "session.gif"


def ensure_out_dir(base: str) -> str:
    """Create a timestamped output directory and return its absolute path."""
    return timestamped_subdir(base or DEFAULT_BASE_DIR)


def timestamped_subdir(base: str) -> str:
    """Create a timestamped sub-directory inside *base* and return its path.

    Two recordings finished within the same second get ``_1``, ``_2`` ...
    suffixes instead of sharing a folder.
    """
    base = (base or DEFAULT_BASE_DIR).strip() or DEFAULT_BASE_DIR
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = os.path.join(base, timestamp)
    suffix = 0
    while os.path.exists(out_dir):
        suffix += 1
        out_dir = os.path.join(base, f"{timestamp}_{suffix}")
    os.makedirs(out_dir)
    return os.path.abspath(out_dir)


def artifact_path(out_dir: str) -> str:
    """Return where the encoded GIF of a session stored in *out_dir* lives."""
    return os.path.join(out_dir, ARTIFACT_NAME)
