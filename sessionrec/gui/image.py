"""Qt related helpers such as OpenCV frame → QImage conversion."""
from __future__ import annotations

import numpy as np
from PyQt5 import QtGui

from ..encoding.gif import to_rgb

__all__ = ["qimage_from_cv"]


def qimage_from_cv(frame: np.ndarray) -> QtGui.QImage:
    """Convert a BGR/BGRA/grayscale ``uint8`` frame into a detached ``QImage``."""
    rgb = np.ascontiguousarray(to_rgb(frame))
    h, w, _ = rgb.shape
    qimg = QtGui.QImage(rgb.data, w, h, 3 * w, QtGui.QImage.Format_RGB888)
    return qimg.copy()
