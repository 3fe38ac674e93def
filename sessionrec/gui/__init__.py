"""GUI package exporting the main window and helper widgets."""
from __future__ import annotations

from .app import main
from .image import qimage_from_cv
from .main_window import MainWindow

__all__ = ["main", "MainWindow", "qimage_from_cv"]
