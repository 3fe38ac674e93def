"""Reusable Qt thread helpers used by the encoders."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PyQt5 import QtCore

__all__ = ["FuncThread"]

logger = logging.getLogger(__name__)


class FuncThread(QtCore.QThread):
    """Run a blocking callable on a background thread and emit its result.

    Exactly one of ``sig_done`` / ``sig_error`` is emitted per run.
    """

    sig_done = QtCore.pyqtSignal(object)
    sig_error = QtCore.pyqtSignal(str)

    def __init__(
        self,
        func: Callable[..., Any],
        *args: Any,
        parent: Optional[QtCore.QObject] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(parent)
        self.func = func
        self.args = args
        self.kwargs = kwargs

    def run(self) -> None:  # noqa: D401 - inherited documentation suffices
        func_name = getattr(self.func, "__name__", str(self.func))
        try:
            result = self.func(*self.args, **self.kwargs)
        except Exception as exc:  # noqa: BLE001
            logger.exception("%s failed", func_name)
            self.sig_error.emit(f"{func_name}: {exc}")
            return
        if result is None:
            self.sig_error.emit(f"{func_name} returned None.")
            return
        self.sig_done.emit(result)
