# -*- coding: utf-8 -*-
"""
mss 기반 화면 소스.

- sync_interval_ms 마다 모니터를 캡처하고 내용이 바뀌었을 때만
  sig_sync(timestamp_ms) 를 송출합니다 (원격 세션의 frame sync 역할).
- 타임스탬프는 start() 시점부터 경과한 ms 입니다.
- 커서 좌표는 QtGui.QCursor 로 읽습니다.

Docstring 스타일: Google Style
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import cv2
import mss
from mss.exception import ScreenShotError
import numpy as np
from PyQt5 import QtCore, QtGui

__all__ = ["ScreenSource", "draw_cursor"]

logger = logging.getLogger(__name__)

CURSOR_RADIUS = 6


class ScreenSource(QtCore.QObject):
    """Screen capture source emitting a sync signal on content changes.

    Signals:
        sig_sync(float): 화면 내용이 바뀐 시점의 타임스탬프 (ms).
        sig_status(str): 진행 상태 메시지.
    """

    sig_sync = QtCore.pyqtSignal(float)
    sig_status = QtCore.pyqtSignal(str)

    def __init__(
        self,
        monitor: int = 1,
        sync_interval_ms: int = 20,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._sct = mss.mss()
        if not 0 <= monitor < len(self._sct.monitors):
            raise ValueError(
                f"monitor index {monitor} out of range (0..{len(self._sct.monitors) - 1})"
            )
        self.monitor: Dict[str, int] = self._sct.monitors[monitor]

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(int(sync_interval_ms))
        self._timer.timeout.connect(self._check_frame)

        self._started_at: Optional[float] = None
        self._last_frame: Optional[np.ndarray] = None

    # ------------------------------ Capture ------------------------------ #
    def grab(self) -> np.ndarray:
        """Capture the monitor as a BGR ``uint8`` array."""
        img = np.array(self._sct.grab(self.monitor))
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)

    def snapshot(self) -> np.ndarray:
        """Return the most recent rendered frame with the cursor drawn in.

        mss 캡처에는 커서가 포함되지 않으므로 현재 커서 위치를 직접 그립니다.
        """
        if self._last_frame is None:
            self._last_frame = self.grab()
        return draw_cursor(self._last_frame, self.cursor_position())

    def cursor_position(self) -> Tuple[int, int]:
        pos = QtGui.QCursor.pos()
        return pos.x() - self.monitor["left"], pos.y() - self.monitor["top"]

    # ------------------------------ Control ------------------------------ #
    @property
    def running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if self.running:
            return
        self._started_at = time.monotonic()
        self._last_frame = None
        self._timer.start()
        self.sig_status.emit(
            f"Capturing monitor {self.monitor['width']}x{self.monitor['height']}"
        )

    def stop(self) -> None:
        self._timer.stop()

    def close(self) -> None:
        self.stop()
        self._sct.close()

    # ------------------------------ Internals ---------------------------- #
    def _elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        return (time.monotonic() - self._started_at) * 1000.0

    @QtCore.pyqtSlot()
    def _check_frame(self) -> None:
        try:
            frame = self.grab()
        except ScreenShotError as exc:
            logger.warning("Screen grab failed: %s", exc)
            self.sig_status.emit(f"Grab error: {exc}")
            return

        changed = self._last_frame is None or _differs(frame, self._last_frame)
        self._last_frame = frame
        if changed:
            self.sig_sync.emit(self._elapsed_ms())


def _differs(a: np.ndarray, b: Any) -> bool:
    if a.shape != b.shape:
        return True
    return bool(np.any(cv2.absdiff(a, b)))


def draw_cursor(frame: np.ndarray, position: Tuple[int, int], radius: int = CURSOR_RADIUS) -> np.ndarray:
    """Return a copy of *frame* with a cursor marker at *position*.

    Positions outside the frame leave the copy unchanged.
    """
    out = frame.copy()
    h, w = out.shape[:2]
    x, y = int(position[0]), int(position[1])
    if 0 <= x < w and 0 <= y < h:
        cv2.circle(out, (x, y), radius, (255, 255, 255), -1)
        cv2.circle(out, (x, y), radius, (0, 0, 0), 2)
    return out
