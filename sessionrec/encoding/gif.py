# -*- coding: utf-8 -*-
"""
애니메이션 GIF 인코더.

- add_frame() 으로 (BGR 프레임, 지연 ms) 를 버퍼링합니다.
- render() 호출 시 백그라운드 QThread 에서 Pillow 로 GIF 를 만들고,
  완료되면 sig_finished(bytes) 를 정확히 한 번 송출합니다.

Docstring 스타일: Google Style
"""
from __future__ import annotations

import io
import logging
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image
from PyQt5 import QtCore

from .threads import FuncThread

__all__ = ["GifEncoder", "encode_gif", "scale_frame", "to_rgb"]

logger = logging.getLogger(__name__)

Frame = Tuple[np.ndarray, float]


def to_rgb(bitmap: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or grayscale ``uint8`` frame into RGB."""
    if bitmap is None:
        raise ValueError("프레임이 None 입니다.")
    if bitmap.dtype != np.uint8:
        raise ValueError(f"지원 dtype은 uint8 뿐입니다. got={bitmap.dtype}")

    if bitmap.ndim == 2:
        return cv2.cvtColor(bitmap, cv2.COLOR_GRAY2RGB)
    if bitmap.ndim == 3 and bitmap.shape[2] == 3:
        return cv2.cvtColor(bitmap, cv2.COLOR_BGR2RGB)
    if bitmap.ndim == 3 and bitmap.shape[2] == 4:
        return cv2.cvtColor(bitmap, cv2.COLOR_BGRA2RGB)

    raise ValueError(
        "지원 형상은 GRAY (H, W), BGR (H, W, 3), BGRA (H, W, 4) 입니다. "
        f"got shape={bitmap.shape}"
    )


def scale_frame(bitmap: np.ndarray, scale: float) -> np.ndarray:
    """Return a resized copy of *bitmap* (a plain copy when ``scale`` is 1)."""
    if scale == 1.0:
        return bitmap.copy()
    h, w = bitmap.shape[:2]
    size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
    return cv2.resize(bitmap, size, interpolation=cv2.INTER_AREA)


def encode_gif(frames: Sequence[Frame], loop: int = 0, scale: float = 1.0) -> bytes:
    """Encode ``(bitmap, delay_ms)`` pairs into an animated GIF.

    Args:
        frames: 프레임과 직전 프레임 대비 지연(ms) 목록.
        loop: GIF 반복 횟수 (0 = 무한).
        scale: 프레임 축소 비율.

    Returns:
        GIF 파일 내용.

    Raises:
        ValueError: 프레임이 하나도 없는 경우.
    """
    if not frames:
        raise ValueError("인코딩할 프레임이 없습니다.")

    images: List[Image.Image] = []
    durations: List[int] = []
    size: Optional[Tuple[int, int]] = None
    for bitmap, delay in frames:
        rgb = to_rgb(bitmap)
        if size is None:
            h, w = rgb.shape[:2]
            size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
        if (rgb.shape[1], rgb.shape[0]) != size:
            # 해상도가 바뀐 프레임도 첫 프레임 크기에 맞춤
            rgb = cv2.resize(rgb, size, interpolation=cv2.INTER_AREA)
        images.append(Image.fromarray(np.ascontiguousarray(rgb)))
        durations.append(max(0, int(round(delay))))

    buf = io.BytesIO()
    images[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=durations,
        loop=loop,
    )
    logger.debug("Encoded %d frames (%d bytes)", len(images), buf.tell())
    return buf.getvalue()


class GifEncoder(QtCore.QObject):
    """Frame sink producing a GIF on a worker thread.

    Signals:
        sig_finished(bytes): 인코딩 완료 시 GIF 내용 (한 번만).
        sig_error(str): 인코딩 실패 메시지 (한 번만).
        sig_status(str): 진행 상태 메시지.
    """

    sig_finished = QtCore.pyqtSignal(bytes)
    sig_error = QtCore.pyqtSignal(str)
    sig_status = QtCore.pyqtSignal(str)

    def __init__(
        self,
        loop: int = 0,
        scale: float = 1.0,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.loop = loop
        self.scale = scale
        self.frames: List[Frame] = []
        self._thread: Optional[FuncThread] = None

    @property
    def rendering(self) -> bool:
        return self._thread is not None

    def add_frame(self, bitmap: np.ndarray, delay_ms: float) -> None:
        """프레임을 버퍼에 추가합니다. render() 이후에는 호출할 수 없습니다.

        scale 은 추가 시점에 적용되어 버퍼에는 축소된 프레임만 남습니다.
        """
        if self._thread is not None:
            raise RuntimeError("add_frame() called after render()")
        self.frames.append((scale_frame(bitmap, self.scale), float(delay_ms)))

    def render(self) -> None:
        """버퍼링된 프레임의 GIF 인코딩을 시작합니다. 두 번째 호출은 무시."""
        if self._thread is not None:
            logger.warning("render() already started; ignoring")
            return

        self.sig_status.emit(f"Encoding {len(self.frames)} frames...")
        self._thread = FuncThread(encode_gif, list(self.frames), self.loop, 1.0, parent=self)
        self._thread.sig_done.connect(self._on_done)
        self._thread.sig_error.connect(self._on_error)
        self._thread.start()

    def wait(self, msecs: int = -1) -> bool:
        """인코딩 스레드 종료를 기다립니다 (시작되지 않았으면 True)."""
        if self._thread is None:
            return True
        if msecs < 0:
            return self._thread.wait()
        return self._thread.wait(msecs)

    @QtCore.pyqtSlot(object)
    def _on_done(self, data: object) -> None:
        self.frames.clear()
        self.sig_status.emit("Encoding finished.")
        self.sig_finished.emit(bytes(data))

    @QtCore.pyqtSlot(str)
    def _on_error(self, message: str) -> None:
        self.sig_status.emit(f"Encoding error: {message}")
        self.sig_error.emit(message)
