# -*- coding: utf-8 -*-
"""
디스플레이 소스 녹화 세션.

- Start 시 소스의 sig_sync 를 구독하고, 커서 위치를 주기적으로 폴링합니다.
- 두 트리거 모두 같은 FrameScheduler 를 거쳐 최소 프레임 간격이 적용됩니다.
- Stop 시 구독/폴링을 해제하고 인코더를 render 하며, 결과(GIF bytes)로
  한 번만 완료되는 Future 를 반환합니다.

상태: IDLE --start()--> ACTIVE --stop()--> STOPPED (종료 상태)

Docstring 스타일: Google Style
"""
from __future__ import annotations

import enum
import logging
from concurrent.futures import Future
from typing import Any, Callable, Optional, Tuple

from PyQt5 import QtCore

from ..core import RecordConfig
from ..core.scheduler import REJECTED, FrameDecision, FrameScheduler
from ..encoding import FrameEncoder, GifEncoder
from ..sources import DisplaySource

__all__ = [
    "EncoderError",
    "RecordingSession",
    "RecordingState",
    "RecordingStateError",
    "start_recording",
    "stop_recording",
]

logger = logging.getLogger(__name__)


class RecordingState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"


class RecordingStateError(RuntimeError):
    """Session used out of order (double stop, capture after stop, ...)."""


class EncoderError(RuntimeError):
    """The encoder reported a failure while producing the artifact."""


class RecordingSession(QtCore.QObject):
    """Records one display source into one encoder.

    Signals:
        sig_frame(float): 프레임이 채택될 때마다 그 지연(ms).
        sig_status(str): 진행 상태 메시지.
    """

    sig_frame = QtCore.pyqtSignal(float)
    sig_status = QtCore.pyqtSignal(str)

    def __init__(
        self,
        source: DisplaySource,
        encoder: Optional[FrameEncoder] = None,
        config: Optional[RecordConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or RecordConfig()
        self.source = source
        self.encoder: FrameEncoder = (
            encoder
            if encoder is not None
            else GifEncoder(loop=self.config.loop, scale=self.config.scale)
        )
        self.scheduler = FrameScheduler(self.config.minimum_frame_delay_ms, clock=clock)
        encoder_status = getattr(self.encoder, "sig_status", None)
        if encoder_status is not None:
            encoder_status.connect(self.sig_status)

        # 폴링 트리거만 갱신
        self.cursor_position: Optional[Tuple[int, int]] = None
        self.frame_count: int = 0
        self.state = RecordingState.IDLE

        self._poll_timer: Optional[QtCore.QTimer] = None
        self._future: Optional[Future] = None

    # ------------------------------ Control ------------------------------ #
    @property
    def active(self) -> bool:
        return self.state is RecordingState.ACTIVE

    def start(self) -> "RecordingSession":
        """Subscribe to the source's sync signal and start cursor polling."""
        if self.state is not RecordingState.IDLE:
            raise RecordingStateError(f"cannot start a {self.state.value} session")

        self.source.sig_sync.connect(self._on_sync)
        self.cursor_position = tuple(self.source.cursor_position())

        self._poll_timer = QtCore.QTimer(self)
        self._poll_timer.setInterval(int(self.config.cursor_poll_ms))
        self._poll_timer.timeout.connect(self._poll_cursor)
        self._poll_timer.start()

        self.state = RecordingState.ACTIVE
        logger.info(
            "Recording started (min delay %s ms, poll %s ms)",
            self.config.minimum_frame_delay_ms,
            self.config.cursor_poll_ms,
        )
        self.sig_status.emit("Recording...")
        return self

    def stop(self) -> "Future[bytes]":
        """Stop capturing and finalize the encoder.

        Returns:
            Future resolved exactly once with the encoder's artifact, or with
            :class:`EncoderError` if the encoder reports a failure.

        Raises:
            RecordingStateError: 세션이 ACTIVE 가 아닌 경우 (이중 stop 포함).
        """
        if self.state is not RecordingState.ACTIVE:
            raise RecordingStateError(f"cannot stop a {self.state.value} session")

        # 이후의 어떤 트리거도 scheduler 에 도달하지 않도록 상태부터 전환
        self.state = RecordingState.STOPPED
        self.source.sig_sync.disconnect(self._on_sync)
        if self._poll_timer is not None:
            self._poll_timer.stop()
            self._poll_timer.deleteLater()
            self._poll_timer = None

        future: Future = Future()
        future.set_running_or_notify_cancel()
        self._future = future

        self.encoder.sig_finished.connect(self._on_finished)
        self.encoder.sig_error.connect(self._on_error)
        logger.info("Recording stopped after %d frames; finalizing", self.frame_count)
        self.sig_status.emit(f"Stopping... ({self.frame_count} frames)")
        self.encoder.render()
        return future

    def capture(self, session_timestamp: Optional[float] = None) -> FrameDecision:
        """Snapshot the source and submit it if the scheduler accepts it.

        Raises:
            RecordingStateError: 세션이 ACTIVE 가 아닌 경우.
        """
        if self.state is not RecordingState.ACTIVE:
            raise RecordingStateError(f"cannot capture on a {self.state.value} session")

        bitmap = self.source.snapshot()
        decision = self.scheduler.evaluate(bitmap, session_timestamp)
        if not decision.accepted:
            return REJECTED

        self.encoder.add_frame(bitmap, decision.delay_ms)
        self.frame_count += 1
        self.sig_frame.emit(decision.delay_ms)
        return decision

    # ------------------------------ Triggers ----------------------------- #
    @QtCore.pyqtSlot(float)
    def _on_sync(self, timestamp: float) -> None:
        # 큐에 남아 있던 이벤트가 stop 이후에 도착할 수 있음
        if not self.active:
            return
        self.capture(timestamp)

    @QtCore.pyqtSlot()
    def _poll_cursor(self) -> None:
        if not self.active:
            return
        position = tuple(self.source.cursor_position())
        if position != self.cursor_position:
            self.capture()
            self.cursor_position = position

    # ----------------------------- Finalize ------------------------------ #
    @QtCore.pyqtSlot(bytes)
    def _on_finished(self, artifact: bytes) -> None:
        if self._future is None or self._future.done():
            return
        logger.info("Artifact ready (%d bytes)", len(artifact))
        self.sig_status.emit(f"Done. {len(artifact)} bytes")
        self._future.set_result(artifact)

    @QtCore.pyqtSlot(str)
    def _on_error(self, message: str) -> None:
        if self._future is None or self._future.done():
            return
        logger.error("Encoder failed: %s", message)
        self.sig_status.emit(f"Error: {message}")
        self._future.set_exception(EncoderError(message))


def start_recording(
    source: DisplaySource,
    encoder: Optional[FrameEncoder] = None,
    config: Optional[RecordConfig] = None,
    **kwargs: Any,
) -> RecordingSession:
    """Begin recording *source*; pass the returned session to :func:`stop_recording`."""
    return RecordingSession(source, encoder=encoder, config=config, **kwargs).start()


def stop_recording(session: RecordingSession) -> "Future[bytes]":
    """Stop *session*, returning a future resolved with the encoded artifact."""
    return session.stop()
