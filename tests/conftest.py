"""Shared pytest configuration and fixtures for the recorder test suite."""

import os
from typing import List, Optional, Tuple
from unittest import mock

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5 import QtCore  # noqa: E402

from sessionrec.core import RecordConfig  # noqa: E402
from sessionrec.recording import RecordingSession  # noqa: E402
from sessionrec.sources import screen  # noqa: E402
from sessionrec.sources.screen import ScreenSource  # noqa: E402


# =============================================================================
# Fakes
# =============================================================================

class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeSource(QtCore.QObject):
    """Display source whose frames are numbered solid images."""

    sig_sync = QtCore.pyqtSignal(float)

    def __init__(self) -> None:
        super().__init__()
        self.cursor: Tuple[int, int] = (0, 0)
        self.snapshots = 0

    def snapshot(self) -> np.ndarray:
        self.snapshots += 1
        return np.full((4, 4, 3), (self.snapshots * 40) % 256, dtype=np.uint8)

    def cursor_position(self) -> Tuple[int, int]:
        return self.cursor


class FakeEncoder(QtCore.QObject):
    """Encoder recording submitted frames; finishes on demand."""

    sig_finished = QtCore.pyqtSignal(bytes)
    sig_error = QtCore.pyqtSignal(str)

    def __init__(self, artifact: bytes = b"GIF89a-fake", deferred: bool = False) -> None:
        super().__init__()
        self.artifact = artifact
        self.deferred = deferred
        self.frames: List[Tuple[np.ndarray, float]] = []
        self.render_calls = 0

    @property
    def delays(self) -> List[float]:
        return [delay for _, delay in self.frames]

    def add_frame(self, bitmap: np.ndarray, delay_ms: float) -> None:
        self.frames.append((bitmap, delay_ms))

    def render(self) -> None:
        self.render_calls += 1
        if not self.deferred:
            self.finish()

    def finish(self, artifact: Optional[bytes] = None) -> None:
        self.sig_finished.emit(self.artifact if artifact is None else artifact)

    def fail(self, message: str) -> None:
        self.sig_error.emit(message)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def qapp():
    """A Qt application object so timers and queued signals work."""
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source(qapp) -> FakeSource:
    return FakeSource()


@pytest.fixture
def encoder(qapp) -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def sct():
    """Replace mss with a mock; set ``sct.grab.return_value`` to a BGRA array."""
    fake = mock.MagicMock()
    fake.monitors = [
        {"left": 0, "top": 0, "width": 64, "height": 48},
        {"left": 0, "top": 0, "width": 64, "height": 48},
    ]
    fake.grab.return_value = np.full((48, 64, 4), 80, dtype=np.uint8)
    with mock.patch.object(screen.mss, "mss", return_value=fake):
        yield fake


@pytest.fixture
def cursor():
    """Replace the Qt cursor lookup of ScreenSource; move it via ``cursor[0]``."""
    position = [(-100, -100)]
    with mock.patch.object(ScreenSource, "cursor_position", lambda self: position[0]):
        yield position


@pytest.fixture
def session(source, encoder, clock) -> RecordingSession:
    rec = RecordingSession(source, encoder=encoder, config=RecordConfig(), clock=clock)
    rec.start()
    yield rec
    if rec.active:
        rec.stop()


def process_events_until(app, predicate, attempts: int = 200) -> bool:
    """Pump the Qt event queue until *predicate* holds."""
    for _ in range(attempts):
        app.processEvents()
        if predicate():
            return True
        QtCore.QThread.msleep(10)
    return predicate()
