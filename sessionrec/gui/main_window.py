# -*- coding: utf-8 -*-
"""화면 녹화 → GIF 저장을 위한 PyQt5 메인 윈도우 모듈."""
from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from ..core import DEFAULT_BASE_DIR, RecordConfig, artifact_path, ensure_out_dir
from ..recording import RecordingSession, start_recording
from ..sources.screen import ScreenSource
from .image import qimage_from_cv


__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """애플리케이션의 메인 윈도우."""

    # Future 콜백 → GUI 스레드 전달용
    sig_artifact = QtCore.pyqtSignal(object)

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Session GIF Recorder")

        self.source: Optional[ScreenSource] = None
        self.session: Optional[RecordingSession] = None
        self._is_recording: bool = False

        self._build_ui()
        self.sig_artifact.connect(self.on_finished)
        self.set_running(False)

    # -------------------------------- UI --------------------------------- #
    def _build_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        vbox = QtWidgets.QVBoxLayout(central)

        form = QtWidgets.QFormLayout()
        self.editOutDir = QtWidgets.QLineEdit(DEFAULT_BASE_DIR)
        self.btnBrowse = QtWidgets.QPushButton("Browse...")
        self.btnBrowse.clicked.connect(self.on_browse)
        hb = QtWidgets.QHBoxLayout()
        hb.addWidget(self.editOutDir, 1)
        hb.addWidget(self.btnBrowse)
        form.addRow("Output:", hb)

        self.spinMinDelay = QtWidgets.QSpinBox()
        self.spinMinDelay.setRange(10, 1000)
        self.spinMinDelay.setValue(20)
        self.spinMinDelay.setSuffix(" ms")
        form.addRow("Min frame delay:", self.spinMinDelay)

        self.spinScale = QtWidgets.QDoubleSpinBox()
        self.spinScale.setRange(0.1, 1.0)
        self.spinScale.setSingleStep(0.1)
        self.spinScale.setValue(0.5)
        form.addRow("Scale:", self.spinScale)
        vbox.addLayout(form)

        buttons = QtWidgets.QHBoxLayout()
        self.btnStart = QtWidgets.QPushButton("Record")
        self.btnStart.clicked.connect(self.on_start)
        self.btnStop = QtWidgets.QPushButton("Stop")
        self.btnStop.clicked.connect(self.on_stop)
        buttons.addWidget(self.btnStart)
        buttons.addWidget(self.btnStop)
        vbox.addLayout(buttons)

        self.viewPreview = QtWidgets.QLabel("No frames yet")
        self.viewPreview.setAlignment(QtCore.Qt.AlignCenter)
        self.viewPreview.setMinimumSize(480, 270)
        vbox.addWidget(self.viewPreview, 1)

        self.lblStatus = QtWidgets.QLabel("Status: idle")
        vbox.addWidget(self.lblStatus)

        self.setCentralWidget(central)

    # ------------------------------ Record ------------------------------ #
    def set_status(self, text: str) -> None:
        """상태 바/라벨에 상태 텍스트를 표시합니다."""
        self.lblStatus.setText(f"Status: {text}")
        if self.statusBar():
            self.statusBar().showMessage(text, 5000)

    def set_running(self, running: bool) -> None:
        """녹화 중에는 Stop만 활성화, 나머지는 비활성화."""
        self._is_recording = running
        for widget in (self.btnStart, self.btnBrowse, self.editOutDir, self.spinMinDelay, self.spinScale):
            widget.setEnabled(not running)
        self.btnStop.setEnabled(running)

    def on_browse(self) -> None:
        """출력 베이스 디렉터리 선택."""
        directory = QtWidgets.QFileDialog.getExistingDirectory(
            self, "Select Output Base Directory", ""
        )
        if directory:
            self.editOutDir.setText(directory)

    def on_start(self) -> None:
        """녹화 시작."""
        try:
            cfg = RecordConfig(
                out_dir=self.editOutDir.text(),
                minimum_frame_delay_ms=int(self.spinMinDelay.value()),
                scale=float(self.spinScale.value()),
            )
            self.source = ScreenSource(monitor=cfg.monitor, sync_interval_ms=cfg.sync_interval_ms)
            self.source.sig_status.connect(self.set_status)

            self.session = start_recording(self.source, config=cfg)
            self.session.sig_status.connect(self.set_status)
            self.session.sig_frame.connect(self.update_preview)
            self.source.start()

            self.set_running(True)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Start failed")
            QtWidgets.QMessageBox.critical(self, "Start Error", str(exc))
            self._release_source()
            self.set_running(False)

    def on_stop(self) -> None:
        """녹화 중지. 인코딩은 백그라운드에서 진행됩니다."""
        if self.session is None or not self.session.active:
            return
        future = self.session.stop()
        self._release_source()
        self.btnStop.setEnabled(False)
        future.add_done_callback(self.sig_artifact.emit)

    @QtCore.pyqtSlot(object)
    def on_finished(self, future: Future) -> None:
        """인코딩 완료 후 GIF 저장."""
        self.set_running(False)
        try:
            data = future.result()
            out_path = artifact_path(ensure_out_dir(self.editOutDir.text()))
            with open(out_path, "wb") as f:
                f.write(data)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Saving recording failed")
            QtWidgets.QMessageBox.critical(self, "Save Error", str(exc))
            return

        self.set_status(f"Done. Output: {out_path}")
        QtWidgets.QMessageBox.information(
            self,
            "Finished",
            f"저장이 완료되었습니다.\n\n{out_path}",
        )

    @QtCore.pyqtSlot(float)
    def update_preview(self, delay_ms: float) -> None:
        """마지막으로 채택된 프레임을 미리보기에 표시."""
        if self.source is None:
            return
        qimg = qimage_from_cv(self.source.snapshot())
        pixmap = QtGui.QPixmap.fromImage(qimg).scaled(
            self.viewPreview.width(),
            self.viewPreview.height(),
            QtCore.Qt.KeepAspectRatio,
            QtCore.Qt.SmoothTransformation,
        )
        self.viewPreview.setPixmap(pixmap)

    def _release_source(self) -> None:
        if self.source is not None:
            self.source.close()
            self.source = None

    # ----------------------------- Qt Events ----------------------------- #
    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802
        """윈도우 닫힐 때 녹화/인코딩 정리."""
        if self.session is not None and self.session.active:
            self.session.stop()
        self._release_source()
        encoder = getattr(self.session, "encoder", None)
        if encoder is not None and hasattr(encoder, "wait"):
            encoder.wait(2000)
        event.accept()
