# -*- coding: utf-8 -*-
"""
화면을 지정 시간 동안 녹화하여 GIF 로 저장하는 CLI.

예시
    python -m sessionrec --duration 5 --out save/session_gif --min-delay 20

Docstring 스타일: Google Style
"""
from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import Future
from typing import List, Optional

from PyQt5 import QtCore, QtGui

from .core import DEFAULT_BASE_DIR, RecordConfig, artifact_path, ensure_out_dir
from .recording import start_recording
from .sources.screen import ScreenSource

__all__ = ["build_parser", "config_from_args", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sessionrec-record",
        description="Record the screen for a fixed duration into an animated GIF.",
    )
    parser.add_argument(
        "--duration", type=float, default=5.0, help="Recording length in seconds (default: 5)"
    )
    parser.add_argument(
        "--out", default=DEFAULT_BASE_DIR, help=f"Output base directory (default: {DEFAULT_BASE_DIR})"
    )
    parser.add_argument(
        "--min-delay",
        type=int,
        default=20,
        help="Minimum delay between frames in ms (default: 20)",
    )
    parser.add_argument(
        "--poll", type=int, default=None, help="Cursor poll period in ms (default: --min-delay)"
    )
    parser.add_argument("--scale", type=float, default=1.0, help="Frame scale factor in (0, 1]")
    parser.add_argument("--loop", type=int, default=0, help="GIF loop count, 0 = forever")
    parser.add_argument("--monitor", type=int, default=1, help="mss monitor index (default: 1)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> RecordConfig:
    """Build a :class:`RecordConfig` from parsed CLI arguments."""
    if args.duration <= 0:
        raise ValueError("--duration must be > 0")
    return RecordConfig(
        out_dir=args.out,
        minimum_frame_delay_ms=args.min_delay,
        cursor_poll_ms=args.poll,
        sync_interval_ms=max(1, args.min_delay),
        scale=args.scale,
        loop=args.loop,
        monitor=args.monitor,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    app = QtGui.QGuiApplication.instance() or QtGui.QGuiApplication(sys.argv[:1])
    source = ScreenSource(monitor=cfg.monitor, sync_interval_ms=cfg.sync_interval_ms)
    session = start_recording(source, config=cfg)
    session.sig_status.connect(lambda text: logger.info("%s", text))
    source.start()

    result = {"code": 1}

    def on_artifact(future: Future) -> None:
        try:
            data = future.result()
            out_path = artifact_path(ensure_out_dir(cfg.out_dir))
            with open(out_path, "wb") as f:
                f.write(data)
        except Exception:  # noqa: BLE001
            logger.exception("Recording failed")
        else:
            print(out_path)
            result["code"] = 0
        finally:
            app.quit()

    def finish() -> None:
        future = session.stop()
        source.close()
        future.add_done_callback(on_artifact)

    QtCore.QTimer.singleShot(int(args.duration * 1000), finish)
    app.exec_()
    return result["code"]


if __name__ == "__main__":
    sys.exit(main())
