# -*- coding: utf-8 -*-
"""
녹화(Record) 설정 데이터 클래스 모듈.

Docstring 스타일: Google Style
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


DEFAULT_MINIMUM_FRAME_DELAY_MS = 20


@dataclass
class RecordConfig:
    """녹화(Record) 설정값.

    Record 버튼을 누르면 Stop 버튼을 누를 때까지 프레임을 수집하고,
    Stop 시점에 GIF로 인코딩합니다.

    Attributes:
        out_dir: 출력 폴더 경로.
        minimum_frame_delay_ms: 프레임 사이 최소 간격 (ms). 더 짧은 간격의
            캡처는 버려집니다.
        cursor_poll_ms: 커서 위치 폴링 주기 (ms). None이면 최소 간격과 동일.
        sync_interval_ms: 화면 소스가 변경 여부를 확인하는 주기 (ms).
        scale: 인코딩 시 프레임 축소 비율 (0 < scale <= 1).
        loop: GIF 반복 횟수 (0이면 무한 반복).
        monitor: mss 모니터 인덱스.
    """

    out_dir: str = ""
    minimum_frame_delay_ms: int = DEFAULT_MINIMUM_FRAME_DELAY_MS
    cursor_poll_ms: Optional[int] = None
    sync_interval_ms: int = DEFAULT_MINIMUM_FRAME_DELAY_MS
    scale: float = 1.0
    loop: int = 0
    monitor: int = 1

    def __post_init__(self) -> None:
        """입력값 검증 및 보정."""

        if self.minimum_frame_delay_ms < 0:
            raise ValueError("minimum_frame_delay_ms must be >= 0")
        if self.cursor_poll_ms is None:
            self.cursor_poll_ms = max(1, int(self.minimum_frame_delay_ms))
        if self.cursor_poll_ms < 1:
            raise ValueError("cursor_poll_ms must be >= 1")
        if self.sync_interval_ms < 1:
            raise ValueError("sync_interval_ms must be >= 1")
        if not 0.0 < self.scale <= 1.0:
            raise ValueError("scale must be in (0, 1]")
        if self.loop < 0:
            raise ValueError("loop must be >= 0")
