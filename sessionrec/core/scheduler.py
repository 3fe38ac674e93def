"""Frame throttling and timestamp reconciliation.

The scheduler decides, for every candidate capture, whether it becomes a
frame of the recording and which delay it carries. Captures arrive from two
clock domains: sync events carry the display source's own timestamps, cursor
polls carry none and are projected from the local clock onto the source's
domain so that delays stay comparable across both trigger kinds.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import DEFAULT_MINIMUM_FRAME_DELAY_MS

__all__ = ["FrameDecision", "FrameScheduler", "REJECTED", "monotonic_ms", "project_timestamp"]


def monotonic_ms() -> float:
    """Local clock in milliseconds."""
    return time.monotonic() * 1000.0


def project_timestamp(now: float, last_session: float, last_wall: float) -> float:
    """Map local time *now* onto the session clock domain.

    The offset between both clocks is taken from the last accepted frame, so
    the result advances exactly as fast as the local clock since then.
    """
    return now + (last_session - last_wall)


@dataclass(frozen=True)
class FrameDecision:
    """Outcome of :meth:`FrameScheduler.evaluate`.

    Attributes:
        accepted: Whether the capture becomes a frame.
        delay_ms: Delay relative to the previously accepted frame.
        frame: The accepted bitmap, ``None`` for rejections.
    """

    accepted: bool
    delay_ms: float = 0.0
    frame: Any = None

    def __bool__(self) -> bool:
        return self.accepted


REJECTED = FrameDecision(accepted=False)


class FrameScheduler:
    """Accept or drop captures so that frames are at least
    ``minimum_interval_ms`` apart on the session clock."""

    def __init__(
        self,
        minimum_interval_ms: float = DEFAULT_MINIMUM_FRAME_DELAY_MS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if minimum_interval_ms < 0:
            raise ValueError("minimum_interval_ms must be >= 0")
        self.minimum_interval_ms = minimum_interval_ms
        self._clock = clock or monotonic_ms

        # Set together on acceptance, both None before the first frame
        self.last_session_timestamp: Optional[float] = None
        self.last_wall_clock_time: Optional[float] = None

    @property
    def has_frame(self) -> bool:
        return self.last_session_timestamp is not None

    def reset(self) -> None:
        """Forget the last accepted frame."""
        self.last_session_timestamp = None
        self.last_wall_clock_time = None

    def evaluate(self, bitmap: Any, session_timestamp: Optional[float] = None) -> FrameDecision:
        """Decide whether *bitmap* becomes the next frame.

        Args:
            bitmap: Snapshot of the display taken for this capture.
            session_timestamp: Timestamp in the source's clock domain, in
                milliseconds. ``None`` projects the local clock instead.

        Returns:
            An accepted :class:`FrameDecision` carrying the delay, or
            :data:`REJECTED` when the capture came too soon (or out of
            order) after the last frame.
        """
        now = self._clock()

        if self.last_session_timestamp is None or self.last_wall_clock_time is None:
            timestamp = now if session_timestamp is None else session_timestamp
            self._record(timestamp, now)
            return FrameDecision(accepted=True, delay_ms=0.0, frame=bitmap)

        if session_timestamp is None:
            session_timestamp = project_timestamp(
                now, self.last_session_timestamp, self.last_wall_clock_time
            )

        delay = session_timestamp - self.last_session_timestamp
        if delay < self.minimum_interval_ms or delay <= 0:
            return REJECTED

        self._record(session_timestamp, now)
        return FrameDecision(accepted=True, delay_ms=delay, frame=bitmap)

    def _record(self, session_timestamp: float, now: float) -> None:
        self.last_session_timestamp = session_timestamp
        self.last_wall_clock_time = now
