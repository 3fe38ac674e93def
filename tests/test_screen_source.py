import io

import numpy as np
import pytest
from PIL import Image

from sessionrec.core import RecordConfig
from sessionrec.recording import RecordingSession
from sessionrec.sources.screen import CURSOR_RADIUS, ScreenSource, draw_cursor

from conftest import FakeClock, process_events_until


def bgra(value):
    return np.full((48, 64, 4), value, dtype=np.uint8)


def test_grab_converts_to_bgr(qapp, sct):
    source = ScreenSource()

    frame = source.grab()

    assert frame.shape == (48, 64, 3)
    sct.grab.assert_called_with(sct.monitors[1])


def test_sync_is_emitted_only_when_content_changes(qapp, sct, cursor):
    sct.grab.side_effect = [bgra(1), bgra(1), bgra(2)]
    source = ScreenSource()
    stamps = []
    source.sig_sync.connect(stamps.append)

    source._check_frame()
    source._check_frame()
    source._check_frame()

    assert len(stamps) == 2
    assert stamps[0] <= stamps[1]
    assert int(source.snapshot()[0, 0, 0]) == 2


def test_snapshot_grabs_when_nothing_captured_yet(qapp, sct, cursor):
    sct.grab.return_value = bgra(5)
    source = ScreenSource()
    assert int(source.snapshot()[0, 0, 0]) == 5


def test_snapshot_draws_the_cursor(qapp, sct, cursor):
    source = ScreenSource()
    source._check_frame()

    cursor[0] = (20, 10)
    frame = source.snapshot()

    assert tuple(frame[10, 20]) == (255, 255, 255)
    assert tuple(frame[40, 60]) == (80, 80, 80)
    # the cached grab stays free of the cursor
    assert tuple(source._last_frame[10, 20]) == (80, 80, 80)


def test_draw_cursor_ignores_positions_outside_the_frame():
    frame = np.zeros((10, 10, 3), dtype=np.uint8)

    out = draw_cursor(frame, (-50, 3))

    assert out is not frame
    assert not out.any()


def test_draw_cursor_marks_an_outlined_disc():
    frame = np.full((40, 40, 3), 128, dtype=np.uint8)

    out = draw_cursor(frame, (20, 20))

    assert tuple(out[20, 20]) == (255, 255, 255)
    assert tuple(out[20, 20 + CURSOR_RADIUS]) == (0, 0, 0)
    assert tuple(frame[20, 20]) == (128, 128, 128)


def test_cursor_moves_become_distinct_gif_frames(qapp, sct, cursor):
    clock = FakeClock()
    source = ScreenSource()
    cursor[0] = (10, 10)
    rec = RecordingSession(source, config=RecordConfig(), clock=clock).start()

    source._check_frame()
    clock.advance(30)
    cursor[0] = (30, 20)
    rec._poll_cursor()
    clock.advance(30)
    cursor[0] = (50, 30)
    rec._poll_cursor()

    assert rec.frame_count == 3
    future = rec.stop()
    assert rec.encoder.wait(5000)
    assert process_events_until(qapp, future.done)

    gif = Image.open(io.BytesIO(future.result(timeout=0)))
    assert gif.n_frames == rec.frame_count


def test_invalid_monitor_index(qapp, sct):
    with pytest.raises(ValueError):
        ScreenSource(monitor=5)


def test_start_and_stop_drive_timer(qapp, sct):
    source = ScreenSource(sync_interval_ms=30)
    source.start()
    assert source.running
    source.close()
    assert not source.running
    sct.close.assert_called_once()
