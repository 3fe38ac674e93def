import os

import pytest

from sessionrec.core import RecordConfig, artifact_path, ensure_out_dir, timestamped_subdir
from sessionrec.core.paths import DEFAULT_BASE_DIR


def test_defaults_use_twenty_ms_minimum():
    cfg = RecordConfig()
    assert cfg.minimum_frame_delay_ms == 20
    assert cfg.cursor_poll_ms == 20
    assert cfg.scale == 1.0
    assert cfg.loop == 0


def test_cursor_poll_follows_minimum_delay():
    assert RecordConfig(minimum_frame_delay_ms=50).cursor_poll_ms == 50
    assert RecordConfig(minimum_frame_delay_ms=0).cursor_poll_ms == 1
    assert RecordConfig(minimum_frame_delay_ms=50, cursor_poll_ms=10).cursor_poll_ms == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"minimum_frame_delay_ms": -1},
        {"cursor_poll_ms": 0},
        {"sync_interval_ms": 0},
        {"scale": 0.0},
        {"scale": 1.5},
        {"loop": -1},
    ],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        RecordConfig(**kwargs)


def test_timestamped_subdir_creates_unique_directories(tmp_path):
    first = timestamped_subdir(str(tmp_path))
    second = timestamped_subdir(str(tmp_path))

    assert os.path.isdir(first) and os.path.isdir(second)
    assert first != second
    assert os.path.dirname(first) == str(tmp_path)


def test_ensure_out_dir_falls_back_to_default_base(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out_dir = ensure_out_dir("")
    expected = os.path.realpath(str(tmp_path / DEFAULT_BASE_DIR))
    assert os.path.realpath(out_dir).startswith(expected)


def test_artifact_path_is_inside_out_dir(tmp_path):
    assert artifact_path(str(tmp_path)) == str(tmp_path / "session.gif")
