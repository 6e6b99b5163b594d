"""Tests for configuration files, snapshots, history export and event replay."""

import json

import numpy as np
import pytest

from windchime.config import ChimeConfig
from windchime.core.history import FrameHistory
from windchime.interaction import InteractionScheduler, LifecycleState, ManualFrameClock
from windchime.io import (
    PointerEventStream,
    horizontal_sweep,
    load_chime_config,
    load_config,
    load_snapshot,
    replay,
    restore_snapshot,
    save_chime_config,
    save_config,
    save_snapshot,
)
from windchime.physics import ChimeDynamics


def test_chime_config_file_roundtrip(tmp_path) -> None:
    config = ChimeConfig()
    config.scheduler.settle_grace_ms = 900.0
    config.follower.max_angle = 0.3
    config.jitter_amplitude = 0.25
    config.jitter_seed = 3
    path = tmp_path / "cfg" / "chime.json"
    save_chime_config(config, path)
    loaded = load_chime_config(path)
    assert loaded == config


def test_partial_config_keeps_defaults(tmp_path) -> None:
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"scheduler": {"settle_grace_ms": 700}, "unknown": 1}))
    config = load_chime_config(path)
    assert config.scheduler.settle_grace_ms == 700
    assert config.driver == ChimeConfig().driver


def test_config_with_jitter_builds_seeded_dynamics() -> None:
    config = ChimeConfig.from_dict({"jitter_amplitude": 0.4, "jitter_seed": 11})
    dynamics = config.build_dynamics()
    assert dynamics.jitter is not None
    assert dynamics.jitter.seed == 11


def test_save_config_converts_numpy(tmp_path) -> None:
    path = tmp_path / "arr.json"
    save_config({"a": np.arange(3), "b": np.float64(1.5), "c": {"d": np.int64(2)}}, path)
    assert load_config(path) == {"a": [0, 1, 2], "b": 1.5, "c": {"d": 2}}


def test_load_config_rejects_non_object(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_config(path)


def test_snapshot_roundtrip(tmp_path) -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(2.0, -1)
    dynamics.step(0.016)
    save_snapshot(dynamics.state_dict(), tmp_path / "snap")
    data = load_snapshot(tmp_path / "snap")
    np.testing.assert_allclose(data["state"], dynamics.state)
    assert data["force_direction"] == -1
    assert data["driver"]["mass"] == dynamics.driver.mass

    restored = ChimeDynamics()
    restore_snapshot(restored, tmp_path / "snap")
    np.testing.assert_allclose(restored.state, dynamics.state)
    assert restored.force.magnitude == pytest.approx(dynamics.force.magnitude)
    assert restored.force.direction == -1


def test_snapshot_rejects_unknown_format(tmp_path) -> None:
    save_snapshot(ChimeDynamics().state_dict(), tmp_path / "snap")
    meta_path = tmp_path / "snap.meta.json"
    meta = json.loads(meta_path.read_text(encoding="utf-8"))
    meta["format"] = 99
    meta_path.write_text(json.dumps(meta), encoding="utf-8")
    with pytest.raises(ValueError):
        load_snapshot(tmp_path / "snap")


def test_history_to_csv(tmp_path) -> None:
    history = FrameHistory()
    history.append(time=0.016, angles=np.array([0.1, 0.2]), lifecycle="running")
    history.append(time=0.032, angles=np.array([0.3, 0.4]), lifecycle="settling")
    path = tmp_path / "frames.csv"
    history.to_csv(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "time,angles,lifecycle"
    assert lines[1] == "0.016,0.1;0.2,running"
    assert len(lines) == 3


def test_history_max_length() -> None:
    history = FrameHistory(max_length=3)
    for i in range(5):
        history.append(time=float(i))
    assert len(history) == 3
    np.testing.assert_array_equal(history.get("time"), [2.0, 3.0, 4.0])
    assert history.get("missing").size == 0


def test_stream_from_arrays_and_records() -> None:
    stream = PointerEventStream.from_arrays(
        ["enter", "move", "leave"], [0.0, 5.0, 5.0], [0.0, 0.0, 0.0], [0.0, 16.0, 32.0]
    )
    assert len(stream) == 3
    copy = PointerEventStream.from_records(stream.to_records())
    assert list(copy) == list(stream)


def test_stream_length_mismatch() -> None:
    with pytest.raises(ValueError):
        PointerEventStream.from_arrays(["enter"], [0.0, 1.0], [0.0], [0.0])


def test_replay_sweep_returns_to_idle() -> None:
    clock = ManualFrameClock()
    history = FrameHistory()
    scheduler = InteractionScheduler(clock=clock, history=history)
    stream = horizontal_sweep(100.0, 40.0, step_px=5.0, n_moves=10)
    frames = replay(stream, scheduler, clock, frame_interval_ms=16.0)
    assert frames > 10
    assert scheduler.state == LifecycleState.IDLE
    assert clock.is_idle()
    lifecycle = list(history.get("lifecycle"))
    assert "running" in lifecycle and "settling" in lifecycle
    assert np.abs(history.get("angles")[:, 0]).max() > 0.0


def test_history_rows_stay_aligned(tmp_path) -> None:
    history = FrameHistory()
    history.append(time=0.0, lifecycle="running")
    history.append(time=0.016)
    history.append(time=0.032, lifecycle="settling")
    assert history.keys() == ["time", "lifecycle"]
    assert list(history.get("lifecycle")) == ["running", "settling"]
    assert history.last() == {"time": 0.032, "lifecycle": "settling"}
    path = tmp_path / "out" / "frames.csv"
    history.to_csv(path)
    assert path.read_text(encoding="utf-8").splitlines()[2] == "0.016,"
