"""Tests for pointer sampling into force impulses."""

import pytest

from windchime.config import SamplerParams
from windchime.interaction import PointerEvent, PointerSampler


def test_first_sample_only_seeds() -> None:
    sampler = PointerSampler()
    assert sampler.sample(PointerEvent.move(100.0, 50.0, 0.0)) is None
    assert sampler.has_baseline


def test_rightward_motion_pushes_left() -> None:
    sampler = PointerSampler()
    sampler.seed(100.0, 50.0, 0.0)
    impulse = sampler.sample(PointerEvent.move(105.0, 50.0, 16.0))
    assert impulse is not None
    assert impulse.direction == -1
    # speed 5 px / 16 ms * gain 2.0
    assert impulse.magnitude == pytest.approx(0.625)
    assert not impulse.restoring


def test_leftward_motion_pushes_right() -> None:
    sampler = PointerSampler()
    sampler.seed(100.0, 50.0, 0.0)
    impulse = sampler.sample(PointerEvent.move(90.0, 50.0, 16.0))
    assert impulse is not None
    assert impulse.direction == +1


def test_rate_limit_accumulates_displacement() -> None:
    sampler = PointerSampler()
    sampler.seed(100.0, 50.0, 0.0)
    assert sampler.sample(PointerEvent.move(103.0, 50.0, 8.0)) is None
    impulse = sampler.sample(PointerEvent.move(108.0, 50.0, 16.0))
    assert impulse is not None
    assert impulse.magnitude == pytest.approx(8.0 / 16.0 * 2.0)


def test_force_is_capped() -> None:
    sampler = PointerSampler()
    sampler.seed(0.0, 0.0, 0.0)
    impulse = sampler.sample(PointerEvent.move(400.0, 0.0, 16.0))
    assert impulse is not None
    assert impulse.magnitude == pytest.approx(3.0)


def test_offset_from_center_adds_force() -> None:
    sampler = PointerSampler()
    sampler.set_center(100.0, 0.0)
    sampler.seed(145.0, 0.0, 0.0)
    impulse = sampler.sample(PointerEvent.move(150.0, 0.0, 16.0))
    assert impulse is not None
    assert impulse.magnitude == pytest.approx(0.625 + 50.0 * 0.004)


def test_small_motion_without_center_is_ignored() -> None:
    sampler = PointerSampler()
    sampler.seed(100.0, 0.0, 0.0)
    assert sampler.sample(PointerEvent.move(100.5, 0.0, 16.0)) is None


def test_slow_hover_far_from_center_nudges_back() -> None:
    sampler = PointerSampler()
    sampler.set_center(100.0, 0.0)
    sampler.seed(160.0, 0.0, 0.0)
    impulse = sampler.sample(PointerEvent.move(160.5, 0.0, 16.0))
    assert impulse is not None
    assert impulse.restoring
    assert impulse.direction == -1
    assert impulse.magnitude == pytest.approx(60.5 * 0.002)

    sampler.seed(-100.0, 0.0, 100.0)
    impulse = sampler.sample(PointerEvent.move(-100.0, 0.0, 116.0))
    assert impulse is not None
    assert impulse.direction == +1
    assert impulse.magnitude == pytest.approx(0.3)


def test_slow_hover_near_center_does_nothing() -> None:
    sampler = PointerSampler()
    sampler.set_center(100.0, 0.0)
    sampler.seed(110.0, 0.0, 0.0)
    assert sampler.sample(PointerEvent.move(110.5, 0.0, 16.0)) is None


def test_out_of_order_sample_is_absorbed() -> None:
    sampler = PointerSampler()
    sampler.seed(100.0, 0.0, 100.0)
    assert sampler.sample(PointerEvent.move(300.0, 0.0, 50.0)) is None
    # Rebaselined at x=300, earlier timestamp kept.
    impulse = sampler.sample(PointerEvent.move(305.0, 0.0, 116.0))
    assert impulse is not None
    assert impulse.magnitude == pytest.approx(0.625)


def test_custom_params() -> None:
    sampler = PointerSampler(SamplerParams(sample_interval_ms=0.0, movement_threshold=10.0))
    sampler.seed(0.0, 0.0, 0.0)
    assert sampler.sample(PointerEvent.move(5.0, 0.0, 1.0)) is None
    assert sampler.sample(PointerEvent.move(20.0, 0.0, 2.0)) is not None


def test_clear_drops_baseline() -> None:
    sampler = PointerSampler()
    sampler.seed(0.0, 0.0, 0.0)
    sampler.clear()
    assert not sampler.has_baseline
    assert sampler.sample(PointerEvent.move(50.0, 0.0, 16.0)) is None
