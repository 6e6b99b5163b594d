"""Tests for the oscillators and the coupled dynamics model."""

import math

import numpy as np
import pytest

from windchime.config import MAX_DT, MIN_DT, ChimeConfig, ConnectorWeights
from windchime.core.errors import ConfigurationError
from windchime.physics import (
    ChimeDynamics,
    ExternalForce,
    Oscillator,
    RK4Integrator,
    SwingJitter,
    clamp_dt,
)


def _run(dynamics: ChimeDynamics, n: int, dt: float = 0.016) -> np.ndarray:
    states = []
    for _ in range(n):
        states.append(dynamics.step(dt)["state"])
    return np.array(states)


def test_unit_push_settles_within_fifty_frames() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(1.0, +1)
    for _ in range(50):
        dynamics.step(0.016)
    assert abs(dynamics.driver.angle) < 1e-3
    assert abs(dynamics.follower.angle) < 1e-3
    assert dynamics.is_at_rest()


def test_free_decay_converges_and_respects_clamps() -> None:
    dynamics = ChimeDynamics()
    dynamics.initialize(state=[0.5, 0.0, -0.3, 0.0])
    states = _run(dynamics, 200)
    assert np.all(np.abs(states[:, 0]) <= dynamics.driver.max_angle)
    assert np.all(np.abs(states[:, 2]) <= dynamics.follower.max_angle)
    assert np.all(np.abs(states[-1]) < 1e-3)
    assert dynamics.is_at_rest()


def test_push_makes_the_chime_swing() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(2.0, +1)
    states = _run(dynamics, 10)
    assert states[:, 0].max() > 0.05
    assert np.abs(states[:, 2]).max() > 0.0
    assert not dynamics.is_at_rest()


def test_reset_is_idempotent() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(2.5, -1)
    _run(dynamics, 5)
    dynamics.reset()
    once = dynamics.state_dict()
    dynamics.reset()
    twice = dynamics.state_dict()
    np.testing.assert_array_equal(once["state"], twice["state"])
    assert once["force_magnitude"] == twice["force_magnitude"] == 0.0
    assert dynamics.is_at_rest(0.0, 0.0, 0.0)
    assert dynamics.is_at_rest(1e-9, 1e-9, 1e-9)


def test_zero_force_does_not_change_velocity() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(1.0, +1)
    dynamics.step(0.016)
    before = dynamics.driver.angular_velocity
    dynamics.apply_force(0.0, +1)
    assert dynamics.driver.angular_velocity == before
    dynamics.apply_force(0.0, -1)
    assert dynamics.driver.angular_velocity == before


def test_apply_force_overwrites_instead_of_accumulating() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(2.0, +1)
    dynamics.apply_force(0.5, -1)
    assert dynamics.force.magnitude == 0.5
    assert dynamics.force.direction == -1


def test_apply_force_kick_matches_torque_over_inertia() -> None:
    dynamics = ChimeDynamics()
    driver = dynamics.driver
    dynamics.apply_force(1.0, +1)
    expected = 1.0 * driver.length / driver.moment_of_inertia * dynamics.force_time_scale
    assert driver.angular_velocity == pytest.approx(expected)


def test_driver_velocity_is_clamped() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(1000.0, +1)
    assert dynamics.driver.angular_velocity == pytest.approx(8.0)
    dynamics.apply_force(1000.0, -1)
    dynamics.apply_force(1000.0, -1)
    assert dynamics.driver.angular_velocity == pytest.approx(-8.0)


def test_angles_never_exceed_max_angle_under_sustained_forcing() -> None:
    dynamics = ChimeDynamics()
    for i in range(300):
        dynamics.apply_force(3.0, +1 if (i // 20) % 2 == 0 else -1)
        dynamics.step(0.033)
        assert abs(dynamics.driver.angle) <= dynamics.driver.max_angle
        assert abs(dynamics.follower.angle) <= dynamics.follower.max_angle
        assert abs(dynamics.driver.angular_velocity) <= dynamics.driver.max_angular_velocity


def test_mirror_symmetry() -> None:
    plus = ChimeDynamics()
    minus = ChimeDynamics()
    plus.apply_force(1.5, +1)
    minus.apply_force(1.5, -1)
    for _ in range(60):
        sp = plus.step(0.016)["state"]
        sm = minus.step(0.016)["state"]
        np.testing.assert_allclose(sp, -sm, atol=1e-12)


def test_follower_settles_at_fraction_of_held_driver_angle() -> None:
    dynamics = ChimeDynamics()
    system = dynamics.system
    held = 0.2
    for _ in range(300):
        system.driver.angle = held
        system.driver.angular_velocity = 0.0
        system.follower.advance(system.coupling_torque(), 0.016, system.integrator)
    follower = system.follower.angle
    k = system.coupling_strength
    assert 0.0 < follower < held
    assert follower == pytest.approx(held * k / (1.0 + k), abs=2e-3)


def test_step_is_deterministic() -> None:
    a = ChimeDynamics()
    b = ChimeDynamics()
    for dyn in (a, b):
        dyn.apply_force(2.2, -1)
    np.testing.assert_array_equal(_run(a, 40), _run(b, 40))


def test_large_frame_gap_is_clamped() -> None:
    a = ChimeDynamics()
    b = ChimeDynamics()
    a.apply_force(1.0, +1)
    b.apply_force(1.0, +1)
    out = a.step(5.0)
    b.step(MAX_DT)
    assert out["dt"] == MAX_DT
    np.testing.assert_array_equal(a.state, b.state)


@pytest.mark.parametrize("dt", [0.0, -0.016, float("nan"), float("inf") * -1])
def test_invalid_dt_becomes_minimal_step(dt: float) -> None:
    assert clamp_dt(dt) == MIN_DT
    dynamics = ChimeDynamics()
    assert dynamics.step(dt)["dt"] == MIN_DT


def test_clamp_dt_passes_normal_frames() -> None:
    assert clamp_dt(0.016) == 0.016
    assert clamp_dt(1.0) == MAX_DT


def test_step_output() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(2.0, +1)
    out = dynamics.step(0.016)
    assert set(out) == {"state", "output", "dt"}
    assert out["state"].shape == (4,)
    angles = out["output"]
    assert angles.driver == dynamics.driver.angle
    assert angles.follower == dynamics.follower.angle
    assert angles.connector1 == pytest.approx(angles.follower * 0.85)
    assert angles.connector2 == pytest.approx(angles.follower * 0.7 + angles.driver * 0.3)


def test_external_force_decays_every_step() -> None:
    dynamics = ChimeDynamics()
    dynamics.apply_force(1.0, +1)
    dynamics.step(0.016)
    dynamics.step(0.016)
    assert dynamics.force.magnitude == pytest.approx(0.85 ** 2)


def test_external_force_never_negative() -> None:
    force = ExternalForce(0.5)
    force.set(-3.0, -1)
    assert force.magnitude == 0.0
    force.set(2.0, -1)
    force.decay()
    assert force.magnitude == 1.0
    assert force.torque(0.5) == -0.5


def test_seeded_jitter_is_reproducible() -> None:
    def trajectory(seed: int) -> np.ndarray:
        dynamics = ChimeDynamics(jitter=SwingJitter(0.5, seed=seed))
        states = []
        for _ in range(5):
            dynamics.apply_force(1.0, +1)
            states.append(dynamics.step(0.016)["state"])
        return np.array(states)

    np.testing.assert_array_equal(trajectory(7), trajectory(7))
    assert not np.array_equal(trajectory(7), trajectory(8))


def test_rk4_integrator_also_decays() -> None:
    dynamics = ChimeDynamics()
    dynamics.system.integrator = RK4Integrator()
    dynamics.apply_force(1.0, +1)
    _run(dynamics, 120)
    assert dynamics.is_at_rest()


def test_from_config_uses_config_values() -> None:
    config = ChimeConfig()
    config.driver.max_angle = 0.3
    config.force.decay_rate = 0.5
    dynamics = config.build_dynamics()
    assert dynamics.driver.max_angle == 0.3
    assert dynamics.force.decay_rate == 0.5
    assert dynamics.jitter is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mass": 0.0},
        {"length": -1.0},
        {"moment_of_inertia": 0.0},
        {"moment_of_inertia": float("nan")},
        {"damping": 1.0},
        {"damping": 0.0},
        {"max_angle": 0.0},
    ],
)
def test_invalid_oscillator_parameters_fail_fast(kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        Oscillator(**kwargs)


def test_default_moment_of_inertia() -> None:
    osc = Oscillator(mass=2.0, length=0.5)
    assert osc.moment_of_inertia == pytest.approx(0.5)


def test_gravity_torque_restores() -> None:
    osc = Oscillator()
    osc.angle = 0.1
    assert osc.gravity_torque() < 0.0
    osc.angle = -0.1
    assert osc.gravity_torque() > 0.0
    assert osc.gravity_torque(0.0) == 0.0


def test_hitting_the_clamp_stops_outward_motion() -> None:
    osc = Oscillator(max_angle=0.1)
    osc.angle = 0.099
    osc.angular_velocity = 5.0
    osc.advance(0.0, 0.016)
    assert osc.angle == 0.1
    assert osc.angular_velocity == 0.0


def test_invalid_connector_weights() -> None:
    with pytest.raises(ConfigurationError):
        ChimeDynamics(connectors=ConnectorWeights(connector1=0.85, follower=0.5, driver=0.2))


def test_invalid_decay_rate() -> None:
    with pytest.raises(ConfigurationError):
        ExternalForce(1.0)


def test_angles_in_degrees() -> None:
    dynamics = ChimeDynamics()
    dynamics.initialize(state=[math.radians(10.0), 0.0, math.radians(5.0), 0.0])
    degrees = dynamics.angles.as_degrees()
    assert degrees["driver"] == pytest.approx(10.0)
    assert degrees["follower"] == pytest.approx(5.0)
    assert degrees["connector1"] == pytest.approx(4.25)
