"""
Coupled driver/follower dynamics of the chime.

The driver takes the pointer-derived forcing; the follower is tied to it by
an angular spring and a velocity coupling term, so its motion is a smoothed,
phase-lagged copy of the driver's. ChimeDynamics is the stepped component
the interaction scheduler drives once per frame.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from windchime.config import (
    FORCE_TIME_SCALE,
    GRAVITY,
    MAX_DT,
    MIN_DT,
    ChimeConfig,
    ConnectorWeights,
    RestThresholds,
)
from windchime.core.component import SimulationComponent
from windchime.core.errors import ConfigurationError
from windchime.physics.integrators import SemiImplicitEulerIntegrator
from windchime.physics.oscillator import Oscillator

logger = logging.getLogger(__name__)


def clamp_dt(dt: float) -> float:
    """Clamp a frame duration to [MIN_DT, MAX_DT]; invalid values become MIN_DT."""
    dt = float(dt)
    if not math.isfinite(dt) or dt <= 0.0:
        logger.debug("Non-positive frame duration %r replaced by %s", dt, MIN_DT)
        return MIN_DT
    return min(max(dt, MIN_DT), MAX_DT)


class ExternalForce:
    """Transient push on the driver; decays every step, never negative."""

    def __init__(self, decay_rate: float = 0.85) -> None:
        decay_rate = float(decay_rate)
        if not 0.0 < decay_rate < 1.0:
            raise ConfigurationError(f"decay_rate must be in (0, 1), got {decay_rate!r}")
        self.decay_rate = decay_rate
        self.magnitude = 0.0
        self.direction = 1

    def set(self, magnitude: float, direction: int) -> None:
        """Overwrite the current force (no accumulation)."""
        self.magnitude = max(float(magnitude), 0.0)
        self.direction = -1 if direction < 0 else 1

    def torque(self, lever_arm: float) -> float:
        return self.magnitude * lever_arm * self.direction

    def decay(self) -> None:
        self.magnitude *= self.decay_rate

    def clear(self) -> None:
        self.magnitude = 0.0
        self.direction = 1


class SwingJitter:
    """
    Seeded random scaling of applied forces.

    Each call to factor() returns 1 + amplitude * U(-0.5, 0.5); the same seed
    replays the same sequence.
    """

    def __init__(self, amplitude: float = 0.2, seed: Optional[int] = None) -> None:
        if amplitude < 0.0:
            raise ConfigurationError(f"jitter amplitude must be >= 0, got {amplitude!r}")
        self.amplitude = float(amplitude)
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def factor(self) -> float:
        return 1.0 + self.amplitude * float(self._rng.uniform(-0.5, 0.5))

    def reseed(self, seed: Optional[int] = None) -> None:
        self.seed = self.seed if seed is None else seed
        self._rng = np.random.default_rng(self.seed)


@dataclass(frozen=True)
class ChimeAngles:
    """Rotation angles (radians) published after every step."""

    driver: float = 0.0
    follower: float = 0.0
    connector1: float = 0.0
    connector2: float = 0.0

    @classmethod
    def from_angles(cls, driver: float, follower: float, weights: ConnectorWeights) -> "ChimeAngles":
        return cls(
            driver=driver,
            follower=follower,
            connector1=follower * weights.connector1,
            connector2=follower * weights.follower + driver * weights.driver,
        )

    def as_degrees(self) -> Dict[str, float]:
        return {
            "driver": math.degrees(self.driver),
            "follower": math.degrees(self.follower),
            "connector1": math.degrees(self.connector1),
            "connector2": math.degrees(self.connector2),
        }

    def to_array(self) -> np.ndarray:
        return np.array([self.driver, self.follower, self.connector1, self.connector2])


class CoupledSystem:
    """
    Two oscillators in a fixed driver -> follower relationship.

    Follower torque = gravity + coupling_strength * (theta_d - theta_f) * m_f * g * L_f
                      + coupling_damping * (omega_d - omega_f) * I_f
    """

    def __init__(
        self,
        driver: Oscillator,
        follower: Oscillator,
        coupling_strength: float = 0.6,
        coupling_damping: float = 1.0,
        gravity: float = GRAVITY,
        integrator: Optional[Any] = None,
    ) -> None:
        if coupling_strength < 0.0 or coupling_damping < 0.0:
            raise ConfigurationError("coupling constants must be >= 0")
        self.driver = driver
        self.follower = follower
        self.coupling_strength = float(coupling_strength)
        self.coupling_damping = float(coupling_damping)
        self.gravity = float(gravity)
        self.integrator = integrator or SemiImplicitEulerIntegrator()

    def coupling_torque(self) -> float:
        d, f = self.driver, self.follower
        spring = self.coupling_strength * (d.angle - f.angle) * f.mass * self.gravity * f.length
        drag = self.coupling_damping * (d.angular_velocity - f.angular_velocity) * f.moment_of_inertia
        return spring + drag

    def advance(self, external_torque: float, dt: float) -> None:
        """Driver first, then the follower against the updated driver."""
        self.driver.advance(external_torque, dt, self.integrator)
        self.follower.advance(self.coupling_torque(), dt, self.integrator)

    def reset(self) -> None:
        self.driver.reset()
        self.follower.reset()

    @property
    def state(self) -> np.ndarray:
        return np.concatenate([self.driver.state, self.follower.state])

    def set_state(self, state: np.ndarray) -> None:
        x = np.atleast_1d(np.asarray(state, dtype=float)).ravel()
        if x.size != 4:
            raise ValueError(f"state must have length 4, got {x.size}")
        self.driver.angle, self.driver.angular_velocity = float(x[0]), float(x[1])
        self.follower.angle, self.follower.angular_velocity = float(x[2]), float(x[3])
        for osc in (self.driver, self.follower):
            osc.angle = min(max(osc.angle, -osc.max_angle), osc.max_angle)
            osc.clamp_velocity()


class ChimeDynamics(SimulationComponent):
    """
    Dynamics model of the chime: owns the CoupledSystem and the ExternalForce.

    apply_force() gives the driver an immediate velocity kick and stores the
    force for the following steps; step() advances both oscillators and lets
    the force decay.
    """

    def __init__(
        self,
        system: Optional[CoupledSystem] = None,
        force: Optional[ExternalForce] = None,
        rest: Optional[RestThresholds] = None,
        connectors: Optional[ConnectorWeights] = None,
        force_time_scale: float = FORCE_TIME_SCALE,
        jitter: Optional[SwingJitter] = None,
    ) -> None:
        """
        Args:
            system: coupled oscillators (default: shipped chime parameters).
            force: external force holder (default decay 0.85).
            rest: default thresholds of is_at_rest().
            connectors: blend weights of the connector angles.
            force_time_scale: scale of the velocity kick in apply_force().
            jitter: optional seeded force randomisation.
        """
        if system is None:
            config = ChimeConfig()
            system = CoupledSystem(
                Oscillator.from_params(config.driver),
                Oscillator.from_params(config.follower),
                coupling_strength=config.coupling.strength,
                coupling_damping=config.coupling.damping,
            )
        self.system = system
        self.force = force or ExternalForce()
        self.rest = rest or RestThresholds()
        self.connectors = connectors or ConnectorWeights()
        if not math.isclose(self.connectors.follower + self.connectors.driver, 1.0):
            raise ConfigurationError("connector2 weights must sum to 1")
        self.force_time_scale = float(force_time_scale)
        self.jitter = jitter

    @classmethod
    def from_config(cls, config: ChimeConfig) -> "ChimeDynamics":
        system = CoupledSystem(
            Oscillator.from_params(config.driver, gravity=config.gravity),
            Oscillator.from_params(config.follower, gravity=config.gravity),
            coupling_strength=config.coupling.strength,
            coupling_damping=config.coupling.damping,
            gravity=config.gravity,
        )
        jitter = None
        if config.jitter_amplitude > 0.0:
            jitter = SwingJitter(config.jitter_amplitude, seed=config.jitter_seed)
        return cls(
            system=system,
            force=ExternalForce(config.force.decay_rate),
            rest=config.rest,
            connectors=config.connectors,
            force_time_scale=config.force.time_scale,
            jitter=jitter,
        )

    @property
    def driver(self) -> Oscillator:
        return self.system.driver

    @property
    def follower(self) -> Oscillator:
        return self.system.follower

    @property
    def state(self) -> np.ndarray:
        return self.system.state

    @property
    def angles(self) -> ChimeAngles:
        return ChimeAngles.from_angles(self.driver.angle, self.follower.angle, self.connectors)

    def initialize(self, **kwargs: Any) -> None:
        state = kwargs.get("state")
        self.reset()
        if state is not None:
            self.system.set_state(state)

    def apply_force(self, magnitude: float, direction: int) -> None:
        """
        Push the driver: torque = magnitude * L * direction, accel = torque / I,
        omega += accel * force_time_scale, then clamp omega.
        """
        magnitude = float(magnitude)
        if not math.isfinite(magnitude) or magnitude < 0.0:
            logger.debug("Ignoring invalid force magnitude %r", magnitude)
            magnitude = 0.0
        if direction == 0:
            magnitude = 0.0
        if magnitude > 0.0 and self.jitter is not None:
            magnitude *= self.jitter.factor()
        self.force.set(magnitude, int(np.sign(direction)) or 1)
        if magnitude == 0.0:
            return
        driver = self.driver
        accel = self.force.torque(driver.length) / driver.moment_of_inertia
        driver.angular_velocity += accel * self.force_time_scale
        driver.clamp_velocity()

    def step(self, dt: float, **kwargs: Any) -> Dict[str, Any]:
        dt = clamp_dt(dt)
        self.system.advance(self.force.torque(self.driver.length), dt)
        self.force.decay()
        return {"state": self.state, "output": self.angles, "dt": dt}

    def reset(self) -> None:
        self.system.reset()
        self.force.clear()

    def is_at_rest(
        self,
        velocity_threshold: Optional[float] = None,
        angle_threshold: Optional[float] = None,
        force_threshold: Optional[float] = None,
    ) -> bool:
        """True when both oscillators and the external force are within the thresholds."""
        v = self.rest.velocity if velocity_threshold is None else velocity_threshold
        a = self.rest.angle if angle_threshold is None else angle_threshold
        f = self.rest.force if force_threshold is None else force_threshold
        for osc in (self.driver, self.follower):
            if abs(osc.angle) > a or abs(osc.angular_velocity) > v:
                return False
        return self.force.magnitude <= f

    def state_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "force_magnitude": self.force.magnitude,
            "force_direction": self.force.direction,
            "driver": self.driver.state_dict(),
            "follower": self.follower.state_dict(),
        }
