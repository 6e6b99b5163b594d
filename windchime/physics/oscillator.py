"""
Single rotational oscillator (one swinging part of the chime).

State [angle, angular_velocity]; dynamics
    I * d(omega)/dt = -m * g * L * sin(angle) + torque
with multiplicative velocity damping per step and hard clamps on both the
angle and the angular velocity.
"""

import math
from typing import Any, Dict, Optional

import numpy as np

from windchime.config import GRAVITY, MAX_ANGULAR_VELOCITY, OscillatorParams
from windchime.core.errors import ConfigurationError
from windchime.physics.integrators import SemiImplicitEulerIntegrator


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")
    return value


class Oscillator:
    """
    Physical pendulum with fixed parameters and a mutable (angle, velocity) state.

    Invariant after every update: |angle| <= max_angle and
    |angular_velocity| <= max_angular_velocity.
    """

    def __init__(
        self,
        mass: float = 1.0,
        length: float = 0.03,
        damping: float = 0.78,
        max_angle: float = 0.6,
        moment_of_inertia: Optional[float] = None,
        max_angular_velocity: float = MAX_ANGULAR_VELOCITY,
        gravity: float = GRAVITY,
    ) -> None:
        """
        Args:
            mass: mass of the part (> 0).
            length: lever arm from the pivot (> 0).
            damping: velocity factor applied once per step, in (0, 1).
            max_angle: symmetric angle clamp in radians (> 0).
            moment_of_inertia: I (> 0); defaults to mass * length**2.
            max_angular_velocity: symmetric velocity clamp (> 0).
            gravity: gravitational acceleration of the restoring torque.
        """
        self.mass = _require_positive("mass", mass)
        self.length = _require_positive("length", length)
        if moment_of_inertia is None:
            moment_of_inertia = self.mass * self.length ** 2
        self.moment_of_inertia = _require_positive("moment_of_inertia", moment_of_inertia)
        damping = float(damping)
        if not 0.0 < damping < 1.0:
            raise ConfigurationError(f"damping must be in (0, 1), got {damping!r}")
        self.damping = damping
        self.max_angle = _require_positive("max_angle", max_angle)
        self.max_angular_velocity = _require_positive("max_angular_velocity", max_angular_velocity)
        self.gravity = float(gravity)
        self.angle = 0.0
        self.angular_velocity = 0.0

    @classmethod
    def from_params(cls, params: OscillatorParams, gravity: float = GRAVITY) -> "Oscillator":
        return cls(
            mass=params.mass,
            length=params.length,
            damping=params.damping,
            max_angle=params.max_angle,
            moment_of_inertia=params.moment_of_inertia,
            max_angular_velocity=params.max_angular_velocity,
            gravity=gravity,
        )

    @property
    def state(self) -> np.ndarray:
        return np.array([self.angle, self.angular_velocity], dtype=float)

    def gravity_torque(self, angle: Optional[float] = None) -> float:
        """Restoring torque -m * g * L * sin(angle) (current angle by default)."""
        if angle is None:
            angle = self.angle
        return -self.mass * self.gravity * self.length * math.sin(angle)

    def rhs(self, x: np.ndarray, u: np.ndarray, t: float) -> np.ndarray:
        """dx/dt for x = [angle, omega]; u[0] is the applied (non-gravity) torque."""
        applied = float(u[0]) if u.size else 0.0
        alpha = (self.gravity_torque(float(x[0])) + applied) / self.moment_of_inertia
        return np.array([x[1], alpha])

    def clamp_velocity(self) -> None:
        limit = self.max_angular_velocity
        self.angular_velocity = min(max(self.angular_velocity, -limit), limit)

    def advance(self, torque: float, dt: float, integrator: Optional[Any] = None) -> None:
        """
        Integrate one step under an applied torque, then damp and clamp.

        Args:
            torque: non-gravity torque acting during the step.
            dt: step duration (already clamped by the caller).
            integrator: object with step(f, x, u, t, dt); default semi-implicit Euler.
        """
        integrator = integrator or SemiImplicitEulerIntegrator()
        x_next = integrator.step(self.rhs, self.state, np.array([torque]), 0.0, dt)
        angle = float(x_next[0])
        self.angular_velocity = float(x_next[1]) * self.damping
        self.clamp_velocity()
        if abs(angle) > self.max_angle:
            angle = math.copysign(self.max_angle, angle)
            # Hitting the stop kills the outward motion.
            if self.angular_velocity * angle > 0.0:
                self.angular_velocity = 0.0
        self.angle = angle

    def reset(self) -> None:
        self.angle = 0.0
        self.angular_velocity = 0.0

    def state_dict(self) -> Dict[str, Any]:
        return {
            "angle": self.angle,
            "angular_velocity": self.angular_velocity,
            "mass": self.mass,
            "length": self.length,
            "moment_of_inertia": self.moment_of_inertia,
            "damping": self.damping,
            "max_angle": self.max_angle,
        }
