"""
Physics of the chime.

Hierarchy:
  - integrators: numerical integration (SemiImplicitEuler, Euler, RK4)
  - oscillator: single damped, clamped rotational oscillator
  - coupled: driver/follower system, external force, ChimeDynamics
"""

from windchime.physics.integrators import (
    EulerIntegrator,
    RK4Integrator,
    SemiImplicitEulerIntegrator,
    euler_step,
    rk4_step,
    semi_implicit_euler_step,
)
from windchime.physics.oscillator import Oscillator
from windchime.physics.coupled import (
    ChimeAngles,
    ChimeDynamics,
    CoupledSystem,
    ExternalForce,
    SwingJitter,
    clamp_dt,
)

__all__ = [
    # Integrators
    "SemiImplicitEulerIntegrator",
    "EulerIntegrator",
    "RK4Integrator",
    "semi_implicit_euler_step",
    "euler_step",
    "rk4_step",
    # Models
    "Oscillator",
    "CoupledSystem",
    "ExternalForce",
    "SwingJitter",
    "ChimeAngles",
    "ChimeDynamics",
    "clamp_dt",
]
