"""
Numerical integrators for second-order rotational states.

Pure numerical level: no dependency on SimulationComponent.
Interface: step(f, x, u, t, dt) -> x_next, where x = [angle, angular_velocity]
(or any sequence of [position, velocity] pairs) and f(x, u, t) -> dx/dt.
"""

from typing import Callable

import numpy as np

# Type for the right-hand side: (x, u, t) -> dx/dt
RHS = Callable[[np.ndarray, np.ndarray, float], np.ndarray]


def semi_implicit_euler_step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
    """
    Semi-implicit (symplectic) Euler: velocity first, then position with the new velocity.
    x is laid out as [pos0, vel0, pos1, vel1, ...].
    """
    k = f(x, u, t)
    x_next = np.array(x, dtype=float, copy=True)
    x_next[1::2] = x[1::2] + dt * k[1::2]
    x_next[0::2] = x[0::2] + dt * x_next[1::2]
    return x_next


def euler_step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
    """Explicit Euler, order 1: x_{n+1} = x_n + dt * f(x_n, u_n, t_n)."""
    return x + dt * f(x, u, t)


def rk4_step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
    """Runge-Kutta 4, order 4. The input u is held constant over the step."""
    k1 = f(x, u, t)
    k2 = f(x + 0.5 * dt * k1, u, t + 0.5 * dt)
    k3 = f(x + 0.5 * dt * k2, u, t + 0.5 * dt)
    k4 = f(x + dt * k3, u, t + dt)
    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class SemiImplicitEulerIntegrator:
    """Semi-implicit Euler integrator (default for the chime)."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
        return semi_implicit_euler_step(f, x, u, t, dt)


class EulerIntegrator:
    """Explicit Euler integrator, order 1."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
        return euler_step(f, x, u, t, dt)


class RK4Integrator:
    """Runge-Kutta 4 integrator, order 4."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
        return rk4_step(f, x, u, t, dt)
