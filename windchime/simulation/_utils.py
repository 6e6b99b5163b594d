"""
Visualization utilities: chime angles vs time and oscillator phase portraits.

All functions accept either a FrameHistory (keys 'time', 'state', 'angles')
or raw arrays. Matplotlib is optional; without it the functions raise
ImportError.
"""

from typing import Any, List, Optional, Tuple

import numpy as np

ANGLE_NAMES = ["driver", "follower", "connector1", "connector2"]
STATE_NAMES = ["driver angle", "driver omega", "follower angle", "follower omega"]


def _get_series(
    key: str,
    history: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    values: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Resolve (time, values) from a history key or from raw arrays."""
    if history is not None:
        series = history.get(key)
        if series.size == 0:
            raise ValueError(f"History has no '{key}' records.")
        t = history.get("time")
        if t.size == 0:
            t = np.arange(len(series), dtype=float)
        return np.asarray(t, dtype=float).ravel(), np.atleast_2d(series.T).T
    if time is not None and values is not None:
        return np.asarray(time, dtype=float).ravel(), np.atleast_2d(np.asarray(values).T).T
    raise ValueError(f"Provide either history= or (time=, values=) for '{key}'.")


def plot_angles_vs_time(
    history: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    angles: Optional[np.ndarray] = None,
    names: Optional[List[str]] = None,
    degrees: bool = True,
    ax: Optional[Any] = None,
    title: str = "Chime angles",
    **kwargs: Any,
) -> Any:
    """
    Plot the published angles (driver, follower, connectors) on one axes.

    Args:
        history: FrameHistory with 'angles' and 'time'.
        time, angles: raw arrays if history is not used (angles shape (N, k)).
        names: labels per column (default driver/follower/connector1/connector2).
        degrees: convert radians to degrees.
        ax: matplotlib axes (if None, creates a new figure).
        title: axes title.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_angles_vs_time.")
    t, values = _get_series("angles", history=history, time=time, values=angles)
    if degrees:
        values = np.degrees(values)
    names = list(names or ANGLE_NAMES)
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(8, 4))
    for i in range(values.shape[1]):
        label = names[i] if i < len(names) else f"a{i}"
        ax.plot(t, values[:, i], label=label, **kwargs)
    ax.set_xlabel("time [s]")
    ax.set_ylabel("angle [deg]" if degrees else "angle [rad]")
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize=8)
    ax.grid(True, alpha=0.3)
    return ax


def plot_phase_portrait(
    history: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    oscillator: str = "driver",
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    **kwargs: Any,
) -> Any:
    """
    Plot angle vs angular velocity of one oscillator.

    Args:
        history: FrameHistory with 'state' ([theta_d, omega_d, theta_f, omega_f]).
        time, state: raw arrays if history is not used.
        oscillator: "driver" or "follower".
        ax: matplotlib axes (if None, creates a new figure).
        title: axes title (default: "<oscillator> phase portrait").
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_phase_portrait.")
    if oscillator not in ("driver", "follower"):
        raise ValueError(f"oscillator must be 'driver' or 'follower', got {oscillator!r}")
    _, st = _get_series("state", history=history, time=time, values=state)
    offset = 0 if oscillator == "driver" else 2
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    ax.plot(st[:, offset], st[:, offset + 1], **kwargs)
    ax.set_xlabel("angle [rad]")
    ax.set_ylabel("angular velocity [rad/s]")
    ax.set_title(title or f"{oscillator} phase portrait")
    ax.grid(True, alpha=0.3)
    return ax
