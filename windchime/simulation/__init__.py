"""
Simulation helpers: plots of recorded chime runs (matplotlib optional).
"""

from windchime.simulation._utils import (
    ANGLE_NAMES,
    STATE_NAMES,
    plot_angles_vs_time,
    plot_phase_portrait,
)

__all__ = [
    "ANGLE_NAMES",
    "STATE_NAMES",
    "plot_angles_vs_time",
    "plot_phase_portrait",
]
