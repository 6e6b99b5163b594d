"""Core: component interface, errors and frame history."""

from windchime.core.component import SimulationComponent
from windchime.core.errors import ConfigurationError
from windchime.core.history import FrameHistory

__all__ = ["SimulationComponent", "ConfigurationError", "FrameHistory"]
