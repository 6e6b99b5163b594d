"""
windchime: interactive wind chime driven by coupled pendulum physics.
"""

import logging

__version__ = "0.1.0"

from windchime.config import ChimeConfig
from windchime.core.errors import ConfigurationError
from windchime.interaction.events import PointerEvent
from windchime.interaction.scheduler import InteractionScheduler, LifecycleState
from windchime.physics.coupled import ChimeAngles, ChimeDynamics

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "ChimeConfig",
    "ConfigurationError",
    "PointerEvent",
    "InteractionScheduler",
    "LifecycleState",
    "ChimeAngles",
    "ChimeDynamics",
]
