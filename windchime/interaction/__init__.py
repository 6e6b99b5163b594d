"""Interaction: pointer events, frame clocks, sampling and the lifecycle scheduler."""

from windchime.interaction.clock import FrameClock, ManualFrameClock, SleepingFrameClock
from windchime.interaction.events import PointerEvent, PointerEventType
from windchime.interaction.observer import ChimeObserver
from windchime.interaction.sampler import ForceImpulse, PointerSampler
from windchime.interaction.scheduler import InteractionScheduler, LifecycleState

__all__ = [
    "FrameClock",
    "ManualFrameClock",
    "SleepingFrameClock",
    "PointerEvent",
    "PointerEventType",
    "ChimeObserver",
    "ForceImpulse",
    "PointerSampler",
    "InteractionScheduler",
    "LifecycleState",
]
