"""
Presentation adapters: observers turning scheduler output into visual state.

Every adapter writes into an optional sink and silently skips a missing one,
so a detached widget never interrupts the simulation.
"""

import logging
import math
import time
from typing import Any, Callable, Dict, Mapping, Optional

from windchime.interaction.observer import ChimeObserver
from windchime.physics.coupled import ChimeAngles

logger = logging.getLogger(__name__)

# Element name -> ChimeAngles field.
DEFAULT_ELEMENTS: Dict[str, str] = {
    "group4": "driver",
    "union": "follower",
    "line1": "connector1",
    "line2": "connector2",
}


def rotate_transform(angle_rad: float, precision: int = 2) -> str:
    """CSS-style rotation string for an angle in radians."""
    return f"rotate({round(math.degrees(angle_rad), precision)}deg)"


class TransformAdapter(ChimeObserver):
    """
    Writes rotate(...) transforms for each chime element.

    The sink is either a mutable mapping (element name -> transform string) or
    any object with set_transform(name, value). Elements missing from a
    mapping sink are skipped unless create_missing is set.
    """

    def __init__(
        self,
        sink: Optional[Any] = None,
        elements: Optional[Mapping[str, str]] = None,
        precision: int = 2,
        create_missing: bool = False,
    ) -> None:
        self.sink = sink
        self.elements = dict(elements or DEFAULT_ELEMENTS)
        self.precision = precision
        self.create_missing = create_missing

    def attach(self, sink: Any) -> None:
        self.sink = sink

    def detach(self) -> None:
        self.sink = None

    def transforms(self, angles: ChimeAngles) -> Dict[str, str]:
        return {
            name: rotate_transform(getattr(angles, field), self.precision)
            for name, field in self.elements.items()
        }

    def on_frame(self, angles: ChimeAngles, is_moving: bool) -> None:
        sink = self.sink
        if sink is None:
            return
        for name, value in self.transforms(angles).items():
            if hasattr(sink, "set_transform"):
                sink.set_transform(name, value)
            elif name in sink or self.create_missing:
                sink[name] = value


class StatusLabelAdapter(ChimeObserver):
    """Toggles the "is the wind blowing?" answer between yes and no."""

    def __init__(self, sink: Optional[Dict[str, Any]] = None, yes: str = "yes", no: str = "no") -> None:
        self.sink = sink
        self.yes = yes
        self.no = no
        self.text = no

    def on_moving_changed(self, is_moving: bool) -> None:
        self.text = self.yes if is_moving else self.no
        if self.sink is not None:
            self.sink["status"] = self.text


class ChimeCue(ChimeObserver):
    """
    One-shot cue (e.g. a bell sound) fired on each not-moving -> moving edge.

    Cues closer than min_interval_s to the previous one are dropped; time is
    read from clock (seconds, time.monotonic by default).
    """

    def __init__(
        self,
        callback: Callable[[], None],
        min_interval_s: float = 0.0,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.callback = callback
        self.min_interval_s = float(min_interval_s)
        self._clock = clock or time.monotonic
        self._last: Optional[float] = None
        self.count = 0

    def on_motion_started(self) -> None:
        now = self._clock()
        if self._last is not None and now - self._last < self.min_interval_s:
            logger.debug("Cue suppressed (%.3f s since previous)", now - self._last)
            return
        self._last = now
        self.count += 1
        self.callback()
