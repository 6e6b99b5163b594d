"""
Pointer sampling: turns raw pointer motion into discrete force impulses.

Samples are rate-limited; horizontal displacement above a threshold yields a
push away from the moving hand, whose size grows with pointer speed and with
the distance from the widget's rest center. Slow hovering far from the
center yields a small restoring nudge toward the center instead.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from windchime.config import SamplerParams
from windchime.interaction.events import PointerEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForceImpulse:
    magnitude: float
    direction: int
    timestamp_ms: float
    restoring: bool = False


class PointerSampler:
    """Rate-limited conversion of pointer positions into ForceImpulse values."""

    def __init__(self, params: Optional[SamplerParams] = None) -> None:
        self.params = params or SamplerParams()
        self._center: Optional[Tuple[float, float]] = None
        self._last_x: Optional[float] = None
        self._last_y: Optional[float] = None
        self._last_ts: Optional[float] = None

    @property
    def center(self) -> Optional[Tuple[float, float]]:
        return self._center

    def set_center(self, x: float, y: float) -> None:
        """Rest center of the widget in pointer coordinates."""
        self._center = (float(x), float(y))

    def clear_center(self) -> None:
        self._center = None

    @property
    def has_baseline(self) -> bool:
        return self._last_ts is not None

    @property
    def last_sample_ms(self) -> Optional[float]:
        """Timestamp of the last accepted (or seeding) sample."""
        return self._last_ts

    def seed(self, x: float, y: float, timestamp_ms: float) -> None:
        """Start a new gesture at (x, y)."""
        self._last_x, self._last_y, self._last_ts = float(x), float(y), float(timestamp_ms)

    def clear(self) -> None:
        self._last_x = self._last_y = self._last_ts = None

    def offset_from_center(self, x: float) -> float:
        if self._center is None:
            return 0.0
        return x - self._center[0]

    def sample(self, event: PointerEvent) -> Optional[ForceImpulse]:
        """
        Process one move sample.

        Returns:
            The impulse to apply, or None if the sample was rate-limited,
            anomalous or too small to matter.
        """
        if self._last_ts is None:
            self.seed(event.x, event.y, event.timestamp_ms)
            return None
        elapsed = event.timestamp_ms - self._last_ts
        if elapsed < 0.0:
            logger.debug(
                "Out-of-order pointer sample (%.1f ms < %.1f ms), rebaselining",
                event.timestamp_ms,
                self._last_ts,
            )
            self._last_x, self._last_y = event.x, event.y
            return None
        if elapsed < self.params.sample_interval_ms:
            return None

        dx = event.x - self._last_x
        dy = event.y - self._last_y
        speed = math.hypot(dx, dy) / max(elapsed, 1e-3)
        self.seed(event.x, event.y, event.timestamp_ms)

        p = self.params
        offset = self.offset_from_center(event.x)
        if abs(dx) > p.movement_threshold:
            direction = -1 if dx > 0 else 1
            magnitude = min(speed * p.speed_gain + abs(offset) * p.offset_gain, p.force_cap)
            return ForceImpulse(magnitude, direction, event.timestamp_ms)
        if self._center is not None and abs(offset) > p.restoring_offset_threshold:
            direction = -1 if offset > 0 else 1
            magnitude = min(abs(offset) * p.restoring_gain, p.restoring_cap)
            return ForceImpulse(magnitude, direction, event.timestamp_ms, restoring=True)
        return None
