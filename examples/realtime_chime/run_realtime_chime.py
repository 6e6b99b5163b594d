"""
Real-time example: drive the chime on a sleeping frame clock and print a text gauge.
"""

import logging
import sys
from pathlib import Path

# Add the repository root to the path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from windchime.interaction import (
    ChimeObserver,
    InteractionScheduler,
    PointerEvent,
    SleepingFrameClock,
)
from windchime.logging_config import setup_logging
from windchime.physics import ChimeAngles


class TextGauge(ChimeObserver):
    """Prints a bar for the driver angle every few frames."""

    def __init__(self, every: int = 4) -> None:
        self.every = every
        self._n = 0

    def on_frame(self, angles: ChimeAngles, is_moving: bool) -> None:
        self._n += 1
        if self._n % self.every:
            return
        deg = angles.as_degrees()["driver"]
        bar = "#" * min(int(abs(deg) * 2), 40)
        print(f"{deg:+7.2f} deg {'<' if deg < 0 else '>'} {bar}")

    def on_state_changed(self, old, new) -> None:
        print(f"-- {old.value} -> {new.value}")


def main() -> None:
    setup_logging(logging.INFO)
    clock = SleepingFrameClock()
    scheduler = InteractionScheduler(clock=clock, observers=[TextGauge()])

    scheduler.handle_event(PointerEvent.enter(100.0, 40.0, clock.now_ms()))
    for i in range(1, 9):
        clock.pump()
        scheduler.handle_event(PointerEvent.move(100.0 + 15.0 * i, 40.0, clock.now_ms()))
    clock.pump()
    scheduler.handle_event(PointerEvent.leave(220.0, 40.0, clock.now_ms()))

    if not clock.run_until_idle(timeout_s=5.0):
        scheduler.stop()
    print("Done.")


if __name__ == "__main__":
    main()
