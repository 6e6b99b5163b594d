"""
Frame clocks: the injected "next frame" capability of the scheduler.

A clock schedules one-shot frame callbacks (called with the frame timestamp in
ms) and one-shot timers; every handle can be cancelled. ManualFrameClock runs
on synthetic time so the whole lifecycle is testable without a display loop.
"""

import itertools
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]
TimerCallback = Callable[[], None]


class FrameClock(ABC):
    """Interface used by the scheduler to get per-frame callbacks and timers."""

    @abstractmethod
    def now_ms(self) -> float:
        pass

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Run callback(now_ms) once, at the next frame. Returns a cancellable handle."""
        pass

    @abstractmethod
    def call_later(self, delay_ms: float, callback: TimerCallback) -> int:
        """Run callback() once after delay_ms. Returns a cancellable handle."""
        pass

    @abstractmethod
    def cancel(self, handle: int) -> None:
        """Cancel a frame or timer. Unknown or already fired handles are ignored."""
        pass


class ManualFrameClock(FrameClock):
    """
    Clock driven by explicit advance() calls.

    advance(ms) moves time forward, fires the timers that became due (in due
    order) and then the frame callbacks requested before the call.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._handles = itertools.count(1)
        self._frames: Dict[int, FrameCallback] = {}
        self._timers: Dict[int, Tuple[float, TimerCallback]] = {}

    def now_ms(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._frames[handle] = callback
        return handle

    def call_later(self, delay_ms: float, callback: TimerCallback) -> int:
        handle = next(self._handles)
        self._timers[handle] = (self._now + max(float(delay_ms), 0.0), callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._frames.pop(handle, None)
        self._timers.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def is_idle(self) -> bool:
        return not self._frames and not self._timers

    def _fire(self) -> None:
        due: List[Tuple[float, int]] = sorted(
            (when, handle) for handle, (when, _) in self._timers.items() if when <= self._now
        )
        for _, handle in due:
            entry = self._timers.pop(handle, None)
            if entry is not None:
                entry[1]()
        frames = list(self._frames.items())
        self._frames.clear()
        for _, callback in frames:
            callback(self._now)

    def advance(self, ms: float) -> None:
        self._now += max(float(ms), 0.0)
        self._fire()

    def run_frames(self, n: int, interval_ms: float = 16.0) -> None:
        for _ in range(n):
            self.advance(interval_ms)


class SleepingFrameClock(ManualFrameClock):
    """Real-time clock for scripts: sleeps between frames on time.monotonic()."""

    def __init__(self, frame_interval_ms: float = 1000.0 / 60.0) -> None:
        self._origin = time.monotonic()
        super().__init__(start_ms=0.0)
        self.frame_interval_ms = float(frame_interval_ms)

    def _real_now(self) -> float:
        return (time.monotonic() - self._origin) * 1000.0

    def now_ms(self) -> float:
        return self._real_now()

    def call_later(self, delay_ms: float, callback: TimerCallback) -> int:
        self._now = self._real_now()
        return super().call_later(delay_ms, callback)

    def advance(self, ms: float) -> None:
        """Wait ms of real time, then fire whatever is due. Time cannot be skipped."""
        time.sleep(max(float(ms), 0.0) / 1000.0)
        self._now = self._real_now()
        self._fire()

    def pump(self) -> None:
        """Sleep one frame interval, then fire whatever is due."""
        self.advance(self.frame_interval_ms)

    def run_until_idle(self, timeout_s: float = 10.0) -> bool:
        """Pump frames and timers until nothing is pending. False on timeout."""
        deadline = time.monotonic() + timeout_s
        while not self.is_idle():
            if time.monotonic() >= deadline:
                logger.warning("Frame clock still busy after %.1f s", timeout_s)
                return False
            self.pump()
        return True
