"""Recorded pointer-event streams and their replay through a scheduler."""

from typing import Any, Dict, Iterable, Iterator, List, Sequence

import numpy as np

from windchime.interaction.clock import ManualFrameClock
from windchime.interaction.events import PointerEvent, PointerEventType


class PointerEventStream:
    """
    Batch stream: a pre-loaded sequence of pointer events for replay or simulation.
    """

    def __init__(self, events: Iterable[PointerEvent]) -> None:
        self._events: List[PointerEvent] = list(events)
        self._index = 0

    @classmethod
    def from_arrays(
        cls,
        types: Sequence[str],
        x: Sequence[float],
        y: Sequence[float],
        timestamps_ms: Sequence[float],
    ) -> "PointerEventStream":
        """
        Args:
            types: event types ("enter", "leave", "move"), one per sample
            x, y: pointer positions (px)
            timestamps_ms: sample times (ms)
        """
        x_arr = np.asarray(x, dtype=float)
        y_arr = np.asarray(y, dtype=float)
        t_arr = np.asarray(timestamps_ms, dtype=float)
        if not (len(types) == len(x_arr) == len(y_arr) == len(t_arr)):
            raise ValueError("types, x, y and timestamps_ms must have the same length")
        events = [
            PointerEvent(PointerEventType(kind), float(xi), float(yi), float(ti))
            for kind, xi, yi, ti in zip(types, x_arr, y_arr, t_arr)
        ]
        return cls(events)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "PointerEventStream":
        """Build from dicts with keys type, x, y, timestamp_ms (e.g. a JSON log)."""
        return cls(
            PointerEvent(
                PointerEventType(r["type"]),
                float(r["x"]),
                float(r["y"]),
                float(r["timestamp_ms"]),
            )
            for r in records
        )

    def to_records(self) -> List[Dict[str, Any]]:
        return [
            {"type": e.type.value, "x": e.x, "y": e.y, "timestamp_ms": e.timestamp_ms}
            for e in self._events
        ]

    def __iter__(self) -> Iterator[PointerEvent]:
        self._index = 0
        return self

    def __next__(self) -> PointerEvent:
        if self._index >= len(self._events):
            raise StopIteration
        event = self._events[self._index]
        self._index += 1
        return event

    def __len__(self) -> int:
        return len(self._events)

    def reset(self) -> None:
        self._index = 0


def horizontal_sweep(
    x0: float,
    y: float,
    step_px: float,
    n_moves: int,
    interval_ms: float = 16.0,
    start_ms: float = 0.0,
    leave: bool = True,
) -> PointerEventStream:
    """Synthetic gesture: enter at x0, n_moves moves of step_px, then leave."""
    events = [PointerEvent.enter(x0, y, start_ms)]
    for i in range(1, n_moves + 1):
        events.append(PointerEvent.move(x0 + i * step_px, y, start_ms + i * interval_ms))
    if leave:
        t_leave = start_ms + n_moves * interval_ms
        events.append(PointerEvent.leave(x0 + n_moves * step_px, y, t_leave))
    return PointerEventStream(events)


def replay(
    stream: PointerEventStream,
    scheduler: Any,
    clock: ManualFrameClock,
    frame_interval_ms: float = 16.0,
    drain: bool = True,
    max_drain_ms: float = 10000.0,
) -> int:
    """
    Feed a recorded stream to a scheduler, advancing the clock frame by frame
    so each event lands between the frames around its timestamp.

    Args:
        stream: events in timestamp order.
        scheduler: InteractionScheduler driven by `clock`.
        clock: synthetic clock shared with the scheduler.
        frame_interval_ms: frame spacing.
        drain: keep advancing after the last event until the clock is idle.
        max_drain_ms: bound on the drain phase.

    Returns:
        Number of frames advanced.
    """
    frames = 0
    for event in stream:
        while clock.now_ms() + frame_interval_ms <= event.timestamp_ms:
            clock.advance(frame_interval_ms)
            frames += 1
        scheduler.handle_event(event)
    if drain:
        budget = max_drain_ms
        while not clock.is_idle() and budget > 0:
            clock.advance(frame_interval_ms)
            frames += 1
            budget -= frame_interval_ms
    return frames
