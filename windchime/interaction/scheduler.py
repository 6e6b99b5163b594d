"""
Interaction scheduler: animation lifecycle of one chime instance.

Idle -> Running on pointer enter (or a strong enough move while idle);
Running -> Settling on pointer leave; Settling -> Idle once the dynamics are
at rest or the grace timer fires. While Running or Settling a frame loop on
the injected FrameClock steps the dynamics once per frame, applying at most
one pending force impulse per step.
"""

import logging
from enum import Enum
from typing import Any, List, Optional

from windchime.config import ChimeConfig, SchedulerParams
from windchime.core.history import FrameHistory
from windchime.interaction.clock import FrameClock, ManualFrameClock
from windchime.interaction.events import PointerEvent, PointerEventType
from windchime.interaction.observer import ChimeObserver
from windchime.interaction.sampler import ForceImpulse, PointerSampler
from windchime.physics.coupled import ChimeAngles, ChimeDynamics

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLING = "settling"


class InteractionScheduler:
    """
    Drives one ChimeDynamics from pointer events and frame callbacks.

    Every instance owns its own dynamics, sampler and timers; nothing is
    shared between instances.
    """

    def __init__(
        self,
        dynamics: Optional[ChimeDynamics] = None,
        clock: Optional[FrameClock] = None,
        sampler: Optional[PointerSampler] = None,
        params: Optional[SchedulerParams] = None,
        observers: Optional[List[ChimeObserver]] = None,
        history: Optional[FrameHistory] = None,
    ) -> None:
        """
        Args:
            dynamics: physics model to drive (default: shipped chime).
            clock: frame/timer provider (default: ManualFrameClock).
            sampler: pointer sampler (default parameters).
            params: activation threshold, settle grace period, nominal frame interval.
            observers: presentation observers notified every frame.
            history: optional per-frame log.
        """
        self.dynamics = dynamics or ChimeDynamics()
        self.clock = clock or ManualFrameClock()
        self.sampler = sampler or PointerSampler()
        self.params = params or SchedulerParams()
        self.history = history
        self._observers: List[ChimeObserver] = list(observers or [])
        self._state = LifecycleState.IDLE
        self._frame_handle: Optional[int] = None
        self._settle_handle: Optional[int] = None
        self._last_frame_ms: Optional[float] = None
        self._pending: Optional[ForceImpulse] = None
        self._sampled_since_frame = False
        self._moving = False
        self._time = 0.0

    @classmethod
    def from_config(
        cls,
        config: ChimeConfig,
        clock: Optional[FrameClock] = None,
        observers: Optional[List[ChimeObserver]] = None,
        history: Optional[FrameHistory] = None,
    ) -> "InteractionScheduler":
        return cls(
            dynamics=config.build_dynamics(),
            clock=clock,
            sampler=PointerSampler(config.sampler),
            params=config.scheduler,
            observers=observers,
            history=history,
        )

    # --- read-only views -------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_moving(self) -> bool:
        return self._moving

    @property
    def is_looping(self) -> bool:
        """True while a frame callback is pending."""
        return self._frame_handle is not None

    @property
    def angles(self) -> ChimeAngles:
        return self.dynamics.angles

    @property
    def time(self) -> float:
        """Simulated time in seconds since construction."""
        return self._time

    def add_observer(self, observer: ChimeObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: ChimeObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # --- pointer input ---------------------------------------------------

    def handle_event(self, event: PointerEvent) -> None:
        if event.type == PointerEventType.ENTER:
            self.on_enter(event)
        elif event.type == PointerEventType.LEAVE:
            self.on_leave(event)
        else:
            self.on_move(event)

    def on_enter(self, event: PointerEvent) -> None:
        self.sampler.seed(event.x, event.y, event.timestamp_ms)
        if self._state == LifecycleState.IDLE:
            self._transition(LifecycleState.RUNNING)
            self._start_loop()
        elif self._state == LifecycleState.SETTLING:
            self._cancel_settle_timer()
            self._transition(LifecycleState.RUNNING)
            self._start_loop()

    def on_leave(self, event: PointerEvent) -> None:
        self.sampler.clear()
        self._pending = None
        if self._state != LifecycleState.RUNNING:
            return
        self._transition(LifecycleState.SETTLING)
        self._cancel_settle_timer()
        self._settle_handle = self.clock.call_later(self.params.settle_grace_ms, self._on_settle_timeout)
        self._start_loop()

    def on_move(self, event: PointerEvent) -> None:
        if self._state == LifecycleState.SETTLING:
            return
        previous_ms = self.sampler.last_sample_ms
        impulse = self.sampler.sample(event)
        accepted = self.sampler.last_sample_ms != previous_ms
        if self._state == LifecycleState.IDLE:
            if impulse is None or impulse.magnitude <= self.params.activation_threshold:
                return
            self._transition(LifecycleState.RUNNING)
        if impulse is not None:
            # Latest sample wins: at most one force update per step.
            self._pending = impulse
        elif not accepted:
            return
        # Any accepted sample keeps the loop awake, forcing or not.
        self._sampled_since_frame = True
        self._start_loop()

    # --- loop control ----------------------------------------------------

    def stop(self) -> None:
        """Cancel the frame loop and the grace timer, reset, go Idle. Idempotent."""
        self._cancel_settle_timer()
        self._stop_loop()
        self._pending = None
        self._sampled_since_frame = False
        self.sampler.clear()
        self.dynamics.reset()
        self._set_moving(False)
        if self._state != LifecycleState.IDLE:
            self._transition(LifecycleState.IDLE)

    def close(self) -> None:
        self.stop()
        self._observers.clear()

    def _start_loop(self) -> None:
        if self._frame_handle is None:
            self._last_frame_ms = None
            self._frame_handle = self.clock.request_frame(self._on_frame)

    def _stop_loop(self) -> None:
        if self._frame_handle is not None:
            self.clock.cancel(self._frame_handle)
            self._frame_handle = None
        self._last_frame_ms = None

    def _cancel_settle_timer(self) -> None:
        if self._settle_handle is not None:
            self.clock.cancel(self._settle_handle)
            self._settle_handle = None

    def _on_frame(self, now_ms: float) -> None:
        self._frame_handle = None
        if self._last_frame_ms is None:
            dt_ms = self.params.frame_interval_ms
        else:
            dt_ms = now_ms - self._last_frame_ms
        self._last_frame_ms = now_ms

        impulse, self._pending = self._pending, None
        sampled, self._sampled_since_frame = self._sampled_since_frame, False
        if impulse is not None and self._state == LifecycleState.RUNNING:
            self.dynamics.apply_force(impulse.magnitude, impulse.direction)

        out = self.dynamics.step(dt_ms / 1000.0)
        self._time += out["dt"]
        at_rest = self.dynamics.is_at_rest()
        self._set_moving(not at_rest)
        angles = out["output"]
        self._notify("on_frame", angles, self._moving)
        if self.history is not None:
            self.history.append(
                time=self._time,
                frame_ms=now_ms,
                state=out["state"],
                angles=angles.to_array(),
                lifecycle=self._state.value,
                moving=self._moving,
            )

        if at_rest and self._state == LifecycleState.SETTLING:
            self._finish_settling()
            return
        if at_rest and not sampled:
            logger.debug("Chime at rest, frame loop sleeping")
            self._last_frame_ms = None
            return
        self._frame_handle = self.clock.request_frame(self._on_frame)

    def _on_settle_timeout(self) -> None:
        self._settle_handle = None
        if self._state == LifecycleState.SETTLING:
            logger.debug("Settle grace period elapsed, forcing reset")
            self._finish_settling()

    def _finish_settling(self) -> None:
        self._cancel_settle_timer()
        self._stop_loop()
        self.dynamics.reset()
        self._set_moving(False)
        self._notify("on_frame", self.dynamics.angles, False)
        self._transition(LifecycleState.IDLE)

    # --- notifications ---------------------------------------------------

    def _transition(self, new: LifecycleState) -> None:
        old = self._state
        if old == new:
            return
        self._state = new
        logger.debug("Lifecycle %s -> %s", old.value, new.value)
        self._notify("on_state_changed", old, new)

    def _set_moving(self, moving: bool) -> None:
        if moving == self._moving:
            return
        self._moving = moving
        self._notify("on_moving_changed", moving)
        if moving:
            self._notify("on_motion_started")

    def _notify(self, hook: str, *args: Any) -> None:
        for observer in list(self._observers):
            try:
                getattr(observer, hook)(*args)
            except Exception:
                # Presentation failures must not stop the physics.
                logger.exception("Observer %r failed in %s", observer, hook)
