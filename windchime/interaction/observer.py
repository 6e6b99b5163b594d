"""Observer interface between the scheduler and the presentation layer."""

from typing import Any

from windchime.physics.coupled import ChimeAngles


class ChimeObserver:
    """
    Receives the scheduler output. All hooks are no-ops; override what you need.
    """

    def on_frame(self, angles: ChimeAngles, is_moving: bool) -> None:
        """Called after every simulation step (and once with zero angles on reset)."""
        pass

    def on_moving_changed(self, is_moving: bool) -> None:
        pass

    def on_motion_started(self) -> None:
        """Called only on the not-moving -> moving edge."""
        pass

    def on_state_changed(self, old: Any, new: Any) -> None:
        pass
