"""Base interface for the stepped components of the chime."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class SimulationComponent(ABC):
    """
    Base interface for every component advanced once per frame:
    dynamics model, coupled system, future alternative models.
    """

    @abstractmethod
    def initialize(self, **kwargs: Any) -> None:
        """Initialize the component (state, parameters)."""
        pass

    @abstractmethod
    def step(self, dt: float, **kwargs: Any) -> Dict[str, Any]:
        """
        Advance by one frame.

        Args:
            dt: elapsed time in seconds (implementations clamp it)
            **kwargs: extra arguments for extensions

        Returns:
            Dictionary with the component output ("state", "output", ...).
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Return to the rest state. Must be idempotent."""
        pass

    def state_dict(self) -> Dict[str, Any]:
        """
        Internal state for snapshots/serialization.
        Override for stateful components.
        """
        return {}
