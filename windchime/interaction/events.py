"""Pointer events delivered by the presentation layer."""

from dataclasses import dataclass
from enum import Enum


class PointerEventType(str, Enum):
    ENTER = "enter"
    LEAVE = "leave"
    MOVE = "move"


@dataclass(frozen=True)
class PointerEvent:
    """One pointer sample: type, position in px and timestamp in ms."""

    type: PointerEventType
    x: float
    y: float
    timestamp_ms: float

    @classmethod
    def enter(cls, x: float, y: float, timestamp_ms: float) -> "PointerEvent":
        return cls(PointerEventType.ENTER, float(x), float(y), float(timestamp_ms))

    @classmethod
    def leave(cls, x: float, y: float, timestamp_ms: float) -> "PointerEvent":
        return cls(PointerEventType.LEAVE, float(x), float(y), float(timestamp_ms))

    @classmethod
    def move(cls, x: float, y: float, timestamp_ms: float) -> "PointerEvent":
        return cls(PointerEventType.MOVE, float(x), float(y), float(timestamp_ms))
