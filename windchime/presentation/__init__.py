"""Presentation observers: transforms, status label, motion cue."""

from windchime.presentation.adapters import (
    DEFAULT_ELEMENTS,
    ChimeCue,
    StatusLabelAdapter,
    TransformAdapter,
    rotate_transform,
)

__all__ = [
    "DEFAULT_ELEMENTS",
    "ChimeCue",
    "StatusLabelAdapter",
    "TransformAdapter",
    "rotate_transform",
]
