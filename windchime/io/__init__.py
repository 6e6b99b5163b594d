"""Input/output: configuration files and recorded pointer streams."""

from windchime.io.serializers import (
    load_chime_config,
    load_config,
    load_snapshot,
    restore_snapshot,
    save_chime_config,
    save_config,
    save_snapshot,
)
from windchime.io.streams import PointerEventStream, horizontal_sweep, replay

__all__ = [
    "PointerEventStream",
    "horizontal_sweep",
    "replay",
    "save_config",
    "load_config",
    "save_chime_config",
    "load_chime_config",
    "save_snapshot",
    "load_snapshot",
    "restore_snapshot",
]
