"""Save and load chime configurations and dynamics snapshots."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import numpy as np

from windchime.config import ChimeConfig

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT = 1


def _convert(d: Any) -> Any:
    """Convert numpy values to plain Python for JSON."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, np.generic):
        return d.item()
    return d


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """Write a dict as indented JSON; numpy values become lists and scalars."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(_convert(config), indent=2, ensure_ascii=False), encoding="utf-8")


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


def save_chime_config(config: ChimeConfig, path: Union[str, Path]) -> None:
    save_config(config.to_dict(), path)


def load_chime_config(path: Union[str, Path]) -> ChimeConfig:
    """Load a ChimeConfig; keys missing from the file keep their defaults."""
    config = ChimeConfig.from_dict(load_config(path))
    logger.info("Loaded chime configuration from %s", path)
    return config


def _snapshot_paths(path: Union[str, Path]) -> Tuple[Path, Path]:
    path = Path(path)
    return path.with_suffix(".npz"), path.with_suffix(".meta.json")


def save_snapshot(state_dict: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Persist ChimeDynamics.state_dict().

    Top-level arrays (the state vector) go to <path>.npz; the force and the
    per-oscillator parameters go to <path>.meta.json.
    """
    npz_path, meta_path = _snapshot_paths(path)
    npz_path.parent.mkdir(parents=True, exist_ok=True)
    arrays = {k: np.asarray(v) for k, v in state_dict.items() if isinstance(v, np.ndarray)}
    meta = {k: v for k, v in state_dict.items() if k not in arrays}
    meta["format"] = SNAPSHOT_FORMAT
    np.savez(npz_path, **arrays)
    save_config(meta, meta_path)


def load_snapshot(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a snapshot back into a single dict (arrays and metadata merged)."""
    npz_path, meta_path = _snapshot_paths(path)
    with np.load(npz_path) as npz:
        data: Dict[str, Any] = {k: npz[k] for k in npz.files}
    if meta_path.exists():
        meta = load_config(meta_path)
        version = meta.pop("format", SNAPSHOT_FORMAT)
        if version != SNAPSHOT_FORMAT:
            raise ValueError(f"Unsupported snapshot format {version} in {meta_path}")
        data.update(meta)
    return data


def restore_snapshot(dynamics: Any, path: Union[str, Path]) -> Dict[str, Any]:
    """Load a snapshot into an existing ChimeDynamics (state vector and pending force)."""
    data = load_snapshot(path)
    if "state" not in data:
        raise ValueError(f"Snapshot {path} has no state vector")
    dynamics.initialize(state=data["state"])
    magnitude = float(data.get("force_magnitude", 0.0))
    if magnitude > 0.0:
        dynamics.force.set(magnitude, int(data.get("force_direction", 1)))
    return data
