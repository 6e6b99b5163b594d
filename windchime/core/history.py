"""Per-frame log of the chime: one row per rendered frame, with numpy and CSV export."""

import csv
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, Iterator, List, Optional, Union

import numpy as np


class FrameHistory:
    """
    Bounded log of frame rows (time, state vector, angles, lifecycle, ...).

    Rows are kept whole, so columns stay aligned even when a frame omits a key;
    get() returns only the frames that carry the key.
    """

    def __init__(self, max_length: Optional[int] = None) -> None:
        """
        Args:
            max_length: keep only the most recent frames (None = unlimited).
        """
        self._rows: Deque[Dict[str, Any]] = deque(maxlen=max_length)

    @property
    def max_length(self) -> Optional[int]:
        return self._rows.maxlen

    def append(self, **fields: Any) -> None:
        """Log one frame."""
        self._rows.append(dict(fields))

    def clear(self) -> None:
        self._rows.clear()

    def last(self) -> Optional[Dict[str, Any]]:
        return dict(self._rows[-1]) if self._rows else None

    def keys(self) -> List[str]:
        """Column names in first-seen order."""
        seen: Dict[str, None] = {}
        for row in self._rows:
            for key in row:
                seen.setdefault(key, None)
        return list(seen)

    def get(self, key: str) -> np.ndarray:
        """Column as a numpy array; vector fields stack to shape (n_frames, n)."""
        values = [row[key] for row in self._rows if key in row]
        if not values:
            return np.array([])
        return np.asarray(values)

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {k: self.get(k) for k in self.keys()}

    def to_numpy(self, keys: Optional[List[str]] = None) -> Dict[str, np.ndarray]:
        available = self.keys()
        return {k: self.get(k) for k in (keys or available) if k in available}

    def to_csv(
        self,
        path: Union[str, Path],
        keys: Optional[List[str]] = None,
        delimiter: str = ",",
    ) -> None:
        """
        Write one line per frame. Vector cells are joined with ';',
        a key missing from a frame leaves its cell empty.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        columns = keys or self.keys()
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, delimiter=delimiter, lineterminator="\n")
            if not columns:
                return
            writer.writerow(columns)
            for row in self._rows:
                writer.writerow([_cell(row.get(k)) for k in columns])

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return (dict(row) for row in self._rows)

    def __len__(self) -> int:
        return len(self._rows)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, np.ndarray)):
        return ";".join(str(x) for x in np.ravel(value).tolist())
    if isinstance(value, np.generic):
        return str(value.item())
    return str(value)
