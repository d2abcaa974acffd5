"""Resolve an RGB colour to a calibrated temperature."""

from typing import Optional

import numpy as np

from .calibration import CalibrationTable
from .utilities import pack_rgb

# RGB-distance below which a scanned candidate is accepted immediately.
DEFAULT_MATCH_THRESHOLD = 10.0


class ColorResolver:
    """Exact lookup, then an early-exit nearest-neighbour scan.

    The scan walks the table in insertion order. The first entry closer than
    ``match_threshold`` wins; otherwise the closest entry wins, the earliest
    one on ties. ``None`` means the table is empty.
    """

    def __init__(self, table: CalibrationTable, match_threshold: float = DEFAULT_MATCH_THRESHOLD):
        self.table = table
        self.match_threshold = float(match_threshold)

    def resolve(self, r: int, g: int, b: int) -> Optional[float]:
        exact = self.table.get(pack_rgb(r, g, b))
        if exact is not None:
            return exact
        return self.nearest(r, g, b)

    def nearest(self, r: int, g: int, b: int) -> Optional[float]:
        """Nearest-neighbour scan only, skipping the exact lookup."""
        if len(self.table) == 0:
            return None
        colors, temperatures = self.table.as_arrays()
        diff = colors - np.array([r, g, b], dtype=np.int32)
        distances = np.sqrt(np.einsum("ij,ij->i", diff, diff).astype(np.float64))

        close = np.flatnonzero(distances < self.match_threshold)
        index = close[0] if close.size else int(np.argmin(distances))
        return float(temperatures[index])
