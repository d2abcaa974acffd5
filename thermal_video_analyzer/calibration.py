"""Build the colour → temperature calibration table from X,Y,R,G,B,Temperature_C rows."""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from .exceptions import CalibrationLoadError
from .models import CalibrationEntry
from .utilities import is_channel, pack_rgb, unpack_rgb

logger = logging.getLogger(__name__)

# Column positions in a calibration row: X,Y,R,G,B,Temperature_C
COL_R, COL_G, COL_B, COL_TEMP = 2, 3, 4, 5
MIN_FIELDS = 6


class CalibrationTable:
    """Packed RGB key → temperature (°C).

    Iteration follows insertion order. Re-inserting a colour replaces its
    temperature but keeps its original position.
    """

    def __init__(self, entries: Optional[Iterable[CalibrationEntry]] = None):
        self._mapping: Dict[int, float] = {}
        self._colors: Optional[np.ndarray] = None
        self._temperatures: Optional[np.ndarray] = None
        for entry in entries or ():
            self.add(*entry.color, entry.temperature)

    def add(self, r: int, g: int, b: int, temperature: float) -> None:
        if not (is_channel(r) and is_channel(g) and is_channel(b)):
            raise ValueError(f"RGB values must be between 0 and 255, got ({r}, {g}, {b})")
        self._mapping[pack_rgb(r, g, b)] = float(temperature)
        self._colors = None
        self._temperatures = None

    def get(self, key: int) -> Optional[float]:
        return self._mapping.get(key)

    def __contains__(self, key: int) -> bool:
        return key in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[CalibrationEntry]:
        for key, temperature in self._mapping.items():
            yield CalibrationEntry(unpack_rgb(key), temperature)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (colors[N, 3] int32, temperatures[N] float64) in insertion order."""
        if self._colors is None:
            keys = np.fromiter(self._mapping.keys(), dtype=np.int64, count=len(self._mapping))
            self._colors = np.stack(
                [(keys >> 16) & 0xFF, (keys >> 8) & 0xFF, keys & 0xFF], axis=1
            ).astype(np.int32)
            self._temperatures = np.fromiter(
                self._mapping.values(), dtype=np.float64, count=len(self._mapping)
            )
        return self._colors, self._temperatures


def parse_calibration_row(row: Sequence[str]) -> Optional[CalibrationEntry]:
    """Parse one data row; None if it is short, malformed or out of range."""
    if len(row) < MIN_FIELDS:
        return None
    try:
        r = int(row[COL_R])
        g = int(row[COL_G])
        b = int(row[COL_B])
        temperature = float(row[COL_TEMP])
    except (TypeError, ValueError):
        return None
    if not (is_channel(r) and is_channel(g) and is_channel(b)):
        return None
    return CalibrationEntry((r, g, b), temperature)


def parse_calibration_rows(rows: Iterable[Sequence[str]]) -> Tuple[CalibrationTable, int]:
    """Build a table from raw rows; the first row is a header and is always skipped.

    Returns (table, skipped_row_count). Duplicate colours: last row wins.
    """
    table = CalibrationTable()
    skipped = 0
    rows = iter(rows)
    next(rows, None)
    for row in rows:
        entry = parse_calibration_row(row)
        if entry is None:
            skipped += 1
            continue
        table.add(*entry.color, entry.temperature)
    return table, skipped


def load_calibration_csv(file_path: Union[str, Path]) -> CalibrationTable:
    """Read a calibration CSV; raise CalibrationLoadError if no row is usable."""
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with open(file_path, "r", newline="", encoding="utf-8-sig") as f:
            table, skipped = parse_calibration_rows(csv.reader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise CalibrationLoadError(f"Could not read calibration file {file_path}: {e}") from e

    if skipped:
        logger.warning("Skipped %d unusable calibration rows in %s", skipped, file_path)
    if len(table) == 0:
        raise CalibrationLoadError(f"No usable calibration data in {file_path}")

    logger.info("Temperature mapping loaded: %d entries", len(table))
    return table
