"""
Data models for calibrated thermal video analysis.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, NamedTuple


class Point(NamedTuple):
    """Pixel coordinate; may lie outside the frame until clipped."""

    x: int
    y: int


@dataclass(frozen=True)
class CalibrationEntry:
    """One calibration sample: an RGB colour and its temperature in °C."""

    color: Tuple[int, int, int]
    temperature: float


@dataclass(frozen=True)
class LineSegment:
    """Two endpoints, in any order; may be degenerate or leave the frame."""

    start: Point
    end: Point

    @classmethod
    def from_coords(cls, x1: int, y1: int, x2: int, y2: int) -> "LineSegment":
        return cls(Point(int(x1), int(y1)), Point(int(x2), int(y2)))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.start.x, self.start.y, self.end.x, self.end.y)


@dataclass
class VideoInfo:
    """Properties of the loaded video."""

    frame_count: int = 0
    fps: float = 0.0
    width: int = 0
    height: int = 0
    loaded: bool = False

    def to_dict(self) -> dict:
        return {
            "frameCount": self.frame_count,
            "fps": self.fps,
            "width": self.width,
            "height": self.height,
            "loaded": self.loaded,
        }


@dataclass
class LineStats:
    """Summary of a temperature profile."""

    avg: float = 0.0
    max: float = 0.0
    min: float = 0.0
    count: int = 0


@dataclass
class LineProfile:
    """Temperatures sampled along a line, in traversal order.

    ``temperatures[i]`` is the reading at ``points[i]``; ``None`` marks a pixel
    whose colour could not be resolved.
    """

    frame_index: int
    segment: LineSegment
    points: List[Point] = field(default_factory=list)
    temperatures: List[Optional[float]] = field(default_factory=list)
    stats: LineStats = field(default_factory=LineStats)

    def __len__(self) -> int:
        return len(self.temperatures)

    def reversed(self) -> "LineProfile":
        """Same profile read from the other end."""
        return LineProfile(
            frame_index=self.frame_index,
            segment=LineSegment(self.segment.end, self.segment.start),
            points=self.points[::-1],
            temperatures=self.temperatures[::-1],
            stats=self.stats,
        )
