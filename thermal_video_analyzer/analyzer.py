"""Temperature profiles along line segments of a decoded frame."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .exceptions import FrameUnavailableError
from .models import LineProfile, LineSegment, LineStats, Point
from .raster import rasterize_line
from .resolver import ColorResolver
from .video import FrameCache

logger = logging.getLogger(__name__)


def compute_line_stats(temperatures: Iterable[Optional[float]]) -> LineStats:
    """avg/max/min/count over the resolved, strictly positive samples."""
    valid = np.array([t for t in temperatures if t is not None and t > 0], dtype=np.float64)
    if valid.size == 0:
        return LineStats()
    return LineStats(
        avg=float(np.mean(valid)),
        max=float(np.max(valid)),
        min=float(np.min(valid)),
        count=int(valid.size),
    )


def frame_rgb_at(frame: np.ndarray, points: List[Point]) -> np.ndarray:
    """Colours at ``points`` as an N x 3 R,G,B array; frames are stored B,G,R."""
    xs = np.fromiter((p.x for p in points), dtype=np.intp, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.intp, count=len(points))
    pixels = frame[ys, xs]
    if pixels.ndim == 1:
        # single-channel frame
        return np.repeat(pixels[:, None], 3, axis=1).astype(np.int32)
    return pixels[:, 2::-1].astype(np.int32)


class LineAnalyzer:
    """Fetch a frame, rasterize a segment and resolve every pixel on it."""

    def __init__(self, frames: FrameCache, resolver: ColorResolver):
        self.frames = frames
        self.resolver = resolver

    def analyze(self, frame_index: int, segment: LineSegment) -> LineProfile:
        frame = self.frames.get_frame(frame_index)
        if frame is None:
            raise FrameUnavailableError(frame_index)

        height, width = frame.shape[:2]
        points = rasterize_line(segment.start, segment.end, width, height)
        temperatures = self._resolve_points(frame, points)

        logger.debug(
            "Frame %d line (%d,%d) -> (%d,%d): %d samples",
            frame_index, *segment.as_tuple(), len(points),
        )
        return LineProfile(
            frame_index=frame_index,
            segment=segment,
            points=points,
            temperatures=temperatures,
            stats=compute_line_stats(temperatures),
        )

    def _resolve_points(self, frame: np.ndarray, points: List[Point]) -> List[Optional[float]]:
        if not points:
            return []
        seen: Dict[Tuple[int, int, int], Optional[float]] = {}
        temperatures = []
        for r, g, b in frame_rgb_at(frame, points).tolist():
            color = (r, g, b)
            if color not in seen:
                seen[color] = self.resolver.resolve(r, g, b)
            temperatures.append(seen[color])
        return temperatures
