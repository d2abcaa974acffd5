"""Integer Bresenham rasterization of a segment, clipped to the frame."""

from typing import List

from .models import Point


def rasterize_line(start: Point, end: Point, width: int, height: int) -> List[Point]:
    """Pixels from start to end (both included), in traversal order.

    Points outside [0, width) x [0, height) are dropped, not clamped.
    """
    x1, y1 = int(start[0]), int(start[1])
    x2, y2 = int(end[0]), int(end[1])

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    pixels = []
    x, y = x1, y1
    while True:
        if 0 <= x < width and 0 <= y < height:
            pixels.append(Point(x, y))
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return pixels
