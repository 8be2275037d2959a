"""Plan geometry helpers: grid rectangles and polygons."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from boqengine.errors import InvalidDimension, InvalidGridReference


def polygon_area(points: Sequence[tuple[float, float]]) -> float:
    """Absolute plan area of a closed polygon (shoelace formula)."""
    if len(points) < 3:
        raise InvalidDimension("Polygon needs at least 3 points")
    total = 0.0
    for i, (x1, y1) in enumerate(points):
        x2, y2 = points[(i + 1) % len(points)]
        total += x1 * y2 - x2 * y1
    return abs(total) / 2


def polygon_perimeter(points: Sequence[tuple[float, float]]) -> float:
    if len(points) < 3:
        raise InvalidDimension("Polygon needs at least 3 points")
    return sum(
        math.dist(points[i], points[(i + 1) % len(points)]) for i in range(len(points))
    )


def span_length(offsets: Mapping[str, float], start: str, end: str, axis: str = "") -> float:
    """Distance between two labels on one axis."""
    missing = [label for label in (start, end) if label not in offsets]
    if missing:
        where = f" on axis {axis}" if axis else ""
        raise InvalidGridReference(f"Grid label(s) {', '.join(missing)} not found{where}")
    return abs(offsets[end] - offsets[start])


def rect_area_perimeter(
    x_offsets: Mapping[str, float],
    y_offsets: Mapping[str, float],
    grid_x: tuple[str, str],
    grid_y: tuple[str, str],
) -> tuple[float, float]:
    """Area and perimeter of the panel between two X and two Y labels."""
    dx = span_length(x_offsets, grid_x[0], grid_x[1], "X")
    dy = span_length(y_offsets, grid_y[0], grid_y[1], "Y")
    if dx <= 0 or dy <= 0:
        raise InvalidDimension(f"Grid panel {grid_x}/{grid_y} has zero extent")
    return dx * dy, 2 * (dx + dy)
