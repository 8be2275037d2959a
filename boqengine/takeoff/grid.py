"""Grid and level resolution for one project snapshot."""

from __future__ import annotations

import re
from collections.abc import Iterable

from boqengine.calc.finishes import storey_height
from boqengine.calc.geometry import (
    polygon_area,
    polygon_perimeter,
    rect_area_perimeter,
    span_length,
)
from boqengine.errors import InvalidGridReference, LevelNotFound
from boqengine.models.project import (
    GridLine,
    GridRectBoundary,
    Level,
    PolygonBoundary,
    Project,
)

_SEPARATORS = re.compile(r"[-/]")


def parse_grid_ref(token: str) -> tuple[str, ...]:
    """Split a reference into one label (point) or two labels (span).

    ``"A-B"`` and ``"A/B"`` are spans, ``"A"`` is a point.  Anything else,
    including ``"A-B-C"`` or ``"A-"``, raises InvalidGridReference.
    """
    parts = tuple(p.strip() for p in _SEPARATORS.split(token.strip()))
    if len(parts) not in (1, 2) or not all(parts):
        raise InvalidGridReference(f"Invalid grid reference format: {token}")
    return parts


class GridIndex:
    """Label and level lookups over a project's grid lines and levels."""

    def __init__(
        self,
        grid_x: Iterable[GridLine],
        grid_y: Iterable[GridLine],
        levels: Iterable[Level] = (),
    ) -> None:
        self.x = {g.label: g.offset for g in grid_x}
        self.y = {g.label: g.offset for g in grid_y}
        self.levels = sorted(levels, key=lambda lv: lv.elevation)
        self._levels_by_label = {lv.label: lv for lv in self.levels}

    @classmethod
    def from_project(cls, project: Project) -> GridIndex:
        return cls(project.grid_x, project.grid_y, project.levels)

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    def offsets(self, axis: str) -> dict[str, float]:
        return self.x if axis == "X" else self.y

    def has_label(self, label: str) -> bool:
        return label in self.x or label in self.y

    def span_axis(self, start: str, end: str, hint: str | None = None) -> str:
        """Axis holding both labels; *hint* decides when both axes do."""
        on_x = start in self.x and end in self.x
        on_y = start in self.y and end in self.y
        if on_x and on_y:
            return hint or "X"
        if on_x:
            return "X"
        if on_y:
            return "Y"
        raise InvalidGridReference(
            f"Grid labels {start} and {end} are not on the same axis"
        )

    def check_ref(self, token: str) -> None:
        """Validate one reference against the grid without measuring it."""
        parts = parse_grid_ref(token)
        if len(parts) == 2:
            self.span_axis(*parts)
        elif not self.has_label(parts[0]):
            raise InvalidGridReference(f"Grid label not found: {parts[0]}")

    def span(self, token: str, hint: str | None = None) -> tuple[str, float]:
        """Axis and length of a span reference such as ``"A-B"``."""
        parts = parse_grid_ref(token)
        if len(parts) != 2:
            raise InvalidGridReference(f"Expected a span reference, got: {token}")
        axis = self.span_axis(parts[0], parts[1], hint)
        return axis, span_length(self.offsets(axis), parts[0], parts[1], axis)

    def measure(self, boundary: GridRectBoundary | PolygonBoundary) -> tuple[float, float]:
        """Plan area and perimeter of a space or roof boundary."""
        if isinstance(boundary, GridRectBoundary):
            return rect_area_perimeter(self.x, self.y, boundary.grid_x, boundary.grid_y)
        if isinstance(boundary, PolygonBoundary):
            return polygon_area(boundary.points), polygon_perimeter(boundary.points)
        raise TypeError(f"Unsupported boundary: {boundary!r}")

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------

    def level(self, label: str) -> Level:
        try:
            return self._levels_by_label[label]
        except KeyError:
            raise LevelNotFound(f"Level not found: {label}") from None

    def next_level(self, label: str) -> Level | None:
        current = self.level(label)
        above = [lv for lv in self.levels if lv.elevation > current.elevation]
        return above[0] if above else None

    def storey_height(self, label: str) -> float:
        return storey_height(self.levels, label)
