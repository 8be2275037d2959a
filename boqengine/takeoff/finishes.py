"""Finish takeoff over space and wall-surface finish assignments."""

from __future__ import annotations

import logging

from boqengine.calc import finishes
from boqengine.calc.formula import waste_note
from boqengine.calc.geometry import span_length
from boqengine.calc.rounding import round_area
from boqengine.errors import (
    InvalidGridReference,
    ReferenceNotFound,
    TakeoffError,
    UnknownCategory,
)
from boqengine.models.project import (
    AssignmentOverrides,
    FinishType,
    Project,
    Space,
    SpaceFinishAssignment,
    WallSurface,
    WallSurfaceFinishAssignment,
)
from boqengine.models.takeoff import QuantityResult, TakeoffLine
from boqengine.takeoff.batch import TakeoffBatch
from boqengine.takeoff.grid import GridIndex

logger = logging.getLogger(__name__)

WALL_CATEGORIES = ("wall", "plaster", "paint")
FINISH_CATEGORIES = ("floor", "ceiling") + WALL_CATEGORIES


def _waste(finish: FinishType, overrides: AssignmentOverrides) -> float:
    if overrides.waste_percent is not None:
        return overrides.waste_percent
    return finish.waste_percent


def _wall_height(
    finish: FinishType, overrides: AssignmentOverrides, default_height: float
) -> float:
    if overrides.height_m is not None:
        return overrides.height_m
    rule = finish.wall_height_rule
    if rule is not None and rule.mode == "fixed" and rule.value_m is not None:
        return rule.value_m
    return default_height


class FinishTakeoff:
    """Produces finish lines for every assignment in a project."""

    def __init__(self, project: Project, grid: GridIndex, batch: TakeoffBatch) -> None:
        self.project = project
        self.grid = grid
        self.batch = batch
        self.spaces = {s.id: s for s in project.spaces}
        self.finish_types = {f.id: f for f in project.finish_types}
        self.surfaces = {w.id: w for w in project.wall_surfaces}
        # Levels whose walls are modelled explicitly as wall surfaces
        self.explicit_wall_levels = {
            self.surfaces[a.wall_surface_id].level_start
            for a in project.wall_surface_finish_assignments
            if a.wall_surface_id in self.surfaces
        }

    def run(self) -> None:
        for assignment in self.project.space_finish_assignments:
            try:
                line = self._space_line(assignment)
            except TakeoffError as exc:
                self.batch.error(exc, assignment.id)
                continue
            if line is not None:
                self.batch.add_lines([line], assignment.id)

        for assignment in self.project.wall_surface_finish_assignments:
            try:
                line = self._surface_line(assignment)
            except TakeoffError as exc:
                self.batch.error(exc, assignment.id)
                continue
            self.batch.add_lines([line], assignment.id)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _finish(self, finish_type_id: str) -> FinishType:
        finish = self.finish_types.get(finish_type_id)
        if finish is None:
            raise ReferenceNotFound(f"Finish type not found: {finish_type_id}")
        if finish.category not in FINISH_CATEGORIES:
            raise UnknownCategory(f"Unknown finish category: {finish.category}")
        return finish

    def _space(self, space_id: str) -> Space:
        space = self.spaces.get(space_id)
        if space is None:
            raise ReferenceNotFound(f"Space not found: {space_id}")
        return space

    def _surface(self, surface_id: str) -> WallSurface:
        surface = self.surfaces.get(surface_id)
        if surface is None:
            raise ReferenceNotFound(f"Wall surface not found: {surface_id}")
        return surface

    # ------------------------------------------------------------------
    # Space assignments
    # ------------------------------------------------------------------

    def _space_line(self, assignment: SpaceFinishAssignment) -> TakeoffLine | None:
        space = self._space(assignment.space_id)
        finish = self._finish(assignment.finish_type_id)
        waste = _waste(finish, assignment.overrides)
        area, perimeter = self.grid.measure(space.boundary)

        if finish.category == "floor":
            result = finishes.floor_area(area, waste)
        elif finish.category == "ceiling":
            result = finishes.ceiling_area(area, waste, space.is_open_to_below)
            if result is None:
                self.batch.warn(
                    "CeilingOmitted",
                    f"Space {space.name or space.id} is open to below; no ceiling finish",
                    assignment.id,
                )
                return None
        else:
            if space.level_id in self.explicit_wall_levels:
                self.batch.warn(
                    "WallsModelledExplicitly",
                    f"Level {space.level_id} walls come from wall surfaces; "
                    f"space wall finish skipped",
                    assignment.id,
                )
                return None
            height = _wall_height(
                finish, assignment.overrides, self.grid.storey_height(space.level_id)
            )
            openings = [
                op
                for op in self.project.openings
                if op.level_id == space.level_id
                and op.wall_surface_id is None
                and (op.space_id is None or op.space_id == space.id)
            ]
            result = finishes.wall_area(
                perimeter, height, openings, finish.deduction_rule, waste
            )

        return self._line(
            assignment.id,
            space.id,
            finish,
            result,
            waste,
            [f"space:{space.id}", f"spaceName:{space.name}", f"level:{space.level_id}"],
        )

    # ------------------------------------------------------------------
    # Wall surface assignments
    # ------------------------------------------------------------------

    def _surface_geometry(self, surface: WallSurface) -> tuple[float, float]:
        """Length along the crossing axis and height between the two levels."""
        line = surface.grid_line
        own = self.grid.offsets(line.axis)
        if line.label not in own:
            raise InvalidGridReference(f"Grid line {line.label} not found on axis {line.axis}")
        crossing = "Y" if line.axis == "X" else "X"
        length = span_length(self.grid.offsets(crossing), *line.span, axis=crossing)
        start = self.grid.level(surface.level_start)
        end = self.grid.level(surface.level_end)
        height = end.elevation - start.elevation
        if height <= 0:
            height = self.grid.storey_height(start.label)
        return length, height

    def _surface_line(self, assignment: WallSurfaceFinishAssignment) -> TakeoffLine:
        surface = self._surface(assignment.wall_surface_id)
        finish = self._finish(assignment.finish_type_id)
        if finish.category not in WALL_CATEGORIES:
            raise UnknownCategory(
                f"Finish category {finish.category} cannot be applied to a wall surface"
            )
        waste = _waste(finish, assignment.overrides)
        length, level_height = self._surface_geometry(surface)
        height = _wall_height(finish, assignment.overrides, level_height)
        if assignment.side is not None:
            sides = 2 if assignment.side == "both" else 1
        else:
            sides = 2 if surface.surface_type == "both" else 1
        openings = [op for op in self.project.openings if op.wall_surface_id == surface.id]
        result = finishes.wall_area(length, height, openings, finish.deduction_rule, waste, sides)
        return self._line(
            assignment.id,
            surface.id,
            finish,
            result,
            waste,
            [f"wallSurface:{surface.id}", f"level:{surface.level_start}"],
        )

    # ------------------------------------------------------------------

    def _line(
        self,
        line_key: str,
        source_id: str,
        finish: FinishType,
        result: QuantityResult,
        waste: float,
        tags: list[str],
    ) -> TakeoffLine:
        assumptions = list(finish.assumptions) + [waste_note(waste)]
        if finish.category in WALL_CATEGORIES:
            deducted = result.inputs_snapshot.get("openingDeduction_m2", 0.0)
            assumptions.append(f"Opening deductions: {deducted:.2f} m²")
        return TakeoffLine(
            id=f"tof_{line_key}",
            source_element_id=source_id,
            trade="Finishes",
            resource_key=f"{finish.category}-{finish.id}",
            quantity=round_area(result.quantity_with_waste),
            unit=finish.unit,
            formula_text=result.formula_text,
            inputs_snapshot=result.inputs_snapshot,
            assumptions=assumptions,
            tags=[
                f"category:{finish.category}",
                f"finishType:{finish.id}",
                f"dpwh:{finish.dpwh_item_number_raw}",
                *tags,
            ],
        )
