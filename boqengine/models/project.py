"""Project snapshot entities.

A ``Project`` is the immutable input of a calculation pass: grid, levels,
structural templates and instances, spaces with finishes, roof planes and
schedule items.  Derived ``computed`` blocks are recalculated on every pass
and are never treated as the source of geometry.
"""

from __future__ import annotations

from collections import Counter
from typing import Annotated, Literal, Union

from pydantic import Field, computed_field, model_validator

from boqengine.config import (
    DEFAULT_DEDUCTION_THRESHOLD_M2,
    DEFAULT_DEDUCTION_TYPES,
    DEFAULT_LAP_MULTIPLIER,
)
from boqengine.models.base import EngineModel
from boqengine.models.roof import TrussDesign

ElementType = Literal["beam", "slab", "column", "foundation"]
OpeningType = Literal["door", "window", "vent", "louver", "other"]
ScheduleCategory = Literal[
    "plumbing",
    "carpentry",
    "hardware",
    "doors",
    "windows",
    "glazing",
    "waterproofing",
    "cladding",
    "insulation",
    "acoustical",
    "termite-control",
    "drainage",
    "sitework",
    "earthworks-clearing",
    "earthworks-removal-trees",
    "earthworks-removal-structures",
    "earthworks-excavation",
    "earthworks-structure-excavation",
    "earthworks-embankment",
    "earthworks-site-development",
    "other",
]


# ----------------------------------------------------------------------
# Grid and levels
# ----------------------------------------------------------------------


class GridLine(EngineModel):
    """A labelled grid line at an offset (m) along its axis."""

    label: str
    offset: float = Field(ge=0)


class Level(EngineModel):
    """A building level; ``label`` is the identifier referenced by levelId."""

    label: str
    elevation: float


# ----------------------------------------------------------------------
# Structural templates and instances
# ----------------------------------------------------------------------


class MainBars(EngineModel):
    """Main bars; slabs may give a count or a spacing, beams and columns a count."""

    count: int | None = Field(default=None, ge=1)
    diameter: int
    spacing: float | None = None


class Stirrups(EngineModel):
    diameter: int
    spacing: float


class SecondaryBars(EngineModel):
    diameter: int
    spacing: float


class RebarConfig(EngineModel):
    """Reinforcement carried by an element template."""

    main_bars: MainBars | None = None
    stirrups: Stirrups | None = None
    secondary_bars: SecondaryBars | None = None
    epoxy_coated: bool = False


class ElementTemplate(EngineModel):
    """Reusable structural definition.

    ``properties`` holds named dimensions in metres, e.g. ``width``,
    ``height``, ``thickness``, ``diameter``, ``length``, ``depth``.
    """

    id: str
    name: str = ""
    type: ElementType
    properties: dict[str, float] = Field(default_factory=dict)
    rebar_config: RebarConfig | None = None
    dpwh_item_number: str | None = None


class Placement(EngineModel):
    grid_ref: list[str] = Field(default_factory=list)
    level_id: str = ""
    end_level_id: str | None = None
    rotation: float = 0.0
    custom_geometry: dict[str, float] | None = None


class ElementInstance(EngineModel):
    """Placement of a template on the grid at a level."""

    id: str = ""
    template_id: str = ""
    placement: Placement = Field(default_factory=Placement)
    tags: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Spaces, openings and finishes
# ----------------------------------------------------------------------


class GridRectBoundary(EngineModel):
    """Rectangle spanned by two X labels and two Y labels."""

    type: Literal["gridRect"] = "gridRect"
    grid_x: tuple[str, str]
    grid_y: tuple[str, str]


class PolygonBoundary(EngineModel):
    """Closed polygon in plan coordinates (m)."""

    type: Literal["polygon"] = "polygon"
    points: list[tuple[float, float]]


Boundary = Annotated[
    Union[GridRectBoundary, PolygonBoundary], Field(discriminator="type")
]


class SpaceComputed(EngineModel):
    area_m2: float = 0.0
    perimeter_m: float = 0.0


class Space(EngineModel):
    id: str
    name: str = ""
    level_id: str
    boundary: Boundary
    computed: SpaceComputed = Field(default_factory=SpaceComputed)
    # Double-height spaces carry no ceiling finish at their own level
    is_open_to_below: bool = False
    tags: list[str] = Field(default_factory=list)


class Opening(EngineModel):
    """A door/window/vent cut through walls of a space or wall surface."""

    id: str
    level_id: str
    space_id: str | None = None
    wall_surface_id: str | None = None
    type: OpeningType
    width_m: float = Field(gt=0)
    height_m: float = Field(gt=0)
    qty: int = Field(default=1, ge=1)
    tags: list[str] = Field(default_factory=list)

    @property
    def unit_area_m2(self) -> float:
        return self.width_m * self.height_m

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_m2(self) -> float:
        return self.width_m * self.height_m * self.qty


class WallHeightRule(EngineModel):
    mode: Literal["fullHeight", "fixed"] = "fullHeight"
    value_m: float | None = None


class DeductionRule(EngineModel):
    enabled: bool = True
    min_opening_area_to_deduct_m2: float = DEFAULT_DEDUCTION_THRESHOLD_M2
    include_types: list[OpeningType] = Field(
        default_factory=lambda: list(DEFAULT_DEDUCTION_TYPES)
    )


class FinishType(EngineModel):
    """Catalog-mapped finish.

    ``category`` is one of floor, wall, ceiling, plaster or paint; any other
    value is reported when a takeoff is computed.
    """

    id: str
    name: str = ""
    category: str
    dpwh_item_number_raw: str
    unit: str
    wall_height_rule: WallHeightRule | None = None
    deduction_rule: DeductionRule | None = None
    waste_percent: float = 0.0
    assumptions: list[str] = Field(default_factory=list)


class AssignmentOverrides(EngineModel):
    height_m: float | None = None
    waste_percent: float | None = None


class SpaceFinishAssignment(EngineModel):
    id: str
    space_id: str
    finish_type_id: str
    scope: str = ""
    overrides: AssignmentOverrides = Field(default_factory=AssignmentOverrides)


class WallGridLine(EngineModel):
    """Grid line the wall runs along and the crossing labels it spans."""

    axis: Literal["X", "Y"]
    label: str
    span: tuple[str, str]


class WallSurfaceComputed(EngineModel):
    length_m: float = 0.0
    height_m: float = 0.0
    gross_area_m2: float = 0.0
    sides_count: int = 1
    total_area_m2: float = 0.0


class WallSurface(EngineModel):
    id: str
    name: str = ""
    grid_line: WallGridLine
    level_start: str
    level_end: str
    surface_type: Literal["interior", "exterior", "both"] = "interior"
    computed: WallSurfaceComputed = Field(default_factory=WallSurfaceComputed)
    tags: list[str] = Field(default_factory=list)


class WallSurfaceFinishAssignment(EngineModel):
    id: str
    wall_surface_id: str
    finish_type_id: str
    side: Literal["left", "right", "both"] | None = None
    overrides: AssignmentOverrides = Field(default_factory=AssignmentOverrides)


# ----------------------------------------------------------------------
# Roofing
# ----------------------------------------------------------------------


class RoofType(EngineModel):
    id: str
    name: str = ""
    dpwh_item_number_raw: str
    unit: str
    area_basis: Literal["slopeArea", "planArea"] = "slopeArea"
    lap_allowance_percent: float = Field(default=0.10, ge=0)
    waste_percent: float = Field(default=0.05, ge=0)
    assumptions: list[str] = Field(default_factory=list)


class SlopeRatio(EngineModel):
    """Slope as rise/run."""

    mode: Literal["ratio"] = "ratio"
    value: float = Field(ge=0)


class SlopeDegrees(EngineModel):
    mode: Literal["degrees"] = "degrees"
    value: float = Field(ge=0, lt=90)


Slope = Annotated[Union[SlopeRatio, SlopeDegrees], Field(discriminator="mode")]


class RoofPlaneComputed(EngineModel):
    plan_area_m2: float = 0.0
    slope_factor: float = 1.0
    slope_area_m2: float = 0.0


class RoofPlane(EngineModel):
    id: str
    name: str = ""
    level_id: str
    roof_type_id: str
    boundary: Boundary
    slope: Slope
    computed: RoofPlaneComputed = Field(default_factory=RoofPlaneComputed)
    tags: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Schedule items
# ----------------------------------------------------------------------


class ScheduleItem(EngineModel):
    """Direct-quantity line mapped to a pay item."""

    id: str
    category: ScheduleCategory
    dpwh_item_number_raw: str
    description_override: str | None = None
    unit: str
    qty: float
    basis_note: str = ""
    level_id: str | None = None
    tags: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Settings and project
# ----------------------------------------------------------------------


class RoundingSettings(EngineModel):
    concrete: int = 3
    rebar: int = 2
    formwork: int = 2


class WasteSettings(EngineModel):
    concrete: float = Field(default=0.05, ge=0, le=1)
    rebar: float = Field(default=0.03, ge=0, le=1)
    formwork: float = Field(default=0.0, ge=0, le=1)


class LapSettings(EngineModel):
    multiplier: int = DEFAULT_LAP_MULTIPLIER


class ProjectSettings(EngineModel):
    rounding: RoundingSettings = Field(default_factory=RoundingSettings)
    waste: WasteSettings = Field(default_factory=WasteSettings)
    lap: LapSettings = Field(default_factory=LapSettings)


class Project(EngineModel):
    """Immutable project snapshot consumed by one calculation pass."""

    id: str
    name: str = ""
    settings: ProjectSettings = Field(default_factory=ProjectSettings)
    grid_x: list[GridLine] = Field(default_factory=list)
    grid_y: list[GridLine] = Field(default_factory=list)
    levels: list[Level] = Field(default_factory=list)
    element_templates: list[ElementTemplate] = Field(default_factory=list)
    element_instances: list[ElementInstance] = Field(default_factory=list)
    spaces: list[Space] = Field(default_factory=list)
    openings: list[Opening] = Field(default_factory=list)
    finish_types: list[FinishType] = Field(default_factory=list)
    space_finish_assignments: list[SpaceFinishAssignment] = Field(
        default_factory=list
    )
    wall_surfaces: list[WallSurface] = Field(default_factory=list)
    wall_surface_finish_assignments: list[WallSurfaceFinishAssignment] = Field(
        default_factory=list
    )
    roof_types: list[RoofType] = Field(default_factory=list)
    roof_planes: list[RoofPlane] = Field(default_factory=list)
    schedule_items: list[ScheduleItem] = Field(default_factory=list)
    truss_design: TrussDesign | None = None

    @model_validator(mode="after")
    def _unique_labels(self) -> Project:
        for name, labels in (
            ("gridX", [g.label for g in self.grid_x]),
            ("gridY", [g.label for g in self.grid_y]),
            ("level", [lv.label for lv in self.levels]),
        ):
            dupes = sorted(lb for lb, n in Counter(labels).items() if n > 1)
            if dupes:
                raise ValueError(f"Duplicate {name} labels: {', '.join(dupes)}")
        return self
