"""Pydantic models for project snapshots and calculation results."""

from boqengine.models.catalog import PayItem
from boqengine.models.project import (
    AssignmentOverrides,
    DeductionRule,
    ElementInstance,
    ElementTemplate,
    FinishType,
    GridLine,
    GridRectBoundary,
    Level,
    MainBars,
    Opening,
    Placement,
    PolygonBoundary,
    Project,
    ProjectSettings,
    RebarConfig,
    RoofPlane,
    RoofType,
    ScheduleItem,
    SecondaryBars,
    SlopeDegrees,
    SlopeRatio,
    Space,
    SpaceFinishAssignment,
    Stirrups,
    WallGridLine,
    WallHeightRule,
    WallSurface,
    WallSurfaceFinishAssignment,
)
from boqengine.models.roof import (
    DegreesPitch,
    FramingParameters,
    RatioPitch,
    RiseRunPitch,
    RoofGeneratorInput,
    RoofGeometry,
    SteelSection,
    TrussDesign,
    TrussParameters,
)
from boqengine.models.takeoff import (
    BOQLine,
    BOQResult,
    CalcIssue,
    CalcRun,
    QuantityResult,
    TakeoffLine,
    TakeoffResult,
    TakeoffSummary,
)

__all__ = [
    "AssignmentOverrides",
    "BOQLine",
    "BOQResult",
    "CalcIssue",
    "CalcRun",
    "DeductionRule",
    "DegreesPitch",
    "ElementInstance",
    "ElementTemplate",
    "FinishType",
    "FramingParameters",
    "GridLine",
    "GridRectBoundary",
    "Level",
    "MainBars",
    "Opening",
    "PayItem",
    "Placement",
    "PolygonBoundary",
    "Project",
    "ProjectSettings",
    "QuantityResult",
    "RatioPitch",
    "RebarConfig",
    "RiseRunPitch",
    "RoofGeneratorInput",
    "RoofGeometry",
    "RoofPlane",
    "RoofType",
    "ScheduleItem",
    "SecondaryBars",
    "SlopeDegrees",
    "SlopeRatio",
    "Space",
    "SpaceFinishAssignment",
    "SteelSection",
    "Stirrups",
    "TakeoffLine",
    "TakeoffResult",
    "TakeoffSummary",
    "TrussDesign",
    "TrussParameters",
    "WallGridLine",
    "WallHeightRule",
    "WallSurface",
    "WallSurfaceFinishAssignment",
]
