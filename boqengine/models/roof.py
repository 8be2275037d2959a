"""Parametric roof, truss and framing models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from boqengine.config import (
    DEFAULT_BRACING_INTERVAL_MM,
    DEFAULT_PURLIN_SPACING_MM,
    DEFAULT_TRUSS_SPACING_MM,
)
from boqengine.models.base import EngineModel, FrozenModel

# ----------------------------------------------------------------------
# Pitch: exactly one representation per value
# ----------------------------------------------------------------------


class RiseRunPitch(EngineModel):
    """Pitch as rise:run, e.g. 4:12."""

    kind: Literal["rise_run"] = "rise_run"
    rise: float = Field(ge=0)
    run: float = Field(gt=0)


class DegreesPitch(EngineModel):
    kind: Literal["degrees"] = "degrees"
    value: float = Field(ge=0, lt=90)


class RatioPitch(EngineModel):
    """Pitch as a decimal rise/run ratio, e.g. 0.333."""

    kind: Literal["ratio"] = "ratio"
    value: float = Field(ge=0)


Pitch = Annotated[
    Union[RiseRunPitch, DegreesPitch, RatioPitch], Field(discriminator="kind")
]

RoofStyle = Literal["gable", "hip", "flat", "gambrel"]


class RoofGeneratorInput(EngineModel):
    """Plan dimensions of a simple roof; ``length_m`` runs along the ridge."""

    style: RoofStyle
    length_m: float = Field(gt=0)
    width_m: float = Field(gt=0)
    pitch: Pitch
    # Gambrel only; defaults to half the lower pitch angle
    upper_pitch: Pitch | None = None
    overhang_m: float = Field(default=0.0, ge=0)


class RoofPlaneGeometry(FrozenModel):
    name: str
    plan_area_m2: float
    slope_area_m2: float
    pitch_deg: float
    slope_factor: float


class RoofGeometry(FrozenModel):
    style: RoofStyle
    plan_area_m2: float
    slope_area_m2: float
    pitch_deg: float
    slope_factor: float
    ridge_length_m: float
    hip_length_m: float
    eave_length_m: float
    rake_length_m: float
    planes: list[RoofPlaneGeometry]


# ----------------------------------------------------------------------
# Trusses and framing (dimensions in millimetres)
# ----------------------------------------------------------------------


class SteelSection(EngineModel):
    """A steel member section and its unit weight."""

    name: str = ""
    weight_kg_per_m: float = Field(gt=0)


class TrussParameters(EngineModel):
    truss_type: Literal["howe", "fink", "kingpost"] = "howe"
    span_mm: float = Field(gt=0)
    middle_rise_mm: float = Field(gt=0)
    overhang_mm: float = Field(default=0.0, ge=0)
    spacing_mm: float = Field(default=DEFAULT_TRUSS_SPACING_MM, gt=0)
    vertical_web_count: int = Field(default=3, ge=0)
    top_chord: SteelSection
    bottom_chord: SteelSection
    web: SteelSection


class FramingParameters(EngineModel):
    purlin_spacing_mm: float = Field(default=DEFAULT_PURLIN_SPACING_MM, gt=0)
    purlin: SteelSection
    bracing_type: Literal["X-Brace", "Diagonal", "K-Brace", "None"] = "X-Brace"
    bracing_interval_mm: float = Field(default=DEFAULT_BRACING_INTERVAL_MM, gt=0)
    bracing: SteelSection | None = None
    include_ridge_cap: bool = True
    include_eave_girt: bool = False
    # Maximum purlin spacing allowed by the roofing sheet, if known
    max_purlin_spacing_mm: float | None = None


class TrussDesign(EngineModel):
    """A roof truss layout for the whole building."""

    id: str = "truss"
    name: str = ""
    building_length_mm: float = Field(gt=0)
    truss: TrussParameters
    framing: FramingParameters | None = None


class TrussMember(FrozenModel):
    kind: Literal["top_chord", "bottom_chord", "web_vertical", "web_diagonal"]
    length_m: float
    weight_kg: float


class TrussGeometry(FrozenModel):
    span_m: float
    rise_m: float
    pitch_deg: float
    height_m: float


class TrussSummary(FrozenModel):
    top_chord_length_m: float
    bottom_chord_length_m: float
    web_count: int
    web_length_m: float
    top_chord_weight_kg: float
    bottom_chord_weight_kg: float
    web_weight_kg: float
    total_weight_kg: float


class TrussResult(FrozenModel):
    geometry: TrussGeometry
    members: list[TrussMember]
    summary: TrussSummary
    truss_count: int
    warnings: list[str] = Field(default_factory=list)


class FramingResult(FrozenModel):
    purlin_lines: int
    purlin_length_m: float
    purlin_weight_kg: float
    bracing_bays: int
    bracing_members: int
    bracing_length_m: float
    bracing_weight_kg: float
    ridge_cap_length_m: float
    eave_girt_length_m: float
    warnings: list[str] = Field(default_factory=list)
