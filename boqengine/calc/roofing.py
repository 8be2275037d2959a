"""Roof slope and area calculators, and the parametric roof generator.

Slope factor converts plan area to true sloped area::

    slope_factor = 1 / cos(theta)
    slope_area   = plan_area * slope_factor

where theta comes from degrees directly, or from ``atan(ratio)``.
"""

from __future__ import annotations

import logging
import math

from boqengine.calc.formula import check_waste, fmt, require_positive
from boqengine.errors import InvalidDimension
from boqengine.models.project import RoofPlaneComputed, SlopeDegrees, SlopeRatio
from boqengine.models.roof import (
    DegreesPitch,
    RatioPitch,
    RiseRunPitch,
    RoofGeneratorInput,
    RoofGeometry,
    RoofPlaneGeometry,
)
from boqengine.models.takeoff import QuantityResult

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Slope normalisation
# ----------------------------------------------------------------------


def slope_angle(slope: SlopeRatio | SlopeDegrees) -> float:
    """Slope angle in radians."""
    if isinstance(slope, SlopeDegrees):
        return math.radians(slope.value)
    if isinstance(slope, SlopeRatio):
        return math.atan(slope.value)
    raise TypeError(f"Unsupported slope: {slope!r}")


def pitch_angle(pitch: RiseRunPitch | DegreesPitch | RatioPitch) -> float:
    """Normalise any pitch representation to an angle in radians."""
    if isinstance(pitch, RiseRunPitch):
        return math.atan2(pitch.rise, pitch.run)
    if isinstance(pitch, DegreesPitch):
        return math.radians(pitch.value)
    if isinstance(pitch, RatioPitch):
        return math.atan(pitch.value)
    raise TypeError(f"Unsupported pitch: {pitch!r}")


def slope_factor(angle: float) -> float:
    if not 0 <= angle < math.pi / 2:
        raise InvalidDimension(f"Slope angle must be in [0, 90) degrees, got {math.degrees(angle)}")
    return 1 / math.cos(angle)


def roof_plane_computed(plan_area: float, slope: SlopeRatio | SlopeDegrees) -> RoofPlaneComputed:
    factor = slope_factor(slope_angle(slope))
    return RoofPlaneComputed(
        plan_area_m2=plan_area,
        slope_factor=factor,
        slope_area_m2=plan_area * factor,
    )


def roof_cover(
    plan_area: float,
    factor: float,
    area_basis: str = "slopeArea",
    lap_allowance: float = 0.0,
    waste: float = 0.0,
    unit: str = "m²",
) -> QuantityResult:
    """Roofing cover quantity: base area x (1 + lap) x (1 + waste)."""
    require_positive("Roof plane", plan_area=plan_area)
    check_waste(waste)
    if lap_allowance < 0:
        raise InvalidDimension(f"Lap allowance must not be negative ({lap_allowance})")
    slope_area = plan_area * factor
    if area_basis == "slopeArea":
        base = slope_area
        base_text = f"Slope area: {fmt(plan_area)} m² × {factor:.4f} = {base:.2f} m²"
    elif area_basis == "planArea":
        base = plan_area
        base_text = f"Plan area: {fmt(plan_area)} m²"
    else:
        raise InvalidDimension(f"Unknown area basis: {area_basis}")
    primary = base * (1 + lap_allowance)
    total = primary * (1 + waste)
    formula = (
        f"{base_text} × (1 + {fmt(lap_allowance)} lap) × (1 + {fmt(waste)} waste) "
        f"= {total:.2f} {unit}"
    )
    return QuantityResult(
        primary_quantity=primary,
        quantity_with_waste=total,
        unit=unit,
        formula_text=formula,
        inputs_snapshot={
            "planArea_m2": plan_area,
            "slopeFactor": factor,
            "slopeArea_m2": slope_area,
            "lapAllowance": lap_allowance,
            "waste": waste,
        },
    )


# ----------------------------------------------------------------------
# Parametric roof generator
# ----------------------------------------------------------------------


def _plane(name: str, plan_area: float, angle: float) -> RoofPlaneGeometry:
    factor = slope_factor(angle)
    return RoofPlaneGeometry(
        name=name,
        plan_area_m2=plan_area,
        slope_area_m2=plan_area * factor,
        pitch_deg=math.degrees(angle),
        slope_factor=factor,
    )


def generate_roof(spec: RoofGeneratorInput) -> RoofGeometry:
    """Derive planes and edge lengths of a simple roof.

    Plan dimensions include the overhang on every side.  For gable and
    gambrel roofs ``length_m`` runs along the ridge; a hip ridge always
    follows the longer side.  Hip roofs assume equal pitch on all four planes;
    gambrel roofs break at a quarter of the width from each eave.
    """
    angle = pitch_angle(spec.pitch)
    factor = slope_factor(angle)
    length = spec.length_m + 2 * spec.overhang_m
    width = spec.width_m + 2 * spec.overhang_m
    half = width / 2

    ridge = hip = rake = 0.0
    eave = 2 * length

    if spec.style == "flat":
        planes = [_plane("roof", length * width, angle)]
        eave = 2 * (length + width)
    elif spec.style == "gable":
        planes = [
            _plane("slope-1", length * half, angle),
            _plane("slope-2", length * half, angle),
        ]
        ridge = length
        rake = 4 * half * factor
    elif spec.style == "hip":
        long_side, short_side = max(length, width), min(length, width)
        half_short = short_side / 2
        ridge = long_side - short_side
        trapezoid = (long_side + ridge) / 2 * half_short
        triangle = short_side * half_short / 2
        planes = [
            _plane("side-1", trapezoid, angle),
            _plane("side-2", trapezoid, angle),
            _plane("end-1", triangle, angle),
            _plane("end-2", triangle, angle),
        ]
        rise = half_short * math.tan(angle)
        hip = 4 * math.sqrt(2 * half_short**2 + rise**2)
        eave = 2 * (length + width)
    elif spec.style == "gambrel":
        upper = pitch_angle(spec.upper_pitch) if spec.upper_pitch else angle / 2
        quarter = width / 4
        planes = [
            _plane("lower-1", length * quarter, angle),
            _plane("lower-2", length * quarter, angle),
            _plane("upper-1", length * quarter, upper),
            _plane("upper-2", length * quarter, upper),
        ]
        ridge = length
        rake = 4 * quarter * (factor + slope_factor(upper))
    else:
        raise InvalidDimension(f"Unknown roof style: {spec.style}")

    slope_area = sum(p.slope_area_m2 for p in planes)
    logger.debug("Generated %s roof: %.2f m² sloped", spec.style, slope_area)
    return RoofGeometry(
        style=spec.style,
        plan_area_m2=length * width,
        slope_area_m2=slope_area,
        pitch_deg=math.degrees(angle),
        slope_factor=factor,
        ridge_length_m=ridge,
        hip_length_m=hip,
        eave_length_m=eave,
        rake_length_m=rake,
        planes=planes,
    )
