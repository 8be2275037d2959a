"""Reinforcing bar calculators.

Grades, pay items and unit weights for deformed bars, lap lengths, and
weights for main bars, stirrups/ties and slab bars.  Weights are in kg.
"""

from __future__ import annotations

import logging
import math

from boqengine.calc.formula import check_waste, fmt, require_positive
from boqengine.config import DEFAULT_LAP_MULTIPLIER
from boqengine.errors import (
    InvalidDimension,
    MissingDimension,
    UnknownDiameter,
    UnsupportedDiameter,
)
from boqengine.models.takeoff import QuantityResult

logger = logging.getLogger(__name__)

UNIT = "kg"

# Bar diameter (mm) -> grade
REBAR_GRADES: dict[int, int] = {
    10: 40,
    12: 40,
    16: 60,
    20: 60,
    25: 60,
    28: 60,
    32: 60,
    36: 60,
    40: 80,
}

# Grade -> pay-item suffix
_GRADE_SUFFIX = {40: "a1", 60: "a2", 80: "a3"}

# Standard deformed bar unit weights, kg/m (d² / 162)
UNIT_WEIGHTS: dict[int, float] = {
    10: 0.617,
    12: 0.888,
    16: 1.578,
    20: 2.466,
    25: 3.853,
    28: 4.834,
    32: 6.313,
    36: 7.990,
    40: 9.865,
}

# Guards floor/ceil against 6 / 0.15 == 40.00000000000001
_EPS = 1e-9


def rebar_grade(diameter: int) -> int:
    try:
        return REBAR_GRADES[int(diameter)]
    except (KeyError, TypeError, ValueError):
        raise UnsupportedDiameter(f"Unsupported rebar diameter: {diameter}") from None


def rebar_pay_item(diameter: int, epoxy_coated: bool = False) -> str:
    """DPWH item number for a bar, e.g. ``902 (1) a2`` for 16 mm uncoated."""
    grade = rebar_grade(diameter)
    return f"902 ({2 if epoxy_coated else 1}) {_GRADE_SUFFIX[grade]}"


def unit_weight(diameter: int) -> float:
    try:
        return UNIT_WEIGHTS[int(diameter)]
    except (KeyError, TypeError, ValueError):
        raise UnknownDiameter(f"Unknown rebar diameter: {diameter}") from None


def lap_length(diameter: int, multiplier: float = DEFAULT_LAP_MULTIPLIER) -> float:
    """Lap length in metres: diameter (mm) x multiplier / 1000."""
    require_positive("Rebar", diameter=diameter, multiplier=multiplier)
    return diameter * multiplier / 1000


def ties_along(length: float, spacing: float) -> int:
    """Ties at both ends and every *spacing* in between."""
    return int(math.floor(length / spacing + _EPS)) + 1


def bars_across(span: float, spacing: float) -> int:
    """Bars needed to cover *span* at *spacing*."""
    return int(math.ceil(span / spacing - _EPS))


def _result(weight: float, waste: float, formula: str, inputs: dict[str, float]) -> QuantityResult:
    return QuantityResult(
        primary_quantity=weight,
        quantity_with_waste=weight * (1 + waste),
        unit=UNIT,
        formula_text=formula,
        inputs_snapshot={**inputs, "waste": waste},
    )


def main_bars_weight(
    diameter: int,
    count: int | None,
    length: float,
    lap_multiplier: float = DEFAULT_LAP_MULTIPLIER,
    waste: float = 0.0,
) -> QuantityResult:
    """Longitudinal bars of a beam or column, one lap splice per bar."""
    require_positive("Rebar", length=length)
    if count is None:
        raise MissingDimension("Main bars require a bar count")
    if count < 1:
        raise InvalidDimension(f"Bar count must be at least 1 (count={count})")
    check_waste(waste)
    uw = unit_weight(diameter)
    lap = lap_length(diameter, lap_multiplier)
    bar_length = length + lap
    weight = count * bar_length * uw
    formula = (
        f"{count} bars × ({fmt(length)} + {lap:.2f} lap) m × {uw} kg/m "
        f"= {weight:.2f} kg"
    )
    inputs = {
        "diameter": diameter,
        "count": count,
        "length": length,
        "lapLength": lap,
        "unitWeight": uw,
    }
    return _result(weight, waste, formula, inputs)


def stirrups_weight(
    diameter: int,
    spacing: float,
    length: float,
    width: float,
    height: float,
    waste: float = 0.0,
) -> QuantityResult:
    """Closed stirrups or ties of perimeter 2(w + h) along *length*."""
    require_positive("Stirrup", spacing=spacing, length=length, width=width, height=height)
    check_waste(waste)
    uw = unit_weight(diameter)
    ties = ties_along(length, spacing)
    tie_length = 2 * (width + height)
    weight = ties * tie_length * uw
    formula = (
        f"{ties} ties × 2 × ({fmt(width)} + {fmt(height)}) m × {uw} kg/m "
        f"= {weight:.2f} kg"
    )
    inputs = {
        "diameter": diameter,
        "spacing": spacing,
        "length": length,
        "tieCount": ties,
        "tieLength": tie_length,
        "unitWeight": uw,
    }
    return _result(weight, waste, formula, inputs)


def hoops_weight(
    diameter: int,
    spacing: float,
    length: float,
    core_diameter: float,
    waste: float = 0.0,
) -> QuantityResult:
    """Circular ties of circumference pi x core diameter along *length*."""
    require_positive("Hoop", spacing=spacing, length=length, core_diameter=core_diameter)
    check_waste(waste)
    uw = unit_weight(diameter)
    ties = ties_along(length, spacing)
    tie_length = math.pi * core_diameter
    weight = ties * tie_length * uw
    formula = f"{ties} hoops × π × {fmt(core_diameter)} m × {uw} kg/m = {weight:.2f} kg"
    inputs = {
        "diameter": diameter,
        "spacing": spacing,
        "length": length,
        "tieCount": ties,
        "tieLength": tie_length,
        "unitWeight": uw,
    }
    return _result(weight, waste, formula, inputs)


def slab_bars_weight(
    diameter: int,
    spacing: float,
    span_length: float,
    span_count: int = 1,
    lap_multiplier: float = DEFAULT_LAP_MULTIPLIER,
    waste: float = 0.0,
) -> QuantityResult:
    """Slab bars in one direction.

    bars per span = ceil(span / spacing); each bar is the span plus a lap
    anchorage into the support at both ends.
    """
    require_positive("Slab rebar", spacing=spacing, span_length=span_length)
    if span_count < 1:
        raise InvalidDimension(f"Span count must be at least 1 (spans={span_count})")
    check_waste(waste)
    uw = unit_weight(diameter)
    lap = lap_length(diameter, lap_multiplier)
    bars = bars_across(span_length, spacing)
    bar_length = span_length + 2 * lap
    weight = bars * bar_length * uw * span_count
    formula = (
        f"{bars} bars × ({fmt(span_length)} + 2 × {lap:.2f} lap) m × {uw} kg/m "
        f"× {span_count} span(s) = {weight:.2f} kg"
    )
    inputs = {
        "diameter": diameter,
        "spacing": spacing,
        "spanLength": span_length,
        "spanCount": span_count,
        "barCount": bars,
        "barLength": bar_length,
        "unitWeight": uw,
    }
    return _result(weight, waste, formula, inputs)
