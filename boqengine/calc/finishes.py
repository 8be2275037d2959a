"""Finish area calculators: floors, ceilings and walls with opening deductions."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from boqengine.calc.formula import check_waste, fmt, require_positive
from boqengine.config import DEFAULT_STOREY_HEIGHT_M
from boqengine.errors import LevelNotFound
from boqengine.models.project import DeductionRule, Level, Opening
from boqengine.models.takeoff import QuantityResult

logger = logging.getLogger(__name__)

UNIT = "m²"


def storey_height(levels: Iterable[Level], level_label: str) -> float:
    """Elevation of the next level above minus this level's elevation.

    Levels at the same elevation are not "above".  A level with nothing
    above it gets ``DEFAULT_STOREY_HEIGHT_M``.
    """
    ordered = sorted(levels, key=lambda lv: lv.elevation)
    current = next((lv for lv in ordered if lv.label == level_label), None)
    if current is None:
        raise LevelNotFound(f"Level not found: {level_label}")
    above = next((lv for lv in ordered if lv.elevation > current.elevation), None)
    if above is None:
        return DEFAULT_STOREY_HEIGHT_M
    return above.elevation - current.elevation


def deductible_openings(
    openings: Iterable[Opening], rule: DeductionRule
) -> tuple[list[Opening], float]:
    """Openings that reduce wall area and their total area.

    An opening counts when its type is included and each unit's area is at
    least the rule threshold; smaller ones are absorbed into wastage.
    """
    if not rule.enabled:
        return [], 0.0
    kept = [
        op
        for op in openings
        if op.type in rule.include_types
        and op.unit_area_m2 >= rule.min_opening_area_to_deduct_m2
    ]
    return kept, sum(op.area_m2 for op in kept)


def floor_area(area: float, waste: float = 0.0) -> QuantityResult:
    require_positive("Floor", area=area)
    check_waste(waste)
    total = area * (1 + waste)
    return QuantityResult(
        primary_quantity=area,
        quantity_with_waste=total,
        unit=UNIT,
        formula_text=f"Floor area: {fmt(area)} m² × (1 + {fmt(waste)}) = {total:.2f} m²",
        inputs_snapshot={"area_m2": area, "waste": waste},
    )


def ceiling_area(area: float, waste: float = 0.0, open_to_below: bool = False) -> QuantityResult | None:
    """Ceiling quantity, or None for a space open to below."""
    if open_to_below:
        logger.debug("Ceiling skipped: space is open to below")
        return None
    require_positive("Ceiling", area=area)
    check_waste(waste)
    total = area * (1 + waste)
    return QuantityResult(
        primary_quantity=area,
        quantity_with_waste=total,
        unit=UNIT,
        formula_text=f"Ceiling area: {fmt(area)} m² × (1 + {fmt(waste)}) = {total:.2f} m²",
        inputs_snapshot={"area_m2": area, "waste": waste},
    )


def wall_area(
    perimeter: float,
    height: float,
    openings: Iterable[Opening] = (),
    rule: DeductionRule | None = None,
    waste: float = 0.0,
    sides: int = 1,
) -> QuantityResult:
    """Net wall area: perimeter x height x sides, less deductible openings, plus waste.

    *perimeter* is a space perimeter or the length of a single wall surface.
    """
    require_positive("Wall", perimeter=perimeter, height=height, sides=sides)
    check_waste(waste)
    rule = rule or DeductionRule()
    gross = perimeter * height * sides
    deducted, deduction = deductible_openings(openings, rule)
    net = max(gross - deduction, 0.0)
    total = net * (1 + waste)

    parts = [f"{fmt(perimeter)} m × {fmt(height)} m"]
    if sides != 1:
        parts.append(f"{sides} sides")
    formula = f"Gross: {' × '.join(parts)} = {gross:.2f} m²"
    if deducted:
        formula += f", Openings: -{deduction:.2f} m² ({len(deducted)})"
    formula += f", Net: {net:.2f} m² × (1 + {fmt(waste)}) = {total:.2f} m²"

    return QuantityResult(
        primary_quantity=net,
        quantity_with_waste=total,
        unit=UNIT,
        formula_text=formula,
        inputs_snapshot={
            "perimeter_m": perimeter,
            "height_m": height,
            "sidesCount": sides,
            "grossArea_m2": gross,
            "openingDeduction_m2": deduction,
            "netArea_m2": net,
            "waste": waste,
        },
    )
