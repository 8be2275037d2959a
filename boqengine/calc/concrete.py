"""Concrete volume calculators (m³).

Every calculator returns a ``QuantityResult`` whose ``quantity_with_waste``
equals ``primary_quantity * (1 + waste)``.
"""

from __future__ import annotations

import logging
import math

from boqengine.calc.formula import check_waste, fmt, require_positive
from boqengine.errors import MissingDimension
from boqengine.models.takeoff import QuantityResult

logger = logging.getLogger(__name__)

UNIT = "m³"


def _result(volume: float, waste: float, formula: str, inputs: dict[str, float]) -> QuantityResult:
    return QuantityResult(
        primary_quantity=volume,
        quantity_with_waste=volume * (1 + waste),
        unit=UNIT,
        formula_text=formula,
        inputs_snapshot={**inputs, "waste": waste},
    )


def beam_volume(width: float, height: float, length: float, waste: float = 0.0) -> QuantityResult:
    """Volume of a rectangular beam: width x height x length."""
    require_positive("Beam", width=width, height=height, length=length)
    check_waste(waste)
    volume = width * height * length
    formula = f"{fmt(width)} × {fmt(height)} × {fmt(length)} = {volume:.3f} m³"
    return _result(volume, waste, formula, {"width": width, "height": height, "length": length})


def slab_volume(thickness: float, area: float, waste: float = 0.0) -> QuantityResult:
    """Volume of a slab: thickness x plan area."""
    require_positive("Slab", thickness=thickness, area=area)
    check_waste(waste)
    volume = thickness * area
    formula = f"{fmt(thickness)} × {fmt(area)} = {volume:.3f} m³"
    return _result(volume, waste, formula, {"thickness": thickness, "area": area})


def column_volume_rectangular(
    width: float, height: float, length: float, waste: float = 0.0
) -> QuantityResult:
    require_positive("Column", width=width, height=height, length=length)
    check_waste(waste)
    volume = width * height * length
    formula = f"{fmt(width)} × {fmt(height)} × {fmt(length)} = {volume:.3f} m³"
    return _result(volume, waste, formula, {"width": width, "height": height, "length": length})


def column_volume_circular(
    diameter: float | None, length: float, waste: float = 0.0
) -> QuantityResult:
    """Volume of a circular column: pi x (d/2)^2 x length."""
    if diameter is None or diameter <= 0:
        raise MissingDimension("Circular column requires a positive diameter")
    require_positive("Column", length=length)
    check_waste(waste)
    volume = math.pi * (diameter / 2) ** 2 * length
    formula = f"π × ({fmt(diameter)}/2)² × {fmt(length)} = {volume:.3f} m³"
    return _result(volume, waste, formula, {"diameter": diameter, "length": length})


def footing_volume(length: float, width: float, depth: float, waste: float = 0.0) -> QuantityResult:
    require_positive("Footing", length=length, width=width, depth=depth)
    check_waste(waste)
    volume = length * width * depth
    formula = f"{fmt(length)} × {fmt(width)} × {fmt(depth)} = {volume:.3f} m³"
    return _result(volume, waste, formula, {"length": length, "width": width, "depth": depth})
