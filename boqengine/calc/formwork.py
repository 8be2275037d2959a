"""Formwork contact-area calculators (m²)."""

from __future__ import annotations

import math

from boqengine.calc.formula import check_waste, fmt, require_positive
from boqengine.errors import MissingDimension
from boqengine.models.takeoff import QuantityResult

UNIT = "m²"


def _result(area: float, waste: float, formula: str, inputs: dict[str, float]) -> QuantityResult:
    return QuantityResult(
        primary_quantity=area,
        quantity_with_waste=area * (1 + waste),
        unit=UNIT,
        formula_text=formula,
        inputs_snapshot={**inputs, "waste": waste},
    )


def beam_formwork(width: float, height: float, length: float, waste: float = 0.0) -> QuantityResult:
    """Two sides plus bottom.  The soffit of the slab above is not included."""
    require_positive("Beam", width=width, height=height, length=length)
    check_waste(waste)
    sides = 2 * height * length
    bottom = width * length
    area = sides + bottom
    formula = (
        f"Sides: 2 × {fmt(height)} × {fmt(length)} = {sides:.2f} m², "
        f"Bottom: {fmt(width)} × {fmt(length)} = {bottom:.2f} m², "
        f"Total: {area:.2f} m²"
    )
    inputs = {
        "width": width,
        "height": height,
        "length": length,
        "sidesArea": sides,
        "bottomArea": bottom,
    }
    return _result(area, waste, formula, inputs)


def slab_formwork(area: float, waste: float = 0.0) -> QuantityResult:
    require_positive("Slab", area=area)
    check_waste(waste)
    formula = f"Slab soffit area = {fmt(area)} m²"
    return _result(area, waste, formula, {"area": area})


def column_formwork_rectangular(
    width: float, height: float, length: float, waste: float = 0.0
) -> QuantityResult:
    require_positive("Column", width=width, height=height, length=length)
    check_waste(waste)
    perimeter = 2 * (width + height)
    area = perimeter * length
    formula = (
        f"Perimeter: 2 × ({fmt(width)} + {fmt(height)}) = {perimeter:.2f} m, "
        f"Area: {perimeter:.2f} × {fmt(length)} = {area:.2f} m²"
    )
    inputs = {"width": width, "height": height, "length": length, "perimeter": perimeter}
    return _result(area, waste, formula, inputs)


def column_formwork_circular(
    diameter: float | None, length: float, waste: float = 0.0
) -> QuantityResult:
    if diameter is None or diameter <= 0:
        raise MissingDimension("Circular column requires a positive diameter")
    require_positive("Column", length=length)
    check_waste(waste)
    circumference = math.pi * diameter
    area = circumference * length
    formula = (
        f"Circumference: π × {fmt(diameter)} = {circumference:.2f} m, "
        f"Area: {circumference:.2f} × {fmt(length)} = {area:.2f} m²"
    )
    inputs = {"diameter": diameter, "length": length, "circumference": circumference}
    return _result(area, waste, formula, inputs)


def footing_formwork(length: float, width: float, depth: float, waste: float = 0.0) -> QuantityResult:
    """Edge forms of a mat or footing: perimeter x depth."""
    require_positive("Footing", length=length, width=width, depth=depth)
    check_waste(waste)
    perimeter = 2 * (length + width)
    area = perimeter * depth
    formula = (
        f"Perimeter: 2 × ({fmt(length)} + {fmt(width)}) = {perimeter:.2f} m, "
        f"Area: {perimeter:.2f} × {fmt(depth)} = {area:.2f} m²"
    )
    inputs = {"length": length, "width": width, "depth": depth, "perimeter": perimeter}
    return _result(area, waste, formula, inputs)
