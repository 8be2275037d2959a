"""Roofing takeoff: roof cover per plane, plus truss and framing steel."""

from __future__ import annotations

import logging

from boqengine.calc.formula import fmt, waste_note
from boqengine.calc.framing import calculate_framing
from boqengine.calc.roofing import roof_cover, roof_plane_computed
from boqengine.calc.rounding import round_area, round_weight
from boqengine.calc.truss import calculate_truss
from boqengine.config import ROOFING_DPWH_ITEMS
from boqengine.errors import ReferenceNotFound, TakeoffError
from boqengine.models.project import Project, RoofPlane
from boqengine.models.roof import TrussDesign
from boqengine.models.takeoff import TakeoffLine
from boqengine.takeoff.batch import TakeoffBatch
from boqengine.takeoff.grid import GridIndex

logger = logging.getLogger(__name__)


def roof_plane_line(plane: RoofPlane, project: Project, grid: GridIndex) -> TakeoffLine:
    roof_type = next((rt for rt in project.roof_types if rt.id == plane.roof_type_id), None)
    if roof_type is None:
        raise ReferenceNotFound(f"Roof type not found: {plane.roof_type_id}")
    grid.level(plane.level_id)

    plan_area, _ = grid.measure(plane.boundary)
    computed = roof_plane_computed(plan_area, plane.slope)
    result = roof_cover(
        plan_area,
        computed.slope_factor,
        roof_type.area_basis,
        roof_type.lap_allowance_percent,
        roof_type.waste_percent,
        roof_type.unit,
    )
    return TakeoffLine(
        id=f"tof_{plane.id}_roof",
        source_element_id=plane.id,
        trade="Roofing",
        resource_key=f"roof-{roof_type.id}",
        quantity=round_area(result.quantity_with_waste),
        unit=roof_type.unit,
        formula_text=result.formula_text,
        inputs_snapshot=result.inputs_snapshot,
        assumptions=list(roof_type.assumptions)
        + [
            f"Area basis: {roof_type.area_basis}",
            f"Lap allowance: {fmt(round(roof_type.lap_allowance_percent * 100, 4))}%",
            waste_note(roof_type.waste_percent),
        ],
        tags=[
            f"roofPlane:{plane.name or plane.id}",
            f"roofType:{roof_type.id}",
            f"level:{plane.level_id}",
            f"dpwh:{roof_type.dpwh_item_number_raw}",
            *plane.tags,
        ],
    )


def _steel_line(
    design: TrussDesign,
    suffix: str,
    item_key: str,
    trade: str,
    resource_key: str,
    quantity: float,
    unit: str,
    formula: str,
    inputs: dict[str, float],
) -> TakeoffLine:
    item, _ = ROOFING_DPWH_ITEMS[item_key]
    return TakeoffLine(
        id=f"tof_{design.id}_{suffix}",
        source_element_id=design.id,
        trade=trade,
        resource_key=resource_key,
        quantity=quantity,
        unit=unit,
        formula_text=formula,
        inputs_snapshot=inputs,
        assumptions=[f"DPWH Item: {item}"],
        tags=[f"truss:{design.truss.truss_type}", f"dpwh:{item}"],
    )


def truss_lines(design: TrussDesign) -> tuple[list[TakeoffLine], list[str]]:
    """Lines for truss steel, purlins, bracing and ridge cap, plus warnings."""
    truss = calculate_truss(design.truss, design.building_length_mm)
    per_truss = truss.summary.total_weight_kg
    lines = [
        _steel_line(
            design,
            "truss_steel",
            "truss_steel",
            "Structural Steel",
            "steel-truss",
            round_weight(per_truss * truss.truss_count),
            "kg",
            f"{truss.truss_count} trusses × {per_truss:.2f} kg = "
            f"{per_truss * truss.truss_count:.2f} kg",
            {
                "trussCount": truss.truss_count,
                "weightPerTruss": per_truss,
                "span_m": truss.geometry.span_m,
                "rise_m": truss.geometry.rise_m,
            },
        )
    ]
    warnings = list(truss.warnings)

    if design.framing is not None:
        framing = calculate_framing(design.framing, design.truss, design.building_length_mm)
        warnings.extend(framing.warnings)
        lines.append(
            _steel_line(
                design,
                "purlins",
                "purlin_steel",
                "Structural Steel",
                "steel-purlin",
                round_weight(framing.purlin_weight_kg),
                "kg",
                f"{framing.purlin_lines} lines × {design.building_length_mm / 1000:g} m "
                f"× {design.framing.purlin.weight_kg_per_m} kg/m = "
                f"{framing.purlin_weight_kg:.2f} kg",
                {"purlinLines": framing.purlin_lines, "purlinLength_m": framing.purlin_length_m},
            )
        )
        if framing.bracing_members:
            lines.append(
                _steel_line(
                    design,
                    "bracing",
                    "bracing_steel",
                    "Structural Steel",
                    "steel-bracing",
                    framing.bracing_members,
                    "ea",
                    f"{framing.bracing_bays} braced bays → {framing.bracing_members} members "
                    f"({framing.bracing_weight_kg:.2f} kg)",
                    {
                        "bracingBays": framing.bracing_bays,
                        "bracingLength_m": framing.bracing_length_m,
                        "bracingWeightKg": framing.bracing_weight_kg,
                    },
                )
            )
        if framing.ridge_cap_length_m:
            lines.append(
                _steel_line(
                    design,
                    "ridge_cap",
                    "ridge_cap",
                    "Roofing",
                    "roof-ridge-cap",
                    round_area(framing.ridge_cap_length_m),
                    "m",
                    f"Ridge cap = building length {framing.ridge_cap_length_m:g} m",
                    {"ridgeCapLength_m": framing.ridge_cap_length_m},
                )
            )
    return lines, warnings


def roofing_takeoff(project: Project, grid: GridIndex, batch: TakeoffBatch) -> None:
    for plane in project.roof_planes:
        try:
            line = roof_plane_line(plane, project, grid)
        except TakeoffError as exc:
            batch.error(exc, plane.id)
            continue
        batch.add_lines([line], plane.id)

    design = project.truss_design
    if design is None:
        return
    try:
        lines, warnings = truss_lines(design)
    except TakeoffError as exc:
        batch.error(exc, design.id)
        return
    batch.add_lines(lines, design.id)
    for message in warnings:
        batch.warn("TrussAdvisory", message, design.id)
