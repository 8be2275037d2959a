"""Pure quantity calculators: no knowledge of project structure."""

from boqengine.calc.concrete import (
    beam_volume,
    column_volume_circular,
    column_volume_rectangular,
    footing_volume,
    slab_volume,
)
from boqengine.calc.finishes import ceiling_area, floor_area, storey_height, wall_area
from boqengine.calc.formwork import (
    beam_formwork,
    column_formwork_circular,
    column_formwork_rectangular,
    footing_formwork,
    slab_formwork,
)
from boqengine.calc.framing import calculate_framing
from boqengine.calc.rebar import (
    lap_length,
    main_bars_weight,
    rebar_grade,
    rebar_pay_item,
    slab_bars_weight,
    stirrups_weight,
    unit_weight,
)
from boqengine.calc.roofing import generate_roof, pitch_angle, roof_cover, slope_factor
from boqengine.calc.rounding import round_area, round_to, round_volume, round_weight
from boqengine.calc.truss import calculate_truss, truss_count, validate_truss_parameters

__all__ = [
    "beam_formwork",
    "beam_volume",
    "calculate_framing",
    "calculate_truss",
    "ceiling_area",
    "column_formwork_circular",
    "column_formwork_rectangular",
    "column_volume_circular",
    "column_volume_rectangular",
    "floor_area",
    "footing_formwork",
    "footing_volume",
    "generate_roof",
    "lap_length",
    "main_bars_weight",
    "pitch_angle",
    "rebar_grade",
    "rebar_pay_item",
    "roof_cover",
    "round_area",
    "round_to",
    "round_volume",
    "round_weight",
    "slab_bars_weight",
    "slab_formwork",
    "slab_volume",
    "slope_factor",
    "stirrups_weight",
    "storey_height",
    "truss_count",
    "unit_weight",
    "validate_truss_parameters",
    "wall_area",
]
