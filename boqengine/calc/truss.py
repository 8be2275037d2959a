"""Steel roof truss calculator.

Input dimensions are in millimetres; member lengths and weights are
reported in metres and kilograms.
"""

from __future__ import annotations

import logging
import math

from boqengine.config import MAX_TRUSS_SPACING_MM, TRUSS_SPAN_LIMITS_M
from boqengine.errors import InvalidDimension
from boqengine.models.roof import (
    TrussGeometry,
    TrussMember,
    TrussParameters,
    TrussResult,
    TrussSummary,
)

logger = logging.getLogger(__name__)


def truss_count(building_length_mm: float, spacing_mm: float) -> int:
    """Trusses at both ends and at every spacing interval: ceil(L / s) + 1."""
    if building_length_mm <= 0 or spacing_mm <= 0:
        raise InvalidDimension("Building length and truss spacing must be positive")
    return math.ceil(building_length_mm / spacing_mm) + 1


def validate_truss_parameters(params: TrussParameters) -> list[str]:
    """Return advisory warnings; an empty list means nothing unusual."""
    warnings: list[str] = []
    span_m = params.span_mm / 1000
    low, high = TRUSS_SPAN_LIMITS_M
    if span_m < low:
        warnings.append(f"Span {span_m:g} m is below the typical minimum of {low:g} m")
    if span_m > high:
        warnings.append(f"Span {span_m:g} m exceeds the typical maximum of {high:g} m")
    if params.spacing_mm > MAX_TRUSS_SPACING_MM:
        warnings.append(
            f"Truss spacing {params.spacing_mm:g} mm exceeds {MAX_TRUSS_SPACING_MM} mm"
        )
    if params.middle_rise_mm >= params.span_mm:
        warnings.append("Middle rise is not smaller than the span")
    return warnings


def _web_members(span: float, rise: float, verticals: int) -> list[tuple[str, float]]:
    """Verticals at equal panel points and one diagonal per interior panel."""
    if verticals == 0:
        return []
    half = span / 2
    panel = span / (verticals + 1)
    xs = [panel * i for i in range(1, verticals + 1)]
    heights = [rise * (1 - abs(x - half) / half) for x in xs]
    members = [("web_vertical", h) for h in heights]
    for a, b in zip(heights, heights[1:]):
        members.append(("web_diagonal", math.hypot(panel, max(a, b))))
    return members


def calculate_truss(params: TrussParameters, building_length_mm: float | None = None) -> TrussResult:
    """Compute one truss's members and weights.

    Top chord = 2 x sqrt((span/2)^2 + rise^2); bottom chord = span + 2 x
    overhang.  When *building_length_mm* is given the truss count for the
    building is included, otherwise it is 1.
    """
    span = params.span_mm / 1000
    rise = params.middle_rise_mm / 1000
    overhang = params.overhang_mm / 1000

    top_length = 2 * math.hypot(span / 2, rise)
    bottom_length = span + 2 * overhang
    members = [
        TrussMember(
            kind="top_chord",
            length_m=top_length,
            weight_kg=top_length * params.top_chord.weight_kg_per_m,
        ),
        TrussMember(
            kind="bottom_chord",
            length_m=bottom_length,
            weight_kg=bottom_length * params.bottom_chord.weight_kg_per_m,
        ),
    ]
    for kind, length in _web_members(span, rise, params.vertical_web_count):
        members.append(
            TrussMember(kind=kind, length_m=length, weight_kg=length * params.web.weight_kg_per_m)
        )

    webs = [m for m in members if m.kind.startswith("web")]
    web_length = sum(m.length_m for m in webs)
    summary = TrussSummary(
        top_chord_length_m=top_length,
        bottom_chord_length_m=bottom_length,
        web_count=len(webs),
        web_length_m=web_length,
        top_chord_weight_kg=members[0].weight_kg,
        bottom_chord_weight_kg=members[1].weight_kg,
        web_weight_kg=sum(m.weight_kg for m in webs),
        total_weight_kg=sum(m.weight_kg for m in members),
    )
    geometry = TrussGeometry(
        span_m=span,
        rise_m=rise,
        pitch_deg=math.degrees(math.atan2(rise, span / 2)),
        height_m=rise,
    )
    count = truss_count(building_length_mm, params.spacing_mm) if building_length_mm else 1
    warnings = validate_truss_parameters(params)
    for w in warnings:
        logger.warning("Truss %s: %s", params.truss_type, w)
    return TrussResult(
        geometry=geometry,
        members=members,
        summary=summary,
        truss_count=count,
        warnings=warnings,
    )
