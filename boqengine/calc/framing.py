"""Roof framing: purlins, bracing, ridge cap and eave girts."""

from __future__ import annotations

import logging
import math

from boqengine.errors import InvalidDimension
from boqengine.models.roof import FramingParameters, FramingResult, TrussParameters

logger = logging.getLogger(__name__)

_EPS = 1e-9

# Members per braced bay on one roof slope
_BRACING_MEMBERS = {"X-Brace": 2, "Diagonal": 1, "K-Brace": 2, "None": 0}


def purlin_lines(half_span_mm: float, spacing_mm: float) -> int:
    """Purlin lines across both slopes; eave-to-ridge per slope, ridge shared."""
    per_slope = int(math.floor(half_span_mm / spacing_mm + _EPS)) + 1
    return 2 * per_slope - 1


def calculate_framing(
    framing: FramingParameters,
    truss: TrussParameters,
    building_length_mm: float,
) -> FramingResult:
    if building_length_mm <= 0:
        raise InvalidDimension("Building length must be positive")
    warnings: list[str] = []
    length_m = building_length_mm / 1000

    half_slope_mm = math.hypot(truss.span_mm / 2, truss.middle_rise_mm)
    lines = purlin_lines(half_slope_mm, framing.purlin_spacing_mm)
    if framing.include_eave_girt:
        eave_girt_length = 2 * length_m
    else:
        eave_girt_length = 0.0
    purlin_length = lines * length_m + eave_girt_length
    purlin_weight = purlin_length * framing.purlin.weight_kg_per_m

    if (
        framing.max_purlin_spacing_mm is not None
        and framing.purlin_spacing_mm > framing.max_purlin_spacing_mm
    ):
        warnings.append(
            f"Purlin spacing {framing.purlin_spacing_mm:g} mm exceeds the roofing "
            f"maximum of {framing.max_purlin_spacing_mm:g} mm"
        )

    per_bay = _BRACING_MEMBERS[framing.bracing_type]
    if per_bay and framing.bracing is not None:
        bays = math.ceil(building_length_mm / framing.bracing_interval_mm)
        members = bays * per_bay * 2
        member_length = math.hypot(truss.spacing_mm, half_slope_mm) / 1000
        bracing_length = members * member_length
        bracing_weight = bracing_length * framing.bracing.weight_kg_per_m
    else:
        bays = members = 0
        bracing_length = bracing_weight = 0.0

    for w in warnings:
        logger.warning("Framing: %s", w)
    return FramingResult(
        purlin_lines=lines,
        purlin_length_m=purlin_length,
        purlin_weight_kg=purlin_weight,
        bracing_bays=bays,
        bracing_members=members,
        bracing_length_m=bracing_length,
        bracing_weight_kg=bracing_weight,
        ridge_cap_length_m=length_m if framing.include_ridge_cap else 0.0,
        eave_girt_length_m=eave_girt_length,
        warnings=warnings,
    )
