"""Tests for the concrete and formwork unit calculators and rounding."""

from __future__ import annotations

import math

import pytest

from boqengine.calc.concrete import (
    beam_volume,
    column_volume_circular,
    column_volume_rectangular,
    footing_volume,
    slab_volume,
)
from boqengine.calc.formula import fmt
from boqengine.calc.formwork import (
    beam_formwork,
    column_formwork_circular,
    column_formwork_rectangular,
    footing_formwork,
    slab_formwork,
)
from boqengine.calc.rounding import round_area, round_to, round_volume, round_weight
from boqengine.errors import InvalidDimension, InvalidWaste, MissingDimension


# ---------------------------------------------------------------------------
# Concrete
# ---------------------------------------------------------------------------

class TestBeamVolume:
    """Beam concrete volume = width x height x length."""

    def test_basic_volume(self):
        r = beam_volume(0.3, 0.5, 6.0)
        assert r.primary_quantity == pytest.approx(0.9, abs=1e-9)
        assert r.unit == "m³"

    def test_waste_applied(self):
        r = beam_volume(0.3, 0.5, 6.0, 0.05)
        assert r.quantity_with_waste == pytest.approx(0.945, abs=1e-9)

    def test_zero_waste_is_exact(self):
        r = beam_volume(0.25, 0.45, 4.2, 0.0)
        assert r.quantity_with_waste == r.primary_quantity

    @pytest.mark.parametrize(
        "w,h,ln", [(0.2, 0.4, 3.0), (0.35, 0.6, 7.5), (1.0, 1.0, 1.0), (0.123, 0.456, 7.89)]
    )
    def test_volume_matches_product(self, w, h, ln):
        assert beam_volume(w, h, ln).primary_quantity == pytest.approx(w * h * ln, abs=1e-9)

    @pytest.mark.parametrize("waste", [0.0, 0.05, 0.5, 1.0])
    def test_waste_range_inclusive(self, waste):
        r = beam_volume(0.3, 0.5, 6.0, waste)
        assert r.quantity_with_waste == pytest.approx(0.9 * (1 + waste), abs=1e-9)

    def test_formula_contains_operands(self):
        r = beam_volume(0.3, 0.5, 6.0)
        assert "0.3" in r.formula_text
        assert "0.5" in r.formula_text
        assert "6" in r.formula_text

    def test_inputs_snapshot(self):
        r = beam_volume(0.3, 0.5, 6.0, 0.05)
        assert r.inputs_snapshot["width"] == 0.3
        assert r.inputs_snapshot["height"] == 0.5
        assert r.inputs_snapshot["length"] == 6.0
        assert r.inputs_snapshot["waste"] == 0.05

    @pytest.mark.parametrize("w,h,ln", [(0, 0.5, 6), (0.3, -0.5, 6), (0.3, 0.5, 0)])
    def test_non_positive_dimension_rejected(self, w, h, ln):
        with pytest.raises(InvalidDimension, match="Beam dimensions must be positive"):
            beam_volume(w, h, ln)

    @pytest.mark.parametrize("waste", [-0.01, 1.01, 2])
    def test_waste_out_of_range_rejected(self, waste):
        with pytest.raises(InvalidWaste, match="Waste must be between 0 and 1"):
            beam_volume(0.3, 0.5, 6.0, waste)


class TestOtherVolumes:
    """Slab, column and footing volumes."""

    def test_slab_volume(self):
        r = slab_volume(0.125, 50.0, 0.05)
        assert r.primary_quantity == pytest.approx(6.25)
        assert r.quantity_with_waste == pytest.approx(6.5625)

    def test_slab_rejects_zero_area(self):
        with pytest.raises(InvalidDimension):
            slab_volume(0.125, 0)

    def test_rectangular_column(self):
        r = column_volume_rectangular(0.4, 0.4, 3.0)
        assert r.primary_quantity == pytest.approx(0.48)

    def test_circular_column(self):
        r = column_volume_circular(0.4, 3.0)
        assert round(r.primary_quantity, 4) == round(math.pi * 0.2**2 * 3.0, 4)
        assert "π" in r.formula_text

    @pytest.mark.parametrize("diameter", [None, 0, -0.3])
    def test_circular_column_needs_diameter(self, diameter):
        with pytest.raises(MissingDimension):
            column_volume_circular(diameter, 3.0)

    def test_footing(self):
        r = footing_volume(2.0, 2.0, 0.5, 0.05)
        assert r.primary_quantity == pytest.approx(2.0)
        assert r.quantity_with_waste == pytest.approx(2.1)


# ---------------------------------------------------------------------------
# Formwork
# ---------------------------------------------------------------------------

class TestFormwork:
    """Formwork contact areas."""

    def test_beam_sides_and_bottom(self):
        r = beam_formwork(0.3, 0.5, 6.0)
        assert r.primary_quantity == pytest.approx(7.8)
        assert r.inputs_snapshot["sidesArea"] == pytest.approx(6.0)
        assert r.inputs_snapshot["bottomArea"] == pytest.approx(1.8)
        assert r.unit == "m²"

    def test_slab_soffit_only(self):
        r = slab_formwork(50.0)
        assert r.primary_quantity == pytest.approx(50.0)
        assert "soffit" in r.formula_text

    def test_rectangular_column(self):
        r = column_formwork_rectangular(0.4, 0.4, 3.0)
        assert r.primary_quantity == pytest.approx(4.8)
        assert r.inputs_snapshot["perimeter"] == pytest.approx(1.6)

    def test_circular_column(self):
        r = column_formwork_circular(0.4, 3.0)
        assert r.primary_quantity == pytest.approx(math.pi * 0.4 * 3.0)
        assert r.inputs_snapshot["circumference"] == pytest.approx(math.pi * 0.4)

    def test_footing_edges(self):
        r = footing_formwork(2.0, 1.5, 0.5)
        assert r.primary_quantity == pytest.approx(3.5)

    def test_formwork_waste(self):
        r = beam_formwork(0.3, 0.5, 6.0, 0.1)
        assert r.quantity_with_waste == pytest.approx(8.58)

    def test_invalid_dimension(self):
        with pytest.raises(InvalidDimension):
            column_formwork_rectangular(0.4, 0, 3.0)


# ---------------------------------------------------------------------------
# Rounding and formatting
# ---------------------------------------------------------------------------

class TestRounding:
    """Half-away-from-zero rounding."""

    def test_round_volume(self):
        assert round_volume(1.23456, 3) == 1.235
        assert round_volume(1.23456, 2) == 1.23
        assert round_volume(1.23456, 1) == 1.2

    def test_round_area_zero_places(self):
        assert round_area(12.3456, 0) == 12.0

    def test_ties_away_from_zero(self):
        assert round_to(2.675, 2) == 2.68
        assert round_to(0.125, 2) == 0.13
        assert round_to(-1.235, 2) == -1.24

    def test_round_weight_default(self):
        assert round_weight(43.16903) == 43.17

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValueError):
            round_to(1.0, -1)

    def test_fmt(self):
        assert fmt(6.0) == "6"
        assert fmt(0.3) == "0.3"
        assert fmt(12) == "12"
