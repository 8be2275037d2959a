"""Tests for rebar grades, unit weights, lap lengths and bar weights."""

from __future__ import annotations

import math
import re

import pytest

from boqengine.calc.rebar import (
    REBAR_GRADES,
    hoops_weight,
    lap_length,
    main_bars_weight,
    rebar_grade,
    rebar_pay_item,
    slab_bars_weight,
    stirrups_weight,
    ties_along,
    unit_weight,
)
from boqengine.errors import (
    InvalidDimension,
    MissingDimension,
    UnknownDiameter,
    UnsupportedDiameter,
)


# ---------------------------------------------------------------------------
# Grades and pay items
# ---------------------------------------------------------------------------

class TestGrades:
    """Diameter to grade mapping."""

    @pytest.mark.parametrize("d", [10, 12])
    def test_grade_40(self, d):
        assert rebar_grade(d) == 40

    @pytest.mark.parametrize("d", [16, 20, 25, 28, 32, 36])
    def test_grade_60(self, d):
        assert rebar_grade(d) == 60

    def test_grade_80(self):
        assert rebar_grade(40) == 80

    def test_total_on_supported_set(self):
        assert set(REBAR_GRADES) == {10, 12, 16, 20, 25, 28, 32, 36, 40}

    @pytest.mark.parametrize("d", [8, 14, 22, 50, 0])
    def test_unsupported(self, d):
        with pytest.raises(UnsupportedDiameter):
            rebar_grade(d)


class TestPayItems:
    """Grade plus coating to DPWH item number."""

    def test_grade_40_uncoated(self):
        assert rebar_pay_item(10) == "902 (1) a1"

    def test_grade_60_uncoated(self):
        assert rebar_pay_item(16) == "902 (1) a2"

    def test_grade_60_epoxy(self):
        assert rebar_pay_item(16, epoxy_coated=True) == "902 (2) a2"

    def test_grade_80(self):
        assert rebar_pay_item(40) == "902 (1) a3"

    @pytest.mark.parametrize("d", sorted(REBAR_GRADES))
    @pytest.mark.parametrize("coated", [False, True])
    def test_item_pattern(self, d, coated):
        assert re.fullmatch(r"902 \([12]\) a[123]", rebar_pay_item(d, coated))


# ---------------------------------------------------------------------------
# Unit weights and laps
# ---------------------------------------------------------------------------

class TestUnitWeights:
    """Standard deformed bar weights."""

    @pytest.mark.parametrize(
        "d,kg",
        [(10, 0.617), (12, 0.888), (16, 1.578), (20, 2.466), (25, 3.853), (40, 9.865)],
    )
    def test_known(self, d, kg):
        assert unit_weight(d) == kg

    def test_unknown(self):
        with pytest.raises(UnknownDiameter, match="Unknown rebar diameter"):
            unit_weight(14)


class TestLapLength:
    """Lap = diameter x multiplier / 1000."""

    def test_default_multiplier(self):
        assert lap_length(16) == pytest.approx(0.64)
        assert lap_length(20) == pytest.approx(0.8)

    def test_custom_multiplier(self):
        assert lap_length(16, 50) == pytest.approx(0.8)

    def test_invalid(self):
        with pytest.raises(InvalidDimension):
            lap_length(16, 0)


# ---------------------------------------------------------------------------
# Bar weights
# ---------------------------------------------------------------------------

class TestMainBars:
    """count x (length + lap) x unit weight."""

    def test_beam_main_bars(self):
        r = main_bars_weight(16, 4, 6.0)
        assert 40 < r.primary_quantity < 44
        assert r.primary_quantity == pytest.approx(4 * 6.64 * 1.578)
        assert "bars" in r.formula_text
        assert r.unit == "kg"

    def test_waste(self):
        r = main_bars_weight(16, 4, 6.0, waste=0.03)
        assert r.quantity_with_waste == pytest.approx(r.primary_quantity * 1.03)

    def test_lap_in_snapshot(self):
        r = main_bars_weight(20, 2, 3.0)
        assert r.inputs_snapshot["lapLength"] == pytest.approx(0.8)

    def test_count_required(self):
        with pytest.raises(MissingDimension):
            main_bars_weight(16, None, 6.0)

    def test_zero_count(self):
        with pytest.raises(InvalidDimension):
            main_bars_weight(16, 0, 6.0)

    def test_unknown_diameter(self):
        with pytest.raises(UnknownDiameter):
            main_bars_weight(14, 4, 6.0)


class TestTies:
    """Stirrups, column ties and hoops."""

    def test_tie_count_is_float_safe(self):
        # 6 / 0.15 is 40.00000000000001 in binary floating point
        assert ties_along(6.0, 0.15) == 41

    def test_stirrups(self):
        r = stirrups_weight(10, 0.15, 6.0, 0.3, 0.5)
        assert 38 < r.primary_quantity < 47
        assert r.inputs_snapshot["tieCount"] == 41
        assert r.inputs_snapshot["tieLength"] == pytest.approx(1.6)
        assert r.primary_quantity == pytest.approx(41 * 1.6 * 0.617)

    def test_hoops(self):
        r = hoops_weight(10, 0.15, 3.0, 0.4)
        assert r.inputs_snapshot["tieCount"] == 21
        assert r.primary_quantity == pytest.approx(21 * math.pi * 0.4 * 0.617)

    def test_zero_spacing(self):
        with pytest.raises(InvalidDimension):
            stirrups_weight(10, 0, 6.0, 0.3, 0.5)


class TestSlabBars:
    """bars = ceil(span / spacing), bar length = span + 2 x lap."""

    def test_single_span(self):
        r = slab_bars_weight(12, 0.2, 6.0, 1)
        assert 180 < r.primary_quantity < 190
        assert "bars" in r.formula_text
        assert r.inputs_snapshot["barCount"] == 30

    def test_span_count_multiplies(self):
        one = slab_bars_weight(12, 0.2, 6.0, 1)
        three = slab_bars_weight(12, 0.2, 6.0, 3)
        assert three.primary_quantity == pytest.approx(3 * one.primary_quantity)

    def test_zero_spans(self):
        with pytest.raises(InvalidDimension):
            slab_bars_weight(12, 0.2, 6.0, 0)
