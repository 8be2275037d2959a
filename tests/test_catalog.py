"""Tests for the pay-item catalog, creation-time reference checks and BOQ reconciliation."""

from __future__ import annotations

import json

import pytest

from boqengine.catalog import JsonCatalog, LocalCatalog, compute_boq
from boqengine.catalog.provider import InMemoryCatalog, clamp_limit
from boqengine.catalog.reconciler import boq_line_id, normalize_unit, resolve_pay_item
from boqengine.catalog.references import (
    add_schedule_item,
    create_finish_type,
    create_roof_type,
    validate_pay_item,
)
from boqengine.errors import CatalogItemNotFound, UnitMismatch
from boqengine.models.catalog import PayItem
from boqengine.models.project import (
    ElementInstance,
    ElementTemplate,
    GridLine,
    Level,
    MainBars,
    Placement,
    Project,
    RebarConfig,
    ScheduleItem,
    SecondaryBars,
    Stirrups,
)
from boqengine.models.takeoff import TakeoffLine
from boqengine.takeoff import compute_takeoff


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _line(id="tof_x", unit="m³", tags=None, resource_key="concrete-class-a", quantity=1.0, trade="Concrete"):
    return TakeoffLine(
        id=id,
        source_element_id="x",
        trade=trade,
        resource_key=resource_key,
        quantity=quantity,
        unit=unit,
        formula_text="",
        tags=tags or [],
    )


def _structural_project() -> Project:
    return Project(
        id="p1",
        grid_x=[GridLine(label="A", offset=0), GridLine(label="B", offset=6), GridLine(label="C", offset=10)],
        grid_y=[GridLine(label="1", offset=0), GridLine(label="2", offset=5)],
        levels=[Level(label="GF", elevation=0), Level(label="2F", elevation=3)],
        element_templates=[
            ElementTemplate(
                id="tpl-beam",
                type="beam",
                properties={"width": 0.3, "height": 0.5},
                rebar_config=RebarConfig(
                    main_bars=MainBars(count=4, diameter=16),
                    stirrups=Stirrups(diameter=10, spacing=0.15),
                ),
            ),
            ElementTemplate(
                id="tpl-slab",
                type="slab",
                properties={"thickness": 0.125},
                rebar_config=RebarConfig(
                    main_bars=MainBars(diameter=12, spacing=0.2),
                    secondary_bars=SecondaryBars(diameter=10, spacing=0.25),
                ),
            ),
        ],
        element_instances=[
            ElementInstance(id="B1", template_id="tpl-beam", placement=Placement(grid_ref=["A-B"], level_id="GF")),
            ElementInstance(
                id="S1", template_id="tpl-slab", placement=Placement(grid_ref=["A-C", "1-2"], level_id="GF")
            ),
        ],
    )


def _schedule_item(**kw) -> ScheduleItem:
    data = dict(id="pl1", category="plumbing", dpwh_item_number_raw="1002 (1)", unit="Each", qty=12)
    data.update(kw)
    return ScheduleItem(**data)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class TestLocalCatalog:
    """Embedded seed catalog lookups and search."""

    def test_find(self):
        item = LocalCatalog().find("900 (1) a")
        assert item is not None
        assert item.unit == "Cubic Meter"
        assert item.trade == "Concrete"

    def test_find_strips_whitespace(self):
        assert LocalCatalog().find("  903 (1) ") is not None

    def test_find_missing(self):
        assert LocalCatalog().find("9999") is None

    def test_search_query_case_insensitive(self):
        results = LocalCatalog().search("STRUCTURAL CONCRETE")
        assert {r.item_number for r in results} == {"900 (1) a", "900 (1) c"}

    def test_search_by_item_number(self):
        results = LocalCatalog().search("902")
        assert len(results) == 6

    def test_search_trade_exact(self):
        results = LocalCatalog().search(trade="Rebar")
        assert all(r.trade == "Rebar" for r in results)
        assert len(results) == 6
        assert LocalCatalog().search(trade="rebar") == []

    def test_search_category_substring(self):
        results = LocalCatalog().search(category="floor")
        assert {r.item_number for r in results} == {"1018 (1)", "1019 (1)", "1021 (1)"}

    def test_search_combined_filters(self):
        results = LocalCatalog().search("concrete", trade="Concrete")
        assert len(results) == 2

    def test_search_limit(self):
        assert len(LocalCatalog().search(limit=3)) == 3

    def test_search_keeps_catalog_order(self):
        results = LocalCatalog().search("902 (1)")
        assert [r.item_number for r in results] == ["902 (1) a1", "902 (1) a2", "902 (1) a3"]

    @pytest.mark.parametrize("limit,expected", [(None, 1000), (0, 1), (-5, 1), (50, 50), (10000, 5000)])
    def test_clamp_limit(self, limit, expected):
        assert clamp_limit(limit) == expected

    def test_version(self):
        assert LocalCatalog().version


class TestJsonCatalog:
    """Catalog loaded from a JSON file."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                {
                    "version": "2024-01",
                    "items": [
                        {
                            "itemNumber": "X 1",
                            "description": "Test item",
                            "unit": "Each",
                            "category": "Misc",
                            "trade": "Other",
                        }
                    ],
                }
            ),
            encoding="utf-8",
        )
        catalog = JsonCatalog.from_file(path)
        assert len(catalog) == 1
        assert catalog.version == "2024-01"
        assert catalog.find("X 1").description == "Test item"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")
        assert len(JsonCatalog.from_file(path)) == 0


# ---------------------------------------------------------------------------
# Creation-time reference checks
# ---------------------------------------------------------------------------

class TestReferences:
    """Finish types, roof types and schedule items must match the catalog."""

    def test_valid_pay_item(self):
        item = validate_pay_item("1018 (1)", "Square Meter", LocalCatalog())
        assert item.item_number == "1018 (1)"

    def test_missing_item(self):
        with pytest.raises(CatalogItemNotFound, match="DPWH item not found in catalog: 9999"):
            validate_pay_item("9999", "Each", LocalCatalog())

    def test_unit_mismatch_message(self):
        with pytest.raises(UnitMismatch) as excinfo:
            validate_pay_item("1018 (1)", "Cubic Meter", LocalCatalog())
        assert excinfo.value.message == 'Unit mismatch: expected "Square Meter" but got "Cubic Meter"'

    def test_unit_symbol_not_accepted(self):
        with pytest.raises(UnitMismatch):
            create_finish_type(
                {"id": "f1", "category": "floor", "dpwhItemNumberRaw": "1018 (1)", "unit": "m²"},
                LocalCatalog(),
            )

    def test_create_finish_type_from_payload(self):
        finish = create_finish_type(
            {
                "id": "f1",
                "category": "floor",
                "dpwhItemNumberRaw": "1018 (1)",
                "unit": "Square Meter",
                "wastePercent": 0.05,
            },
            LocalCatalog(),
        )
        assert finish.waste_percent == 0.05

    def test_create_roof_type(self):
        roof_type = create_roof_type(
            {"id": "rt", "dpwhItemNumberRaw": "1013 (1)", "unit": "Square Meter"}, LocalCatalog()
        )
        assert roof_type.area_basis == "slopeArea"
        assert roof_type.lap_allowance_percent == pytest.approx(0.10)

    def test_add_schedule_item_returns_new_snapshot(self):
        project = Project(id="p1")
        updated = add_schedule_item(project, _schedule_item(), LocalCatalog())
        assert len(updated.schedule_items) == 1
        assert project.schedule_items == []

    def test_add_rejected_item_leaves_project(self):
        project = Project(id="p1")
        with pytest.raises(UnitMismatch):
            add_schedule_item(project, _schedule_item(unit="Set"), LocalCatalog())


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------

class TestReconcilerHelpers:
    """Unit normalisation, line ids and pay-item resolution."""

    @pytest.mark.parametrize(
        "unit,expected",
        [("m³", "Cubic Meter"), ("m3", "Cubic Meter"), ("m²", "Square Meter"), ("kg", "Kilogram"),
         ("KG", "Kilogram"), ("ea", "Each"), ("Square Meter", "Square Meter")],
    )
    def test_normalize_unit(self, unit, expected):
        assert normalize_unit(unit) == expected

    def test_boq_line_id(self):
        assert boq_line_id("900 (1) a") == "boq_900_1_a"
        assert boq_line_id("1047 (8) b") == "boq_1047_8_b"

    def test_resolve_from_tag(self):
        assert resolve_pay_item(_line(tags=["dpwh:900 (1) c"])) == "900 (1) c"

    def test_resolve_defaults(self):
        assert resolve_pay_item(_line()) == "900 (1) a"
        assert resolve_pay_item(_line(resource_key="formwork-beam")) == "903 (1)"
        assert resolve_pay_item(_line(resource_key="rebar-20mm")) == "902 (1) a2"

    def test_resolve_unmapped(self):
        with pytest.raises(CatalogItemNotFound):
            resolve_pay_item(_line(resource_key="mystery"))


class TestComputeBoq:
    """Aggregation of takeoff lines into pay-item lines."""

    def _boq(self):
        takeoff = compute_takeoff(_structural_project())
        return compute_boq(takeoff.takeoff_lines, [], LocalCatalog())

    def test_concrete_aggregated(self):
        by_item = {b.pay_item_number: b for b in self._boq().boq_lines}
        concrete = by_item["900 (1) a"]
        assert concrete.quantity == pytest.approx(7.508)
        assert concrete.unit == "Cubic Meter"
        assert concrete.source_takeoff_line_ids == ["tof_B1_concrete", "tof_S1_concrete"]
        assert concrete.id == "boq_900_1_a"

    def test_formwork_aggregated(self):
        by_item = {b.pay_item_number: b for b in self._boq().boq_lines}
        assert by_item["903 (1)"].quantity == pytest.approx(57.8)

    def test_rebar_grouped_by_grade(self):
        by_item = {b.pay_item_number: b for b in self._boq().boq_lines}
        assert by_item["902 (1) a2"].source_takeoff_line_ids == ["tof_B1_rebar_main"]
        assert len(by_item["902 (1) a1"].source_takeoff_line_ids) == 3
        assert by_item["902 (1) a1"].unit == "Kilogram"

    def test_quantities_conserved(self):
        takeoff = compute_takeoff(_structural_project())
        boq = compute_boq(takeoff.takeoff_lines, [], LocalCatalog())
        assert boq.errors == []
        assert sum(len(b.source_takeoff_line_ids) for b in boq.boq_lines) == len(takeoff.takeoff_lines)

    def test_tags(self):
        by_item = {b.pay_item_number: b for b in self._boq().boq_lines}
        tags = by_item["900 (1) a"].tags
        assert tags[:2] == ["dpwh:900 (1) a", "trade:Concrete"]
        assert tags.count("type:beam") == 1
        assert len(tags) == len(set(tags))

    def test_schedule_item_added(self):
        boq = compute_boq([], [_schedule_item()], LocalCatalog())
        assert len(boq.boq_lines) == 1
        assert boq.boq_lines[0].quantity == 12
        assert boq.boq_lines[0].source_takeoff_line_ids == ["tof_sched_pl1"]

    def test_schedule_item_not_doubled(self):
        project = Project(id="p1", schedule_items=[_schedule_item()])
        takeoff = compute_takeoff(project)
        boq = compute_boq(takeoff.takeoff_lines, project.schedule_items, LocalCatalog())
        assert boq.boq_lines[0].quantity == 12

    def test_unit_mismatch_excludes_line(self):
        lines = [_line(id="ok"), _line(id="bad", unit="kg", tags=["dpwh:900 (1) a"])]
        boq = compute_boq(lines, [], LocalCatalog())
        assert boq.boq_lines[0].source_takeoff_line_ids == ["ok"]
        assert boq.errors[0].code == "UnitMismatch"
        assert boq.errors[0].source_id == "bad"

    def test_missing_catalog_item(self):
        boq = compute_boq([_line(tags=["dpwh:9999"])], [], LocalCatalog())
        assert boq.boq_lines == []
        assert boq.errors[0].code == "CatalogItemNotFound"

    def test_injected_catalog(self):
        catalog = InMemoryCatalog(
            [PayItem(item_number="C-1", description="Concrete", unit="Cubic Meter", trade="Concrete")]
        )
        boq = compute_boq([_line(tags=["dpwh:C-1"], quantity=2.5)], [], catalog)
        assert boq.boq_lines[0].description == "Concrete"
        assert boq.boq_lines[0].quantity == 2.5

    def test_volume_rounds_to_three_places(self):
        lines = [_line(id="a", quantity=1.0004), _line(id="b", quantity=1.0004)]
        boq = compute_boq(lines, [], LocalCatalog())
        assert boq.boq_lines[0].quantity == 2.001
