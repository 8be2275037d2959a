"""Tests for the run store and the Estimator facade."""

from __future__ import annotations

import re

import pytest

from boqengine import Estimator
from boqengine.errors import UnitMismatch
from boqengine.models.project import (
    ElementInstance,
    ElementTemplate,
    GridLine,
    Level,
    Placement,
    Project,
)
from boqengine.models.takeoff import CalcRun
from boqengine.runs.projects import ProjectStore
from boqengine.runs.recorder import RunStore, new_run_id


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _run(run_id: str, project_id: str = "p1", timestamp: str = "2024-01-01T00:00:00+00:00", **kw) -> CalcRun:
    return CalcRun(run_id=run_id, project_id=project_id, timestamp=timestamp, status="completed", **kw)


def _project(instances=None) -> Project:
    return Project(
        id="p1",
        grid_x=[GridLine(label="A", offset=0), GridLine(label="B", offset=6)],
        grid_y=[GridLine(label="1", offset=0), GridLine(label="2", offset=5)],
        levels=[Level(label="GF", elevation=0), Level(label="2F", elevation=3)],
        element_templates=[
            ElementTemplate(id="tpl-beam", type="beam", properties={"width": 0.3, "height": 0.5})
        ],
        element_instances=instances
        if instances is not None
        else [
            ElementInstance(
                id="B1", template_id="tpl-beam", placement=Placement(grid_ref=["A-B"], level_id="GF")
            )
        ],
    )


# ---------------------------------------------------------------------------
# Run ids
# ---------------------------------------------------------------------------

class TestRunId:
    def test_format(self):
        assert re.fullmatch(r"run_1700000000000_[a-z0-9]{9}", new_run_id(1700000000000))

    def test_unique(self):
        assert len({new_run_id(1) for _ in range(50)}) == 50

    def test_uses_clock(self):
        assert re.fullmatch(r"run_\d{13}_[a-z0-9]{9}", new_run_id())


# ---------------------------------------------------------------------------
# Run store
# ---------------------------------------------------------------------------

class TestRunStore:
    """Append-only run history."""

    def test_record_and_get(self):
        store = RunStore()
        store.record(_run("r1", summary={"lineCount": 3}))
        run = store.get("r1")
        assert run is not None
        assert run.summary == {"lineCount": 3}
        assert run.status == "completed"

    def test_get_missing(self):
        assert RunStore().get("nope") is None

    def test_duplicate_rejected(self):
        store = RunStore()
        store.record(_run("r1"))
        with pytest.raises(ValueError, match="Run already recorded"):
            store.record(_run("r1"))

    def test_newest_first(self):
        store = RunStore()
        store.record(_run("r1", timestamp="2024-01-01T00:00:01+00:00"))
        store.record(_run("r3", timestamp="2024-01-01T00:00:03+00:00"))
        store.record(_run("r2", timestamp="2024-01-01T00:00:02+00:00"))
        assert [r.run_id for r in store.list_runs("p1")] == ["r3", "r2", "r1"]
        assert store.latest("p1").run_id == "r3"

    def test_history_capped_at_ten(self):
        store = RunStore()
        for i in range(15):
            store.record(_run(f"r{i:02d}", timestamp=f"2024-01-01T00:00:{i:02d}+00:00"))
        runs = store.list_runs("p1", limit=50)
        assert len(runs) == 10
        assert runs[0].run_id == "r14"
        assert store.count("p1") == 15

    def test_scoped_by_project(self):
        store = RunStore()
        store.record(_run("r1", project_id="p1"))
        store.record(_run("r2", project_id="p2"))
        assert [r.run_id for r in store.list_runs("p2")] == ["r2"]
        assert store.latest("p3") is None
        assert store.count() == 2

    def test_persists_to_file(self, tmp_path):
        db = tmp_path / "runs.db"
        store = RunStore(db)
        store.record(_run("r1"))
        store.close()
        reopened = RunStore(db)
        assert reopened.get("r1") is not None
        reopened.close()


# ---------------------------------------------------------------------------
# Project store
# ---------------------------------------------------------------------------

class TestProjectStore:
    """Whole-snapshot save and load."""

    def test_round_trip(self):
        store = ProjectStore()
        project = _project()
        store.save(project)
        loaded = store.load("p1")
        assert loaded == project

    def test_save_replaces(self):
        store = ProjectStore()
        store.save(_project())
        store.save(_project(instances=[]))
        assert store.load("p1").element_instances == []
        assert store.project_ids() == ["p1"]

    def test_missing(self):
        assert ProjectStore().load("nope") is None


# ---------------------------------------------------------------------------
# Estimator facade
# ---------------------------------------------------------------------------

class TestEstimator:
    """Takeoff, BOQ and history through one entry point."""

    def test_calculate(self):
        est = Estimator()
        run = est.calculate(_project())
        assert run.status == "completed"
        assert run.project_id == "p1"
        assert [ln.id for ln in run.takeoff_lines] == ["tof_B1_concrete", "tof_B1_formwork"]
        assert run.summary["boqLineCount"] == 2
        assert run.summary["totalConcrete"] == pytest.approx(0.945)
        assert "durationMs" in run.summary

    def test_run_recorded(self):
        est = Estimator()
        run = est.calculate(_project())
        assert est.latest_run("p1").run_id == run.run_id
        assert len(est.history("p1")) == 1

    def test_errors_do_not_fail_by_default(self):
        bad = ElementInstance(id="X1", template_id="nope", placement=Placement(grid_ref=["A-B"], level_id="GF"))
        run = Estimator().calculate(_project([bad]))
        assert run.status == "completed"
        assert run.errors[0].code == "TemplateNotFound"

    def test_fail_on_errors(self):
        bad = ElementInstance(id="X1", template_id="nope", placement=Placement(grid_ref=["A-B"], level_id="GF"))
        run = Estimator().calculate(_project([bad]), fail_on_errors=True)
        assert run.status == "failed"

    def test_report(self):
        est = Estimator()
        md = est.report(est.calculate(_project()))
        assert "## Takeoff Lines" in md
        assert "## Bill of Quantities" in md
        assert "900 (1) a" in md

    def test_search_catalog(self):
        results = Estimator().search_catalog("formwork")
        assert [r.item_number for r in results] == ["903 (1)"]

    def test_validate_instances(self):
        bad = ElementInstance(id="X1", template_id="nope", placement=Placement(grid_ref=["A-B"], level_id="GF"))
        issues = Estimator().validate_instances(_project([bad]))
        assert [i.code for i in issues] == ["TemplateNotFound"]

    def test_add_finish_type(self):
        est = Estimator()
        project = est.add_finish_type(
            _project(),
            {"id": "f1", "category": "paint", "dpwhItemNumberRaw": "1032 (1) a", "unit": "Square Meter"},
        )
        assert [f.id for f in project.finish_types] == ["f1"]
        with pytest.raises(UnitMismatch):
            est.add_roof_type(project, {"id": "rt", "dpwhItemNumberRaw": "1013 (1)", "unit": "Each"})

    def test_calculate_saved(self, tmp_path):
        est = Estimator(runs_db=tmp_path / "est.db")
        est.projects.save(_project())
        run = est.calculate_saved("p1")
        assert run.status == "completed"
        assert est.latest_run("p1").run_id == run.run_id

    def test_calculate_saved_missing(self):
        with pytest.raises(KeyError):
            Estimator().calculate_saved("ghost")
