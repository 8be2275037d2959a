"""Estimator: the single entry point for takeoff, BOQ and run history.

Usage::

    from boqengine import Estimator, Project

    est = Estimator(runs_db="runs.db")
    project = Project.model_validate(payload)
    run = est.calculate(project)
    est.projects.save(project)
    run = est.calculate_saved(project.id)
    est.history(project.id)
    est.search_catalog("concrete", trade="Concrete")
    project = est.add_finish_type(project, finish_payload)
    est.validate_instances(project)
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from boqengine.catalog import references
from boqengine.catalog.provider import CatalogProvider, LocalCatalog
from boqengine.catalog.reconciler import compute_boq
from boqengine.errors import TakeoffError
from boqengine.models.catalog import PayItem
from boqengine.models.project import Project
from boqengine.models.takeoff import BOQResult, CalcIssue, CalcRun, TakeoffResult
from boqengine.runs.projects import ProjectStore
from boqengine.runs.recorder import RunStore, new_run_id, utc_timestamp
from boqengine.takeoff.engine import compute_takeoff
from boqengine.takeoff.report import takeoff_markdown
from boqengine.takeoff.validation import validate_element_instances

logger = logging.getLogger(__name__)


class Estimator:
    """Takeoff and BOQ estimator over an injected catalog and run store.

    Parameters
    ----------
    catalog:
        Pay-item lookup.  Defaults to LocalCatalog (embedded seed items).
    runs_db:
        SQLite path for run history and project snapshots.  Defaults to
        ``':memory:'``.
    """

    def __init__(
        self,
        catalog: CatalogProvider | None = None,
        runs_db: str | Path = ":memory:",
    ) -> None:
        self.catalog = catalog or LocalCatalog()
        self.runs = RunStore(runs_db)
        self.projects = ProjectStore(runs_db)

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    def takeoff(self, project: Project) -> TakeoffResult:
        return compute_takeoff(project)

    def boq(self, takeoff: TakeoffResult, project: Project) -> BOQResult:
        return compute_boq(takeoff.takeoff_lines, project.schedule_items, self.catalog)

    def calculate(self, project: Project, *, fail_on_errors: bool = False) -> CalcRun:
        """Compute takeoff and BOQ, record the run and return it.

        The run is ``completed`` unless the calculation raised, or
        *fail_on_errors* is set and any per-entity error was recorded.
        """
        started = time.perf_counter()
        run_id = new_run_id()
        timestamp = utc_timestamp()
        try:
            takeoff = self.takeoff(project)
            boq = self.boq(takeoff, project)
        except TakeoffError as exc:
            logger.error("Run %s failed: %s", run_id, exc.message)
            run = CalcRun(
                run_id=run_id,
                project_id=project.id,
                timestamp=timestamp,
                status="failed",
                errors=[CalcIssue(code=exc.code, message=exc.message, source_id=exc.source_id)],
            )
            return self.runs.record(run)

        errors = takeoff.errors + boq.errors
        summary: dict[str, Any] = takeoff.summary.to_dict()
        summary["boqLineCount"] = len(boq.boq_lines)
        summary["durationMs"] = round((time.perf_counter() - started) * 1000, 2)
        status = "failed" if fail_on_errors and errors else "completed"
        run = CalcRun(
            run_id=run_id,
            project_id=project.id,
            timestamp=timestamp,
            status=status,
            summary=summary,
            takeoff_lines=takeoff.takeoff_lines,
            boq_lines=boq.boq_lines,
            errors=errors,
        )
        return self.runs.record(run)

    def calculate_saved(self, project_id: str, *, fail_on_errors: bool = False) -> CalcRun:
        """Load the stored snapshot of *project_id* and calculate it."""
        project = self.projects.load(project_id)
        if project is None:
            raise KeyError(f"Project not found: {project_id}")
        return self.calculate(project, fail_on_errors=fail_on_errors)

    def report(self, run: CalcRun) -> str:
        """Markdown report of a recorded run."""
        return takeoff_markdown(
            run.takeoff_lines, run.boq_lines, run.errors, title=f"Takeoff {run.run_id}"
        )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history(self, project_id: str) -> list[CalcRun]:
        return self.runs.list_runs(project_id)

    def latest_run(self, project_id: str) -> CalcRun | None:
        return self.runs.latest(project_id)

    # ------------------------------------------------------------------
    # Catalog and validation
    # ------------------------------------------------------------------

    def search_catalog(
        self,
        query: str | None = None,
        trade: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[PayItem]:
        return self.catalog.search(query, trade=trade, category=category, limit=limit)

    def validate_instances(self, project: Project) -> list[CalcIssue]:
        return validate_element_instances(
            project.element_instances,
            project.element_templates,
            project.levels,
            project.grid_x,
            project.grid_y,
        )

    def add_finish_type(self, project: Project, data: Any) -> Project:
        return references.add_finish_type(project, data, self.catalog)

    def add_roof_type(self, project: Project, data: Any) -> Project:
        return references.add_roof_type(project, data, self.catalog)

    def add_schedule_item(self, project: Project, data: Any) -> Project:
        return references.add_schedule_item(project, data, self.catalog)
