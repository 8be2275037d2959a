"""TakeoffEngine: turns a project snapshot into takeoff lines.

Usage::

    from boqengine.takeoff import compute_takeoff

    result = compute_takeoff(project)
    for line in result.takeoff_lines:
        print(line.id, line.quantity, line.unit)
    for issue in result.errors:
        print(issue)

Per-entity failures never abort the run; they are collected in
``result.errors`` next to every line that could be computed.
"""

from __future__ import annotations

import logging

from boqengine.errors import DuplicateInstanceId, TakeoffError, TemplateNotFound
from boqengine.models.project import Project
from boqengine.models.takeoff import TakeoffResult
from boqengine.takeoff.batch import TakeoffBatch
from boqengine.takeoff.elements import ElementTakeoff
from boqengine.takeoff.finishes import FinishTakeoff
from boqengine.takeoff.grid import GridIndex
from boqengine.takeoff.report import summarize
from boqengine.takeoff.roofing import roofing_takeoff
from boqengine.takeoff.schedule import schedule_line

logger = logging.getLogger(__name__)


class TakeoffEngine:
    """Runs every takeoff stage over one immutable project snapshot.

    Parameters
    ----------
    project:
        The snapshot to compute.  It is never modified.
    """

    def __init__(self, project: Project) -> None:
        self.project = project
        self.grid = GridIndex.from_project(project)
        self.templates = {t.id: t for t in project.element_templates}

    def compute(self) -> TakeoffResult:
        logger.info(
            "Takeoff for project %s: %d instances, %d finish assignments, %d roof planes",
            self.project.id,
            len(self.project.element_instances),
            len(self.project.space_finish_assignments)
            + len(self.project.wall_surface_finish_assignments),
            len(self.project.roof_planes),
        )
        batch = TakeoffBatch()
        self._elements(batch)
        FinishTakeoff(self.project, self.grid, batch).run()
        roofing_takeoff(self.project, self.grid, batch)
        self._schedule(batch)

        summary = summarize(batch.lines, batch.errors, batch.warnings)
        logger.info(
            "Takeoff for project %s done: %d lines, %d errors",
            self.project.id,
            len(batch.lines),
            len(batch.errors),
        )
        return TakeoffResult(
            takeoff_lines=batch.lines,
            errors=batch.errors,
            warnings=batch.warnings,
            summary=summary,
        )

    def _elements(self, batch: TakeoffBatch) -> None:
        seen: set[str] = set()
        for instance in self.project.element_instances:
            if instance.id in seen:
                batch.error(
                    DuplicateInstanceId(f"Duplicate instance ID: {instance.id}"), instance.id
                )
                continue
            seen.add(instance.id)
            try:
                template = self.templates.get(instance.template_id)
                if template is None:
                    raise TemplateNotFound(f"Template not found: {instance.template_id}")
                lines = ElementTakeoff(
                    instance, template, self.grid, self.project.settings
                ).build()
            except TakeoffError as exc:
                batch.error(exc, instance.id)
                continue
            batch.add_lines(lines, instance.id)

    def _schedule(self, batch: TakeoffBatch) -> None:
        for item in self.project.schedule_items:
            try:
                line = schedule_line(item)
            except TakeoffError as exc:
                batch.error(exc, item.id)
                continue
            batch.add_lines([line], item.id)


def compute_takeoff(project: Project) -> TakeoffResult:
    """Compute all takeoff lines and per-entity errors for *project*."""
    return TakeoffEngine(project).compute()
