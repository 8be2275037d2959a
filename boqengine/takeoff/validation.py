"""Referential checks on element instances before they are stored or computed.

Each rule inspects one instance against a shared context and returns
``CalcIssue`` objects; ``validate_element_instances`` runs them all over a
batch.  Nothing here mutates its inputs.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable

from boqengine.errors import (
    DuplicateInstanceId,
    InvalidGridReference,
    LevelNotFound,
    MissingRequiredField,
    TakeoffError,
    TemplateNotFound,
)
from boqengine.models.project import ElementInstance, ElementTemplate, GridLine, Level
from boqengine.models.takeoff import CalcIssue
from boqengine.takeoff.grid import GridIndex

# Minimum gridRef entries per element type
MIN_GRID_REFS = {"beam": 1, "slab": 2}


class ValidationContext:
    """Lookups shared by all rules during one validation pass."""

    def __init__(self, templates: Iterable[ElementTemplate], grid: GridIndex) -> None:
        self.templates = {t.id: t for t in templates}
        self.grid = grid
        self.seen_ids: set[str] = set()


def _issue(exc_type: type[TakeoffError], message: str, source_id: str) -> CalcIssue:
    return CalcIssue(code=exc_type.code, message=message, source_id=source_id or None)


class InstanceRule(abc.ABC):
    """Base class for instance validation rules."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short rule identifier."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable description."""

    @abc.abstractmethod
    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        """Return issues for *instance* (empty if passing)."""


class RequiredFields(InstanceRule):
    @property
    def name(self) -> str:
        return "instance.required_fields"

    @property
    def description(self) -> str:
        return "id, templateId and placement.levelId must be present."

    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        issues = []
        for field, value in (
            ("id", instance.id),
            ("templateId", instance.template_id),
            ("placement.levelId", instance.placement.level_id),
        ):
            if not value:
                issues.append(
                    _issue(MissingRequiredField, f"Missing required field: {field}", instance.id)
                )
        return issues


class UniqueId(InstanceRule):
    @property
    def name(self) -> str:
        return "instance.unique_id"

    @property
    def description(self) -> str:
        return "Instance ids must be unique within a batch."

    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        if not instance.id:
            return []
        if instance.id in ctx.seen_ids:
            return [
                _issue(DuplicateInstanceId, f"Duplicate instance ID: {instance.id}", instance.id)
            ]
        ctx.seen_ids.add(instance.id)
        return []


class TemplateExists(InstanceRule):
    @property
    def name(self) -> str:
        return "instance.template_exists"

    @property
    def description(self) -> str:
        return "templateId must reference an existing element template."

    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        if instance.template_id and instance.template_id not in ctx.templates:
            return [
                _issue(
                    TemplateNotFound,
                    f"Template not found: {instance.template_id}",
                    instance.id,
                )
            ]
        return []


class LevelExists(InstanceRule):
    @property
    def name(self) -> str:
        return "instance.level_exists"

    @property
    def description(self) -> str:
        return "placement.levelId and endLevelId must reference existing levels."

    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        issues = []
        for label in (instance.placement.level_id, instance.placement.end_level_id):
            if not label:
                continue
            try:
                ctx.grid.level(label)
            except LevelNotFound as exc:
                issues.append(_issue(LevelNotFound, exc.message, instance.id))
        return issues


class GridReferences(InstanceRule):
    """Every gridRef token must parse and resolve against the grid."""

    @property
    def name(self) -> str:
        return "instance.grid_references"

    @property
    def description(self) -> str:
        return "Spans need both labels on one axis; points need a label on any axis."

    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        issues = []
        for token in instance.placement.grid_ref:
            try:
                ctx.grid.check_ref(token)
            except InvalidGridReference as exc:
                issues.append(_issue(InvalidGridReference, exc.message, instance.id))
        return issues


class GridReferenceCount(InstanceRule):
    @property
    def name(self) -> str:
        return "instance.grid_reference_count"

    @property
    def description(self) -> str:
        return "Beams need at least one grid span, slabs at least two references."

    def check(self, instance: ElementInstance, ctx: ValidationContext) -> list[CalcIssue]:
        template = ctx.templates.get(instance.template_id)
        if template is None:
            return []
        needed = MIN_GRID_REFS.get(template.type, 0)
        if len(instance.placement.grid_ref) < needed:
            return [
                _issue(
                    InvalidGridReference,
                    f"{template.type.capitalize()} requires at least {needed} grid "
                    f"reference(s), got {len(instance.placement.grid_ref)}",
                    instance.id,
                )
            ]
        return []


class InstanceRules:
    """Registry of the instance rules in evaluation order."""

    @staticmethod
    def all_rules() -> list[InstanceRule]:
        return [
            RequiredFields(),
            UniqueId(),
            TemplateExists(),
            LevelExists(),
            GridReferences(),
            GridReferenceCount(),
        ]


def validate_element_instances(
    instances: Iterable[ElementInstance],
    templates: Iterable[ElementTemplate],
    levels: Iterable[Level],
    grid_x: Iterable[GridLine],
    grid_y: Iterable[GridLine],
) -> list[CalcIssue]:
    """Run every instance rule over a batch and return all issues found."""
    ctx = ValidationContext(templates, GridIndex(grid_x, grid_y, levels))
    rules = InstanceRules.all_rules()
    issues: list[CalcIssue] = []
    for instance in instances:
        for rule in rules:
            issues.extend(rule.check(instance, ctx))
    return issues
