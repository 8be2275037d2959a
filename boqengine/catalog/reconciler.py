"""Catalog reconciler: aggregates takeoff lines into BOQ lines by pay item.

Usage::

    from boqengine.catalog import LocalCatalog, compute_boq

    boq = compute_boq(takeoff.takeoff_lines, project.schedule_items, LocalCatalog())
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from boqengine.calc.rebar import rebar_pay_item
from boqengine.calc.rounding import round_to
from boqengine.catalog.provider import CatalogProvider
from boqengine.config import DEFAULT_CONCRETE_ITEM, DEFAULT_FORMWORK_ITEM, UNIT_ALIASES
from boqengine.errors import CatalogItemNotFound, TakeoffError, UnitMismatch
from boqengine.models.catalog import PayItem
from boqengine.models.project import ScheduleItem
from boqengine.models.takeoff import BOQLine, BOQResult, CalcIssue, TakeoffLine
from boqengine.takeoff.schedule import schedule_line, schedule_line_id

logger = logging.getLogger(__name__)

_REBAR_KEY = re.compile(r"^rebar-(\d+)mm$")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def normalize_unit(unit: str) -> str:
    """Map a takeoff unit symbol to its catalog unit name."""
    key = unit.strip()
    return UNIT_ALIASES.get(key, UNIT_ALIASES.get(key.lower(), key))


def boq_line_id(item_number: str) -> str:
    return "boq_" + _NON_ALNUM.sub("_", item_number).strip("_")


def resolve_pay_item(line: TakeoffLine) -> str:
    """Pay-item number of a line: its ``dpwh:`` tag, else a default by resource key."""
    tagged = line.tag_value("dpwh")
    if tagged:
        return tagged
    key = line.resource_key
    if key.startswith("concrete-"):
        return DEFAULT_CONCRETE_ITEM
    if key.startswith("formwork-"):
        return DEFAULT_FORMWORK_ITEM
    match = _REBAR_KEY.match(key)
    if match:
        return rebar_pay_item(int(match.group(1)))
    raise CatalogItemNotFound(f"No pay item mapped for resource key: {key}")


class _Group:
    def __init__(self, item: PayItem) -> None:
        self.item = item
        self.lines: list[TakeoffLine] = []


class CatalogReconciler:
    """Groups takeoff lines by pay item and validates units against the catalog.

    Parameters
    ----------
    catalog:
        Read-only pay-item lookup.
    """

    def __init__(self, catalog: CatalogProvider) -> None:
        self.catalog = catalog

    def reconcile(
        self,
        takeoff_lines: Sequence[TakeoffLine],
        schedule_items: Iterable[ScheduleItem] = (),
    ) -> BOQResult:
        errors: list[CalcIssue] = []
        lines = list(takeoff_lines)
        present = {line.id for line in lines}
        for item in schedule_items:
            if schedule_line_id(item) in present:
                continue
            try:
                lines.append(schedule_line(item))
            except TakeoffError as exc:
                errors.append(CalcIssue(code=exc.code, message=exc.message, source_id=item.id))

        groups: dict[str, _Group] = {}
        for line in lines:
            try:
                number = resolve_pay_item(line)
                group = groups.get(number)
                if group is None:
                    item = self.catalog.find(number)
                    if item is None:
                        raise CatalogItemNotFound(f"DPWH item not found in catalog: {number}")
                    group = groups[number] = _Group(item)
                if normalize_unit(line.unit) != normalize_unit(group.item.unit):
                    raise UnitMismatch(
                        f'Unit mismatch: expected "{group.item.unit}" but got "{line.unit}"'
                    )
            except TakeoffError as exc:
                logger.warning("Line %s left out of BOQ: %s", line.id, exc.message)
                errors.append(CalcIssue(code=exc.code, message=exc.message, source_id=line.id))
                continue
            group.lines.append(line)

        boq_lines = [self._boq_line(g) for g in groups.values() if g.lines]
        logger.info("BOQ: %d lines from %d takeoff lines", len(boq_lines), len(lines))
        return BOQResult(boq_lines=boq_lines, errors=errors)

    @staticmethod
    def _boq_line(group: _Group) -> BOQLine:
        item = group.item
        decimals = 3 if item.unit == "Cubic Meter" else 2
        tags = [f"dpwh:{item.item_number}", f"trade:{item.trade}"]
        for line in group.lines:
            tags.extend(t for t in line.tags if not t.startswith("dpwh:"))
        return BOQLine(
            id=boq_line_id(item.item_number),
            pay_item_number=item.item_number,
            description=item.description,
            unit=item.unit,
            quantity=round_to(sum(line.quantity for line in group.lines), decimals),
            source_takeoff_line_ids=[line.id for line in group.lines],
            tags=list(dict.fromkeys(tags)),
        )


def compute_boq(
    takeoff_lines: Sequence[TakeoffLine],
    schedule_items: Iterable[ScheduleItem],
    catalog: CatalogProvider,
) -> BOQResult:
    """Aggregate takeoff lines (and any unrepresented schedule items) into BOQ lines."""
    return CatalogReconciler(catalog).reconcile(takeoff_lines, schedule_items)
