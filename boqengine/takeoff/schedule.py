"""Direct-quantity takeoff lines from schedule items."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from boqengine.calc.formula import fmt
from boqengine.errors import InvalidDimension
from boqengine.models.project import ScheduleItem
from boqengine.models.takeoff import TakeoffLine

SCHEDULE_TRADES = {
    "plumbing": "Plumbing",
    "carpentry": "Carpentry",
    "hardware": "Hardware",
    "doors": "Doors & Windows",
    "windows": "Doors & Windows",
    "glazing": "Glass & Glazing",
    "waterproofing": "Waterproofing",
    "cladding": "Cladding",
    "insulation": "Insulation",
    "acoustical": "Acoustical",
    "termite-control": "Termite Control",
    "drainage": "Drainage",
    "sitework": "Sitework",
}


def schedule_trade(category: str) -> str:
    if category.startswith("earthworks-"):
        return "Earthwork"
    return SCHEDULE_TRADES.get(category, "Other")


def schedule_line_id(item: ScheduleItem) -> str:
    return f"tof_sched_{item.id}"


def schedule_line(item: ScheduleItem) -> TakeoffLine:
    """One line per item; the quantity is passed through unchanged."""
    if item.qty < 0:
        raise InvalidDimension(f"Schedule quantity must not be negative ({item.qty})")
    formula = f"{fmt(item.qty)} {item.unit} (direct quantity)"
    if item.basis_note:
        formula += f": {item.basis_note}"
    tags = [f"category:{item.category}", f"dpwh:{item.dpwh_item_number_raw}"]
    if item.level_id:
        tags.append(f"level:{item.level_id}")
    return TakeoffLine(
        id=schedule_line_id(item),
        source_element_id=item.id,
        trade=schedule_trade(item.category),
        resource_key=f"schedule-{item.category}",
        quantity=item.qty,
        unit=item.unit,
        formula_text=formula,
        inputs_snapshot={"qty": item.qty},
        assumptions=[item.basis_note] if item.basis_note else [],
        tags=tags + list(item.tags),
    )


def schedule_summary(items: Iterable[ScheduleItem]) -> dict[str, object]:
    items = list(items)
    return {
        "totalItems": len(items),
        "byCategory": dict(Counter(item.category for item in items)),
    }
