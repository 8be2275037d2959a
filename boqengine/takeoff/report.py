"""Run summary and Markdown rendering of takeoff and BOQ results."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Sequence

from boqengine.calc.rounding import round_to
from boqengine.models.takeoff import BOQLine, CalcIssue, TakeoffLine, TakeoffSummary
from boqengine.takeoff.finishes import WALL_CATEGORIES


def summarize(
    lines: Sequence[TakeoffLine],
    errors: Sequence[CalcIssue] = (),
    warnings: Sequence[CalcIssue] = (),
) -> TakeoffSummary:
    """Totals by trade and finish category, plus counts."""
    by_trade: dict[str, float] = defaultdict(float)
    finish_totals: dict[str, float] = defaultdict(float)
    roof_area = 0.0
    schedule_categories: Counter[str] = Counter()

    for line in lines:
        by_trade[line.trade] += line.quantity
        if line.trade == "Finishes":
            category = line.tag_value("category") or ""
            key = "wall" if category in WALL_CATEGORIES else category
            finish_totals[key] += line.quantity
        elif line.trade == "Roofing" and line.id.endswith("_roof"):
            roof_area += line.quantity
        if line.resource_key.startswith("schedule-"):
            schedule_categories[line.resource_key[len("schedule-"):]] += 1

    return TakeoffSummary(
        total_concrete=round_to(by_trade.get("Concrete", 0.0), 3),
        total_rebar=round_to(by_trade.get("Rebar", 0.0), 2),
        total_formwork=round_to(by_trade.get("Formwork", 0.0), 2),
        total_floor_area=round_to(finish_totals.get("floor", 0.0), 2),
        total_wall_area=round_to(finish_totals.get("wall", 0.0), 2),
        total_ceiling_area=round_to(finish_totals.get("ceiling", 0.0), 2),
        total_roof_area=round_to(roof_area, 2),
        element_count=len({ln.source_element_id for ln in lines if ln.trade == "Concrete"}),
        line_count=len(lines),
        finish_line_count=sum(1 for ln in lines if ln.trade == "Finishes"),
        schedule_item_count=sum(schedule_categories.values()),
        error_count=len(errors),
        warning_count=len(warnings),
        by_trade={trade: round_to(total, 3) for trade, total in by_trade.items()},
        schedule_by_category=dict(schedule_categories),
    )


def takeoff_markdown(
    lines: Sequence[TakeoffLine],
    boq_lines: Sequence[BOQLine] = (),
    errors: Sequence[CalcIssue] = (),
    title: str = "Quantity Takeoff",
) -> str:
    """Render takeoff lines, BOQ lines and errors as a Markdown report."""
    out: list[str] = [f"# {title}", ""]

    out.append("## Takeoff Lines")
    out.append("")
    out.append("| ID | Trade | Resource | Quantity | Unit | Formula |")
    out.append("|----|-------|----------|----------|------|---------|")
    for line in lines:
        out.append(
            f"| {line.id} | {line.trade} | {line.resource_key} | {line.quantity} "
            f"| {line.unit} | {line.formula_text} |"
        )
    out.append("")

    if boq_lines:
        out.append("## Bill of Quantities")
        out.append("")
        out.append("| Item No. | Description | Quantity | Unit | Sources |")
        out.append("|----------|-------------|----------|------|---------|")
        for boq in boq_lines:
            out.append(
                f"| {boq.pay_item_number} | {boq.description} | {boq.quantity} "
                f"| {boq.unit} | {len(boq.source_takeoff_line_ids)} |"
            )
        out.append("")

    if errors:
        out.append("## Errors")
        out.append("")
        for issue in errors:
            out.append(f"- {issue}")
        out.append("")

    return "\n".join(out)
