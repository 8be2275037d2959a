"""Calculation outputs: quantities, takeoff lines, BOQ lines and runs."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from boqengine.models.base import EngineModel, FrozenModel

Trade = Literal[
    "Concrete",
    "Rebar",
    "Formwork",
    "Finishes",
    "Roofing",
    "Structural Steel",
    "Plumbing",
    "Carpentry",
    "Hardware",
    "Doors & Windows",
    "Glass & Glazing",
    "Waterproofing",
    "Cladding",
    "Insulation",
    "Acoustical",
    "Termite Control",
    "Drainage",
    "Sitework",
    "Earthwork",
    "Other",
]

RunStatus = Literal["running", "completed", "failed"]


class QuantityResult(FrozenModel):
    """Output of a single unit or domain calculator."""

    primary_quantity: float
    quantity_with_waste: float
    unit: str
    formula_text: str
    inputs_snapshot: dict[str, float] = Field(default_factory=dict)


class CalcIssue(FrozenModel):
    """A per-entity error or warning recorded during a run."""

    code: str
    message: str
    source_id: str | None = None

    def __str__(self) -> str:
        if self.source_id:
            return f"[{self.code}] {self.source_id}: {self.message}"
        return f"[{self.code}] {self.message}"


class TakeoffLine(FrozenModel):
    id: str
    source_element_id: str
    trade: Trade
    resource_key: str
    quantity: float
    unit: str
    formula_text: str
    inputs_snapshot: dict[str, float] = Field(default_factory=dict)
    assumptions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    def tag_value(self, prefix: str) -> str | None:
        """Return the value of the first ``prefix:value`` tag, if any."""
        marker = prefix + ":"
        for tag in self.tags:
            if tag.startswith(marker):
                return tag[len(marker):]
        return None


class BOQLine(FrozenModel):
    id: str
    pay_item_number: str
    description: str
    unit: str
    quantity: float
    source_takeoff_line_ids: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class TakeoffSummary(FrozenModel):
    total_concrete: float = 0.0
    total_rebar: float = 0.0
    total_formwork: float = 0.0
    total_floor_area: float = 0.0
    total_wall_area: float = 0.0
    total_ceiling_area: float = 0.0
    total_roof_area: float = 0.0
    element_count: int = 0
    line_count: int = 0
    finish_line_count: int = 0
    schedule_item_count: int = 0
    error_count: int = 0
    warning_count: int = 0
    by_trade: dict[str, float] = Field(default_factory=dict)
    schedule_by_category: dict[str, int] = Field(default_factory=dict)


class TakeoffResult(EngineModel):
    takeoff_lines: list[TakeoffLine] = Field(default_factory=list)
    errors: list[CalcIssue] = Field(default_factory=list)
    warnings: list[CalcIssue] = Field(default_factory=list)
    summary: TakeoffSummary = Field(default_factory=TakeoffSummary)


class BOQResult(EngineModel):
    boq_lines: list[BOQLine] = Field(default_factory=list)
    errors: list[CalcIssue] = Field(default_factory=list)


class CalcRun(FrozenModel):
    """One calculation invocation; immutable once recorded."""

    run_id: str
    project_id: str
    timestamp: str
    status: RunStatus
    summary: dict[str, Any] = Field(default_factory=dict)
    takeoff_lines: list[TakeoffLine] = Field(default_factory=list)
    boq_lines: list[BOQLine] = Field(default_factory=list)
    errors: list[CalcIssue] = Field(default_factory=list)
