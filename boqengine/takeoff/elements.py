"""Structural takeoff: concrete, rebar and formwork lines per element instance."""

from __future__ import annotations

import logging

from boqengine.calc import concrete, formwork, rebar
from boqengine.calc.formula import waste_note
from boqengine.calc.rounding import round_to
from boqengine.config import (
    DEFAULT_CONCRETE_ITEM,
    DEFAULT_FORMWORK_ITEM,
    DEFAULT_SLAB_BAR_SPACING_M,
)
from boqengine.errors import InvalidGridReference, LevelNotFound, MissingDimension
from boqengine.models.project import (
    ElementInstance,
    ElementTemplate,
    ProjectSettings,
    RebarConfig,
)
from boqengine.models.takeoff import QuantityResult, TakeoffLine
from boqengine.takeoff.grid import GridIndex, parse_grid_ref

logger = logging.getLogger(__name__)


class ElementTakeoff:
    """Builds the takeoff lines of one element instance.

    Any ``TakeoffError`` raised while resolving references or computing
    quantities propagates; the caller records it and skips the instance.
    """

    def __init__(
        self,
        instance: ElementInstance,
        template: ElementTemplate,
        grid: GridIndex,
        settings: ProjectSettings,
    ) -> None:
        self.instance = instance
        self.template = template
        self.grid = grid
        self.settings = settings
        self.geometry = {**template.properties, **(instance.placement.custom_geometry or {})}
        self.level = grid.level(instance.placement.level_id)
        self.lines: list[TakeoffLine] = []
        self._subtype = ""

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def build(self) -> list[TakeoffLine]:
        kind = self.template.type
        if kind == "beam":
            self._beam()
        elif kind == "slab":
            self._slab()
        elif kind == "column":
            self._column()
        elif kind == "foundation":
            self._foundation()
        else:
            raise MissingDimension(f"Unsupported element type: {kind}")
        logger.debug("Instance %s produced %d lines", self.instance.id, len(self.lines))
        return self.lines

    # ------------------------------------------------------------------
    # Geometry resolution
    # ------------------------------------------------------------------

    def _dim(self, name: str) -> float:
        value = self.geometry.get(name)
        if value is None:
            raise MissingDimension(
                f"{self.template.type.capitalize()} template {self.template.id} "
                f"is missing property: {name}"
            )
        return value

    def _spans(self) -> list[tuple[str, float]]:
        """Axis and length of every span reference, in gridRef order."""
        spans = []
        for position, token in enumerate(self.instance.placement.grid_ref):
            if len(parse_grid_ref(token)) == 2:
                spans.append(self.grid.span(token, hint="X" if position == 0 else "Y"))
        return spans

    def _beam_length(self) -> float:
        spans = self._spans()
        if spans:
            return spans[0][1]
        if "length" in self.geometry:
            return self.geometry["length"]
        raise InvalidGridReference("Beam requires a grid span such as A-B")

    def _panel(self) -> tuple[float, float]:
        """X and Y extents of a slab or mat panel."""
        by_axis: dict[str, float] = {}
        for axis, length in self._spans():
            by_axis.setdefault(axis, length)
        if "X" not in by_axis or "Y" not in by_axis:
            raise InvalidGridReference(
                "Panel requires one span on the X axis and one on the Y axis"
            )
        return by_axis["X"], by_axis["Y"]

    def _column_height(self) -> float:
        placement = self.instance.placement
        if placement.end_level_id:
            top = self.grid.level(placement.end_level_id)
        else:
            top = self.grid.next_level(self.level.label)
            if top is None:
                raise LevelNotFound(
                    f"No level above {self.level.label}; set endLevelId for the column"
                )
        height = top.elevation - self.level.elevation
        if height <= 0:
            raise LevelNotFound(
                f"End level {top.label} must be above start level {self.level.label}"
            )
        return height

    # ------------------------------------------------------------------
    # Line builders
    # ------------------------------------------------------------------

    def _tags(self, *extra: str) -> list[str]:
        tags = [
            f"type:{self.template.type}",
            f"template:{self.template.name or self.template.id}",
            f"level:{self.level.label}",
        ]
        if self._subtype:
            tags.append(f"subtype:{self._subtype}")
        return tags + list(extra) + list(self.instance.tags)

    def _concrete_line(self, result: QuantityResult) -> None:
        item = self.template.dpwh_item_number or DEFAULT_CONCRETE_ITEM
        waste = self.settings.waste.concrete
        self.lines.append(
            TakeoffLine(
                id=f"tof_{self.instance.id}_concrete",
                source_element_id=self.instance.id,
                trade="Concrete",
                resource_key="concrete-class-a",
                quantity=round_to(result.quantity_with_waste, self.settings.rounding.concrete),
                unit=result.unit,
                formula_text=result.formula_text,
                inputs_snapshot=result.inputs_snapshot,
                assumptions=[waste_note(waste), f"DPWH Item: {item}"],
                tags=self._tags(f"dpwh:{item}"),
            )
        )

    def _formwork_line(self, result: QuantityResult, resource: str, note: str) -> None:
        waste = self.settings.waste.formwork
        self.lines.append(
            TakeoffLine(
                id=f"tof_{self.instance.id}_formwork",
                source_element_id=self.instance.id,
                trade="Formwork",
                resource_key=f"formwork-{resource}",
                quantity=round_to(result.quantity_with_waste, self.settings.rounding.formwork),
                unit=result.unit,
                formula_text=result.formula_text,
                inputs_snapshot=result.inputs_snapshot,
                assumptions=[note, waste_note(waste), f"DPWH Item: {DEFAULT_FORMWORK_ITEM}"],
                tags=self._tags(f"dpwh:{DEFAULT_FORMWORK_ITEM}"),
            )
        )

    def _rebar_line(self, suffix: str, kind: str, diameter: int, result: QuantityResult) -> None:
        config = self.template.rebar_config or RebarConfig()
        item = rebar.rebar_pay_item(diameter, config.epoxy_coated)
        self.lines.append(
            TakeoffLine(
                id=f"tof_{self.instance.id}_{suffix}",
                source_element_id=self.instance.id,
                trade="Rebar",
                resource_key=f"rebar-{diameter}mm",
                quantity=round_to(result.quantity_with_waste, self.settings.rounding.rebar),
                unit=result.unit,
                formula_text=result.formula_text,
                inputs_snapshot=result.inputs_snapshot,
                assumptions=[
                    f"Grade {rebar.rebar_grade(diameter)}",
                    waste_note(self.settings.waste.rebar),
                    f"DPWH Item: {item}",
                ],
                tags=self._tags(f"rebar:{kind}", f"dpwh:{item}"),
            )
        )

    # ------------------------------------------------------------------
    # Element types
    # ------------------------------------------------------------------

    def _beam(self) -> None:
        width, height = self._dim("width"), self._dim("height")
        length = self._beam_length()
        waste = self.settings.waste
        self._concrete_line(concrete.beam_volume(width, height, length, waste.concrete))

        config = self.template.rebar_config
        if config and config.main_bars:
            bars = config.main_bars
            self._rebar_line(
                "rebar_main",
                "main",
                bars.diameter,
                rebar.main_bars_weight(
                    bars.diameter, bars.count, length, self.settings.lap.multiplier, waste.rebar
                ),
            )
        if config and config.stirrups:
            st = config.stirrups
            self._rebar_line(
                "rebar_stirrups",
                "stirrups",
                st.diameter,
                rebar.stirrups_weight(st.diameter, st.spacing, length, width, height, waste.rebar),
            )

        self._formwork_line(
            formwork.beam_formwork(width, height, length, waste.formwork),
            "beam",
            "Contact area: bottom + 2 sides",
        )

    def _slab_bars(self, x_length: float, y_length: float) -> None:
        config = self.template.rebar_config
        waste = self.settings.waste.rebar
        lap = self.settings.lap.multiplier
        if config and config.main_bars:
            bars = config.main_bars
            if bars.spacing:
                spacing = bars.spacing
            elif bars.count and bars.count > 1:
                # count includes both edge bars
                spacing = y_length / (bars.count - 1)
            else:
                spacing = DEFAULT_SLAB_BAR_SPACING_M
            self._rebar_line(
                "rebar_main",
                "main",
                bars.diameter,
                rebar.slab_bars_weight(bars.diameter, spacing, x_length, 1, lap, waste),
            )
        if config and config.secondary_bars:
            sec = config.secondary_bars
            self._rebar_line(
                "rebar_secondary",
                "secondary",
                sec.diameter,
                rebar.slab_bars_weight(sec.diameter, sec.spacing, y_length, 1, lap, waste),
            )

    def _slab(self) -> None:
        thickness = self._dim("thickness")
        x_length, y_length = self._panel()
        area = x_length * y_length
        waste = self.settings.waste
        self._concrete_line(concrete.slab_volume(thickness, area, waste.concrete))
        self._slab_bars(x_length, y_length)
        self._formwork_line(
            formwork.slab_formwork(area, waste.formwork), "slab", "Contact area: soffit only"
        )

    def _column(self) -> None:
        height = self._column_height()
        waste = self.settings.waste
        diameter = self.geometry.get("diameter")
        config = self.template.rebar_config

        if diameter is not None:
            self._subtype = "circular"
            self._concrete_line(concrete.column_volume_circular(diameter, height, waste.concrete))
            fw = formwork.column_formwork_circular(diameter, height, waste.formwork)
        else:
            self._subtype = "rectangular"
            width, depth = self._dim("width"), self._dim("height")
            self._concrete_line(
                concrete.column_volume_rectangular(width, depth, height, waste.concrete)
            )
            fw = formwork.column_formwork_rectangular(width, depth, height, waste.formwork)

        if config and config.main_bars:
            bars = config.main_bars
            self._rebar_line(
                "rebar_main",
                "main",
                bars.diameter,
                rebar.main_bars_weight(
                    bars.diameter, bars.count, height, self.settings.lap.multiplier, waste.rebar
                ),
            )
        if config and config.stirrups:
            st = config.stirrups
            if diameter is not None:
                ties = rebar.hoops_weight(st.diameter, st.spacing, height, diameter, waste.rebar)
            else:
                ties = rebar.stirrups_weight(
                    st.diameter, st.spacing, height, width, depth, waste.rebar
                )
            self._rebar_line("rebar_ties", "ties", st.diameter, ties)

        self._formwork_line(fw, "column", "Contact area: column perimeter × height")

    def _foundation(self) -> None:
        waste = self.settings.waste
        if "thickness" in self.geometry:
            self._subtype = "mat"
            thickness = self.geometry["thickness"]
            x_length, y_length = self._panel()
            self._concrete_line(
                concrete.slab_volume(thickness, x_length * y_length, waste.concrete)
            )
            self._slab_bars(x_length, y_length)
            self._formwork_line(
                formwork.footing_formwork(x_length, y_length, thickness, waste.formwork),
                "mat",
                "Contact area: edge forms",
            )
            return

        self._subtype = "footing"
        length, width, depth = self._dim("length"), self._dim("width"), self._dim("depth")
        self._concrete_line(concrete.footing_volume(length, width, depth, waste.concrete))
        config = self.template.rebar_config
        if config and config.main_bars:
            bars = config.main_bars
            self._rebar_line(
                "rebar_main",
                "main",
                bars.diameter,
                rebar.main_bars_weight(
                    bars.diameter, bars.count, length, self.settings.lap.multiplier, waste.rebar
                ),
            )
        if config and config.secondary_bars:
            sec = config.secondary_bars
            self._rebar_line(
                "rebar_secondary",
                "secondary",
                sec.diameter,
                rebar.slab_bars_weight(
                    sec.diameter, sec.spacing, width, 1, self.settings.lap.multiplier, waste.rebar
                ),
            )
        self._formwork_line(
            formwork.footing_formwork(length, width, depth, waste.formwork),
            "footing",
            "Contact area: edge forms",
        )
