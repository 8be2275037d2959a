"""Shared pydantic base for all engine models.

Attributes are snake_case in Python and serialize to the external JSON
field names: camelCase with unit suffixes kept, e.g. ``gross_area_m2`` ->
``grossArea_m2`` and ``source_element_id`` -> ``sourceElementId``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

_UNIT_SUFFIXES = ("kg_per_m", "m2", "m3", "mm", "m", "deg")


def contract_alias(name: str) -> str:
    """Return the JSON field name for a snake_case attribute."""
    suffix = ""
    for unit in _UNIT_SUFFIXES:
        if name.endswith("_" + unit) and name != unit:
            suffix = "_" + unit
            name = name[: -len(suffix)]
            break
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest) + suffix


class EngineModel(BaseModel):
    """Base model: alias-aware, populated by either name."""

    model_config = ConfigDict(
        alias_generator=contract_alias,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class FrozenModel(EngineModel):
    """Immutable variant for calculation outputs."""

    model_config = ConfigDict(
        alias_generator=contract_alias,
        populate_by_name=True,
        frozen=True,
    )
