"""Creation-time checks for entities that reference a pay item.

FinishType, RoofType and ScheduleItem must name an existing catalog item
and declare exactly the catalog's unit.  A failing check rejects the entity
before it can enter a project.
"""

from __future__ import annotations

import logging
from typing import Any

from boqengine.catalog.provider import CatalogProvider
from boqengine.errors import CatalogItemNotFound, UnitMismatch
from boqengine.models.catalog import PayItem
from boqengine.models.project import FinishType, Project, RoofType, ScheduleItem

logger = logging.getLogger(__name__)


def validate_pay_item(item_number: str, unit: str, catalog: CatalogProvider) -> PayItem:
    """Return the catalog item, or raise CatalogItemNotFound / UnitMismatch."""
    item = catalog.find(item_number)
    if item is None:
        raise CatalogItemNotFound(f"DPWH item not found in catalog: {item_number}")
    if unit != item.unit:
        raise UnitMismatch(f'Unit mismatch: expected "{item.unit}" but got "{unit}"')
    return item


def create_finish_type(data: FinishType | dict[str, Any], catalog: CatalogProvider) -> FinishType:
    finish = FinishType.model_validate(data)
    validate_pay_item(finish.dpwh_item_number_raw, finish.unit, catalog)
    return finish


def create_roof_type(data: RoofType | dict[str, Any], catalog: CatalogProvider) -> RoofType:
    roof_type = RoofType.model_validate(data)
    validate_pay_item(roof_type.dpwh_item_number_raw, roof_type.unit, catalog)
    return roof_type


def create_schedule_item(
    data: ScheduleItem | dict[str, Any], catalog: CatalogProvider
) -> ScheduleItem:
    item = ScheduleItem.model_validate(data)
    validate_pay_item(item.dpwh_item_number_raw, item.unit, catalog)
    return item


def add_finish_type(project: Project, data: FinishType | dict[str, Any], catalog: CatalogProvider) -> Project:
    """Return a new snapshot with the validated finish type appended."""
    finish = create_finish_type(data, catalog)
    return project.model_copy(update={"finish_types": [*project.finish_types, finish]})


def add_roof_type(project: Project, data: RoofType | dict[str, Any], catalog: CatalogProvider) -> Project:
    roof_type = create_roof_type(data, catalog)
    return project.model_copy(update={"roof_types": [*project.roof_types, roof_type]})


def add_schedule_item(
    project: Project, data: ScheduleItem | dict[str, Any], catalog: CatalogProvider
) -> Project:
    item = create_schedule_item(data, catalog)
    return project.model_copy(update={"schedule_items": [*project.schedule_items, item]})
