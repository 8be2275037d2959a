"""Pay-item catalog lookup and BOQ reconciliation."""

from boqengine.catalog.provider import CatalogProvider, InMemoryCatalog, JsonCatalog, LocalCatalog
from boqengine.catalog.reconciler import CatalogReconciler, compute_boq
from boqengine.catalog.references import (
    add_finish_type,
    add_roof_type,
    add_schedule_item,
    create_finish_type,
    create_roof_type,
    create_schedule_item,
    validate_pay_item,
)

__all__ = [
    "CatalogProvider",
    "CatalogReconciler",
    "InMemoryCatalog",
    "JsonCatalog",
    "LocalCatalog",
    "add_finish_type",
    "add_roof_type",
    "add_schedule_item",
    "compute_boq",
    "create_finish_type",
    "create_roof_type",
    "create_schedule_item",
    "validate_pay_item",
]
