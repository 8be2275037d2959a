"""BOQ Engine: quantity takeoff and DPWH bill-of-quantities calculation."""

__version__ = "1.0.0"

from boqengine.api.facade import Estimator
from boqengine.catalog import JsonCatalog, LocalCatalog, compute_boq
from boqengine.errors import TakeoffError
from boqengine.models import (
    BOQLine,
    CalcIssue,
    CalcRun,
    Project,
    TakeoffLine,
    TakeoffResult,
)
from boqengine.runs import RunStore
from boqengine.takeoff import compute_takeoff, validate_element_instances

__all__ = [
    "__version__",
    # Facade
    "Estimator",
    # Engine
    "compute_boq",
    "compute_takeoff",
    "validate_element_instances",
    # Models
    "BOQLine",
    "CalcIssue",
    "CalcRun",
    "Project",
    "TakeoffLine",
    "TakeoffResult",
    # Catalog and runs
    "JsonCatalog",
    "LocalCatalog",
    "RunStore",
    "TakeoffError",
]
