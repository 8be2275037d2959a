"""Takeoff orchestration: project snapshot in, takeoff lines and errors out."""

from boqengine.takeoff.engine import TakeoffEngine, compute_takeoff
from boqengine.takeoff.grid import GridIndex, parse_grid_ref
from boqengine.takeoff.report import summarize, takeoff_markdown
from boqengine.takeoff.validation import InstanceRules, validate_element_instances

__all__ = [
    "GridIndex",
    "InstanceRules",
    "TakeoffEngine",
    "compute_takeoff",
    "parse_grid_ref",
    "summarize",
    "takeoff_markdown",
    "validate_element_instances",
]
