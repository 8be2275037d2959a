"""Calculation run history and project snapshot storage."""

from boqengine.runs.projects import ProjectStore
from boqengine.runs.recorder import RunStore, new_run_id, utc_timestamp

__all__ = ["ProjectStore", "RunStore", "new_run_id", "utc_timestamp"]
