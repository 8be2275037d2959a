"""Collector for the lines and issues produced during one takeoff pass."""

from __future__ import annotations

import logging

from boqengine.errors import DuplicateInstanceId, TakeoffError
from boqengine.models.takeoff import CalcIssue, TakeoffLine

logger = logging.getLogger(__name__)


class TakeoffBatch:
    """Accumulates takeoff lines, errors and warnings in production order."""

    def __init__(self) -> None:
        self.lines: list[TakeoffLine] = []
        self.errors: list[CalcIssue] = []
        self.warnings: list[CalcIssue] = []
        self._ids: set[str] = set()

    def add_lines(self, lines: list[TakeoffLine], source_id: str) -> None:
        """Add all lines of one entity, or none if any id is already taken."""
        clash = [line.id for line in lines if line.id in self._ids]
        if clash:
            self.error(
                DuplicateInstanceId(f"Duplicate takeoff line id: {clash[0]}"), source_id
            )
            return
        for line in lines:
            self._ids.add(line.id)
            self.lines.append(line)

    def error(self, exc: TakeoffError, source_id: str | None = None) -> None:
        source = exc.source_id or source_id
        logger.warning("Skipped %s: %s", source or "entity", exc.message)
        self.errors.append(CalcIssue(code=exc.code, message=exc.message, source_id=source))

    def warn(self, code: str, message: str, source_id: str | None = None) -> None:
        logger.info("%s: %s", source_id or code, message)
        self.warnings.append(CalcIssue(code=code, message=message, source_id=source_id))
