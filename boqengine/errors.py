"""Takeoff error taxonomy.

Calculators raise these; orchestrators catch them per entity and record a
``CalcIssue`` carrying the exception's ``code``.
"""

from __future__ import annotations


class TakeoffError(Exception):
    """Base class for all calculation and reference errors."""

    code = "TakeoffError"

    def __init__(self, message: str, source_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source_id = source_id


class InvalidDimension(TakeoffError):
    """A required length, width, height or diameter is not positive."""

    code = "InvalidDimension"


class InvalidWaste(TakeoffError):
    """Waste fraction outside [0, 1]."""

    code = "InvalidWaste"


class UnsupportedDiameter(TakeoffError):
    """Bar diameter has no grade assignment."""

    code = "UnsupportedDiameter"


class UnknownDiameter(TakeoffError):
    """Bar diameter missing from the unit weight table."""

    code = "UnknownDiameter"


class MissingDimension(TakeoffError):
    code = "MissingDimension"


class TemplateNotFound(TakeoffError):
    code = "TemplateNotFound"


class LevelNotFound(TakeoffError):
    code = "LevelNotFound"


class InvalidGridReference(TakeoffError):
    code = "InvalidGridReference"


class DuplicateInstanceId(TakeoffError):
    code = "DuplicateInstanceId"


class CatalogItemNotFound(TakeoffError):
    code = "CatalogItemNotFound"


class UnitMismatch(TakeoffError):
    """Declared unit differs from the catalog unit of the referenced pay item."""

    code = "UnitMismatch"


class MissingRequiredField(TakeoffError):
    code = "MissingRequiredField"


class ReferenceNotFound(TakeoffError):
    """A space, finish type, wall surface or roof type id does not resolve."""

    code = "ReferenceNotFound"


class UnknownCategory(TakeoffError):
    code = "UnknownCategory"
