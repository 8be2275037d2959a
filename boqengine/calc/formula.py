"""Input checks and formula-text helpers shared by the calculators."""

from __future__ import annotations

from boqengine.errors import InvalidDimension, InvalidWaste


def fmt(value: float) -> str:
    """Render an operand the way it was entered: 6.0 -> '6', 0.3 -> '0.3'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def check_waste(waste: float) -> None:
    if waste < 0 or waste > 1:
        raise InvalidWaste("Waste must be between 0 and 1")


def require_positive(label: str, **dims: float | None) -> None:
    """Raise InvalidDimension unless every dimension is > 0.

    *label* names the element in the message, e.g. ``"Beam"``.
    """
    for name, value in dims.items():
        if value is None or value <= 0:
            raise InvalidDimension(f"{label} dimensions must be positive ({name}={value})")


def waste_note(waste: float) -> str:
    return f"Waste: {fmt(round(waste * 100, 4))}%"
