"""Half-away-from-zero rounding for reported quantities."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_to(value: float, decimals: int = 2) -> float:
    """Round *value* to *decimals* places, ties away from zero.

    Works on the shortest decimal representation of the float so that
    ``round_to(1.23456, 3) == 1.235`` and ``round_to(2.675, 2) == 2.68``,
    unlike the built-in banker's ``round``.
    """
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_volume(value: float, decimals: int = 3) -> float:
    return round_to(value, decimals)


def round_area(value: float, decimals: int = 2) -> float:
    return round_to(value, decimals)


def round_weight(value: float, decimals: int = 2) -> float:
    return round_to(value, decimals)
