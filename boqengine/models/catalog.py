"""Pay-item catalog entries."""

from __future__ import annotations

from boqengine.models.base import FrozenModel


class PayItem(FrozenModel):
    """One DPWH Volume III pay item."""

    item_number: str
    description: str
    unit: str
    category: str = ""
    trade: str = ""
