"""CatalogProvider interface and read-only pay-item catalogs.

The catalog is injected wherever it is needed so that tests can substitute
a fixture catalog; nothing here holds global state.
"""

from __future__ import annotations

import abc
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from boqengine.catalog.seed_data import SEED_CATALOG_VERSION, SEED_ITEMS
from boqengine.config import CATALOG_SEARCH_DEFAULT_LIMIT, CATALOG_SEARCH_MAX_LIMIT
from boqengine.models.catalog import PayItem

logger = logging.getLogger(__name__)


def clamp_limit(limit: int | None) -> int:
    """Clamp a search limit to [1, CATALOG_SEARCH_MAX_LIMIT]."""
    if limit is None:
        return CATALOG_SEARCH_DEFAULT_LIMIT
    return max(1, min(int(limit), CATALOG_SEARCH_MAX_LIMIT))


class CatalogProvider(abc.ABC):
    """Abstract read-only pay-item lookup."""

    @abc.abstractmethod
    def find(self, item_number: str) -> PayItem | None:
        """Return the item with this exact number, or None."""

    @abc.abstractmethod
    def search(
        self,
        query: str | None = None,
        trade: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[PayItem]:
        """Return items matching all given filters, in catalog order."""


class InMemoryCatalog(CatalogProvider):
    """Catalog over a fixed list of items."""

    def __init__(self, items: Iterable[PayItem], version: str = "") -> None:
        self.items = list(items)
        self.version = version
        self._by_number = {item.item_number: item for item in self.items}

    def __len__(self) -> int:
        return len(self.items)

    def find(self, item_number: str) -> PayItem | None:
        return self._by_number.get(item_number.strip())

    def search(
        self,
        query: str | None = None,
        trade: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[PayItem]:
        limit = clamp_limit(limit)
        needle = query.strip().lower() if query else ""
        cat = category.lower() if category else ""
        results = []
        for item in self.items:
            if needle and needle not in item.item_number.lower() and needle not in item.description.lower():
                continue
            if trade and item.trade != trade:
                continue
            if cat and cat not in item.category.lower():
                continue
            results.append(item)
            if len(results) >= limit:
                break
        return results


class LocalCatalog(InMemoryCatalog):
    """Catalog from the embedded seed items.  Always available."""

    def __init__(self) -> None:
        super().__init__(
            (
                PayItem(
                    item_number=number,
                    description=description,
                    unit=unit,
                    category=category,
                    trade=trade,
                )
                for number, description, unit, category, trade in SEED_ITEMS
            ),
            version=SEED_CATALOG_VERSION,
        )


class JsonCatalog(InMemoryCatalog):
    """Catalog loaded from a JSON file of the form ``{"items": [...]}``.

    Items use the contract field names (``itemNumber``, ``description``,
    ``unit``, ``category``, ``trade``).
    """

    @classmethod
    def from_file(cls, path: str | Path) -> JsonCatalog:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        items = [PayItem.model_validate(raw) for raw in data.get("items", [])]
        logger.info("Loaded %d catalog items from %s", len(items), path)
        return cls(items, version=str(data.get("version", "")))
