from __future__ import annotations

import logging
import math
import threading
from typing import Any

from bolus_ledger.core.constants import DEFAULT_MEAL_QUANTITY
from bolus_ledger.core.errors import NotFoundError, ValidationError
from bolus_ledger.models.meal import MealLine, MealSelectionEntry
from bolus_ledger.services.catalog import ProductCatalog
from bolus_ledger.services.nutrition import carbs_contribution

logger = logging.getLogger(__name__)


def _as_quantity(value: Any) -> float:
    # Anything that is not a finite number counts as zero.
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


class MealComposition:
    """The products (and quantities) about to be eaten."""

    def __init__(self) -> None:
        self._entries: list[MealSelectionEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[MealSelectionEntry]:
        return [entry.model_copy() for entry in self._entries]

    def _entry(self, index: int) -> MealSelectionEntry:
        if index < 0 or index >= len(self._entries):
            raise NotFoundError(f"Meal entry {index} not found")
        return self._entries[index]

    def add_entry(self, product_id: str, quantity: Any = DEFAULT_MEAL_QUANTITY) -> MealSelectionEntry:
        # Same product twice gives two independent lines.
        entry = MealSelectionEntry(product_id=product_id, quantity=max(0.0, _as_quantity(quantity)))
        with self._lock:
            self._entries.append(entry)
        logger.debug("Meal entry added: %s x %s", product_id, entry.quantity)
        return entry.model_copy()

    def adjust_quantity(self, index: int, delta: Any) -> MealSelectionEntry:
        with self._lock:
            entry = self._entry(index)
            quantity = entry.quantity + _as_quantity(delta)
            if not math.isfinite(quantity):
                raise ValidationError(f"Meal entry {index} quantity out of range")
            entry.quantity = max(0.0, quantity)
            return entry.model_copy()

    def set_quantity(self, index: int, value: Any) -> MealSelectionEntry:
        with self._lock:
            entry = self._entry(index)
            entry.quantity = max(0.0, _as_quantity(value))
            return entry.model_copy()

    def remove_entry(self, index: int) -> MealSelectionEntry:
        with self._lock:
            self._entry(index)
            return self._entries.pop(index)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def lines(self, catalog: ProductCatalog) -> list[MealLine]:
        result = []
        for index, entry in enumerate(self._entries):
            product = catalog.find(entry.product_id)
            carbs = carbs_contribution(product, entry.quantity) if product else 0.0
            result.append(
                MealLine(
                    index=index,
                    product_id=entry.product_id,
                    quantity=entry.quantity,
                    product=product,
                    carbs_g=carbs,
                )
            )
        return result

    def total_carbs(self, catalog: ProductCatalog) -> float:
        """Entries whose product was deleted from the catalog contribute 0 g."""
        return sum((line.carbs_g for line in self.lines(catalog)), 0.0)


__all__ = ["MealComposition"]
