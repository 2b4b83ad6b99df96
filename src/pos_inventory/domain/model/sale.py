"""Sale line items (engine input) and decrement records (engine output).

Neither is persisted by the fulfillment engine.  Line items are built by
the sale orchestrator from a cart; decrement records are the audit trail
handed back for receipt generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pos_inventory.domain.model.item import ItemKind
from pos_inventory.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class SaleLineItem:
    """One (item, quantity) entry of a completed sale.

    ``recipe_id`` is only meaningful for ``batch_portion`` items; without
    it a batch shortfall cannot fall back to raw ingredients.
    """

    item_id: str
    kind: ItemKind
    quantity: int
    recipe_id: str | None = None

    def __post_init__(self) -> None:
        Quantity(self.quantity)


class DecrementSource(Enum):
    BATCH = "batch"
    STOCK = "stock"
    INGREDIENT = "ingredient"


@dataclass(frozen=True)
class DecrementRecord:
    """One mutation actually applied while fulfilling a sale."""

    source: DecrementSource
    quantity: int
    item_id: str | None = None
    batch_id: str | None = None

    @staticmethod
    def from_batch(batch_id: str, quantity: int) -> DecrementRecord:
        return DecrementRecord(DecrementSource.BATCH, quantity, batch_id=batch_id)

    @staticmethod
    def from_stock(item_id: str, quantity: int) -> DecrementRecord:
        return DecrementRecord(DecrementSource.STOCK, quantity, item_id=item_id)

    @staticmethod
    def from_ingredient(item_id: str, quantity: int) -> DecrementRecord:
        return DecrementRecord(DecrementSource.INGREDIENT, quantity, item_id=item_id)
