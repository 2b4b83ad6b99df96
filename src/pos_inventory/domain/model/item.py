"""Item aggregate.

An item is anything the business sells or consumes.  Its ``kind``
decides which pool satisfies demand for it: batch portions come out of
prepared batches, units and ingredients out of the stock ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pos_inventory.domain.exceptions import ValidationError


class ItemKind(Enum):
    BATCH_PORTION = "batch_portion"
    UNIT = "unit"
    INGREDIENT = "ingredient"

    @property
    def is_stocked(self) -> bool:
        """True if the stock ledger (not a batch) holds this item."""
        return self is not ItemKind.BATCH_PORTION


@dataclass
class Item:
    """A sellable or consumable good owned by one tenant."""

    tenant_id: str
    id: str
    name: str
    kind: ItemKind

    @staticmethod
    def create(tenant_id: str, item_id: str, name: str, kind: ItemKind) -> Item:
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        return Item(tenant_id=tenant_id, id=item_id, name=name.strip(), kind=kind)
