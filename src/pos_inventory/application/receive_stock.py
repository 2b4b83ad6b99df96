"""Application service: Receive Stock use case."""

from __future__ import annotations

from pos_inventory.domain.exceptions import EntityNotFoundError, ValidationError
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.domain.service.stock_ledger import StockLedger


class ReceiveStockHandler:

    def __init__(
        self,
        movement_repo: StockMovementRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._movement_repo = movement_repo
        self._item_repo = item_repo

    def handle(
        self,
        tenant_id: str,
        item_name: str,
        quantity: int,
        note: str | None = None,
    ) -> int:
        """Add stock for a unit or ingredient item; return the new quantity."""
        item = self._item_repo.get_by_name(tenant_id, item_name)
        if item is None:
            raise EntityNotFoundError(f"Item not found: '{item_name}'")
        if not item.kind.is_stocked:
            raise ValidationError(
                f"'{item.name}' is sold from batches; produce a batch instead"
            )

        ledger = StockLedger(self._movement_repo)
        ledger.increase(tenant_id, item.id, quantity, note=note)
        return ledger.current_quantity(tenant_id, item.id)
