"""Application service: Show Movements use case (query)."""

from __future__ import annotations

from pos_inventory.application.dto import MovementDTO
from pos_inventory.domain.exceptions import EntityNotFoundError
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.domain.service.stock_ledger import StockLedger


class ShowMovementsHandler:

    def __init__(
        self,
        movement_repo: StockMovementRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._movement_repo = movement_repo
        self._item_repo = item_repo

    def handle(self, tenant_id: str, item_name: str) -> list[MovementDTO]:
        item = self._item_repo.get_by_name(tenant_id, item_name)
        if item is None:
            raise EntityNotFoundError(f"Item not found: '{item_name}'")

        return [
            MovementDTO(
                kind=m.kind.value,
                quantity=m.quantity,
                note=m.note or "",
                created_at=m.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            )
            for m in StockLedger(self._movement_repo).history(tenant_id, item.id)
        ]
