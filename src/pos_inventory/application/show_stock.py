"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from pos_inventory.application.dto import StockLineDTO
from pos_inventory.domain.model.item import Item
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.domain.service.batch_ledger import BatchLedger
from pos_inventory.domain.service.stock_ledger import StockLedger

DEFAULT_LOW_STOCK_THRESHOLD = 5


class ShowStockHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        recipe_repo: RecipeRepository,
        batch_repo: BatchRepository,
        movement_repo: StockMovementRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._item_repo = item_repo
        self._recipe_repo = recipe_repo
        self._stock_ledger = StockLedger(movement_repo)
        self._batch_ledger = BatchLedger(batch_repo)
        self._low_stock_threshold = low_stock_threshold

    def handle(self, tenant_id: str) -> list[StockLineDTO]:
        """On-hand quantity per item, flagging anything at or below the threshold.

        Batch-portion items count the portions left across active batches.
        """
        lines: list[StockLineDTO] = []
        for item in sorted(self._item_repo.list_all(tenant_id), key=lambda i: i.name.lower()):
            on_hand = self._on_hand(tenant_id, item)
            lines.append(
                StockLineDTO(
                    item_name=item.name,
                    kind=item.kind.value,
                    on_hand=on_hand,
                    low_stock=on_hand <= self._low_stock_threshold,
                )
            )
        return lines

    def _on_hand(self, tenant_id: str, item: Item) -> int:
        if item.kind.is_stocked:
            return self._stock_ledger.current_quantity(tenant_id, item.id)
        recipe = self._recipe_repo.get_by_item_id(tenant_id, item.id)
        if recipe is None:
            return 0
        return sum(
            b.portions_left
            for b in self._batch_ledger.list_active_batches(tenant_id, recipe.id)
        )
