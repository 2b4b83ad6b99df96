"""Application service: Record Sale use case.

This is the sale orchestrator's side of fulfillment: it turns a cart
(item names + quantities) into sale line items, hands them to the
allocation engine and formats the applied decrements for the receipt.

Fulfillment errors propagate unchanged; deciding whether a failed line
aborts the whole sale is left to the caller.
"""

from __future__ import annotations

from pos_inventory.application.dto import DecrementDTO, SaleItemSpec, SaleReceiptDTO
from pos_inventory.domain.exceptions import EntityNotFoundError
from pos_inventory.domain.model.item import ItemKind
from pos_inventory.domain.model.sale import DecrementRecord, DecrementSource, SaleLineItem
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.domain.service.allocation_engine import AllocationEngine
from pos_inventory.domain.service.batch_ledger import BatchLedger
from pos_inventory.domain.service.recipe_catalog import RecipeCatalog
from pos_inventory.domain.service.stock_ledger import StockLedger


class RecordSaleHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        recipe_repo: RecipeRepository,
        batch_repo: BatchRepository,
        movement_repo: StockMovementRepository,
    ) -> None:
        self._item_repo = item_repo
        self._recipe_repo = recipe_repo
        self._batch_repo = batch_repo
        self._movement_repo = movement_repo

    def handle(self, tenant_id: str, item_specs: list[SaleItemSpec]) -> SaleReceiptDTO:
        """Record a paid sale against inventory.

        Steps:
        1. Resolve each item name to an Item (fail if not found).
        2. Attach the producing recipe to batch-portion items so a
           batch shortfall can fall back to raw ingredients.
        3. Let the allocation engine apply the decrements.
        4. Return a receipt DTO.
        """
        catalog = RecipeCatalog(self._recipe_repo, self._item_repo)
        engine = AllocationEngine(
            StockLedger(self._movement_repo),
            BatchLedger(self._batch_repo),
            catalog,
        )

        line_items: list[SaleLineItem] = []
        for spec in item_specs:
            item = self._item_repo.get_by_name(tenant_id, spec.item_name)
            if item is None:
                raise EntityNotFoundError(f"Item not found: '{spec.item_name}'")

            recipe_id = None
            if item.kind is ItemKind.BATCH_PORTION:
                recipe = catalog.recipe_for_item(tenant_id, item.id)
                recipe_id = recipe.id if recipe is not None else None

            line_items.append(
                SaleLineItem(
                    item_id=item.id,
                    kind=item.kind,
                    quantity=spec.quantity,
                    recipe_id=recipe_id,
                )
            )

        decrements = engine.fulfill(tenant_id, line_items)

        return SaleReceiptDTO(
            tenant_id=tenant_id,
            items_sold=sum(line.quantity for line in line_items),
            decrements=[self._to_dto(tenant_id, d) for d in decrements],
        )

    # --- Mapping --------------------------------------------------------------

    def _to_dto(self, tenant_id: str, record: DecrementRecord) -> DecrementDTO:
        if record.source is DecrementSource.BATCH:
            target = f"batch #{record.batch_id}"
        else:
            item = self._item_repo.get_by_id(tenant_id, record.item_id or "")
            target = item.name if item is not None else str(record.item_id)
        return DecrementDTO(
            source=record.source.value,
            target=target,
            quantity=record.quantity,
        )
