"""Application service: Register Wastage use case.

Wastage is a write path separate from sales but goes through the same
ledger primitives.  Reporting more waste than is on hand removes what
is there; reporting waste against an empty pool is rejected.
"""

from __future__ import annotations

import logging

from pos_inventory.domain.exceptions import EntityNotFoundError, ValidationError
from pos_inventory.domain.model.value_objects import Quantity
from pos_inventory.domain.model.wastage import WastageReason, WastageRecord, WastageSource
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.domain.repository.wastage_repository import WastageRepository
from pos_inventory.domain.service.batch_ledger import BatchLedger
from pos_inventory.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class RegisterWastageHandler:

    def __init__(
        self,
        wastage_repo: WastageRepository,
        batch_repo: BatchRepository,
        movement_repo: StockMovementRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._wastage_repo = wastage_repo
        self._batch_repo = batch_repo
        self._movement_repo = movement_repo
        self._item_repo = item_repo

    def handle(
        self,
        tenant_id: str,
        source: str,
        source_ref: str,
        quantity: int,
        reason: str,
    ) -> WastageRecord:
        """Write off *quantity* from a batch (by ID) or an item (by name)."""
        qty = Quantity(quantity).value
        try:
            wastage_source = WastageSource(source)
            wastage_reason = WastageReason(reason)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        if wastage_source is WastageSource.BATCH:
            source_id, removed = self._waste_batch(tenant_id, source_ref, qty)
        else:
            source_id, removed = self._waste_item(tenant_id, source_ref, qty, wastage_reason)

        record = WastageRecord(
            tenant_id=tenant_id,
            source=wastage_source,
            source_id=source_id,
            quantity=removed,
            reason=wastage_reason,
        )
        self._wastage_repo.add(record)
        logger.info(
            "Wastage: tenant=%s %s %s qty=%d reason=%s",
            tenant_id, wastage_source.value, source_id, removed, wastage_reason.value,
        )
        return record

    def _waste_batch(
        self, tenant_id: str, batch_id: str, qty: int
    ) -> tuple[str, int]:
        ledger = BatchLedger(self._batch_repo)
        batch = ledger.get(tenant_id, batch_id)
        removed = min(qty, batch.portions_left)
        if removed == 0:
            raise ValidationError(f"Batch '{batch_id}' has no portions left")
        ledger.set_portions_left(
            tenant_id, batch.id, batch.portions_left - removed,
            expected_version=batch.version,
        )
        return batch.id, removed

    def _waste_item(
        self, tenant_id: str, item_name: str, qty: int, reason: WastageReason
    ) -> tuple[str, int]:
        item = self._item_repo.get_by_name(tenant_id, item_name)
        if item is None:
            raise EntityNotFoundError(f"Item not found: '{item_name}'")
        if not item.kind.is_stocked:
            raise ValidationError(
                f"'{item.name}' is sold from batches; register wastage on a batch"
            )

        ledger = StockLedger(self._movement_repo)
        available = ledger.current_quantity(tenant_id, item.id)
        removed = min(qty, available)
        if removed == 0:
            raise ValidationError(f"No stock of '{item.name}' to write off")
        ledger.decrease(
            tenant_id, item.id, removed,
            note=f"wastage: {reason.value}",
            expected_quantity=available,
        )
        return item.id, removed
