"""Domain service: Batch Ledger.

Read/write access to prepared-food batches.  The ledger only knows how
to list and overwrite batches; which batch to draw from is decided by
the allocation engine.
"""

from __future__ import annotations

import logging
from datetime import date

from pos_inventory.domain.exceptions import ConcurrencyConflict, EntityNotFoundError
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.repository.batch_repository import BatchRepository

logger = logging.getLogger(__name__)


class BatchLedger:

    def __init__(self, batch_repo: BatchRepository) -> None:
        self._batch_repo = batch_repo

    def list_active_batches(self, tenant_id: str, recipe_id: str) -> list[Batch]:
        """Batches with portions left, soonest expiry first.

        Batches without an expiry date come last.  ``sorted`` is stable,
        so equal expiries keep creation order.
        """
        batches = [
            b for b in self._batch_repo.list_by_recipe(tenant_id, recipe_id)
            if b.portions_left > 0
        ]
        return sorted(batches, key=lambda b: b.consumption_key)

    def list_batches(self, tenant_id: str, recipe_id: str | None = None) -> list[Batch]:
        """Every batch including exhausted ones, for audit and expiry reports."""
        if recipe_id is None:
            return self._batch_repo.list_all(tenant_id)
        return self._batch_repo.list_by_recipe(tenant_id, recipe_id)

    def get(self, tenant_id: str, batch_id: str) -> Batch:
        batch = self._batch_repo.get_by_id(tenant_id, batch_id)
        if batch is None:
            raise EntityNotFoundError(f"Batch '{batch_id}' not found")
        return batch

    def set_portions_left(
        self,
        tenant_id: str,
        batch_id: str,
        new_value: int,
        expected_version: int | None = None,
    ) -> Batch:
        """Overwrite a batch's remaining portions.

        With *expected_version* the write only succeeds if nobody saved
        the batch since the caller read it at that version.
        """
        batch = self.get(tenant_id, batch_id)
        if expected_version is not None and batch.version != expected_version:
            raise ConcurrencyConflict(
                (tenant_id, batch_id),
                f"expected version {expected_version}, found {batch.version}",
            )
        previous = batch.portions_left
        batch.set_portions_left(new_value)
        self._batch_repo.save(batch)
        logger.info(
            "Batch %s portions %d -> %d (tenant=%s)",
            batch_id, previous, new_value, tenant_id,
        )
        return batch

    def produce(
        self,
        tenant_id: str,
        recipe_id: str,
        portions: int,
        expiry_date: date | None = None,
    ) -> Batch:
        batch = Batch.produce(
            tenant_id=tenant_id,
            batch_id=self._batch_repo.next_id(),
            recipe_id=recipe_id,
            portions=portions,
            expiry_date=expiry_date,
        )
        self._batch_repo.save(batch)
        logger.info(
            "Batch %s produced: recipe=%s portions=%d expiry=%s (tenant=%s)",
            batch.id, recipe_id, portions, expiry_date, tenant_id,
        )
        return batch
