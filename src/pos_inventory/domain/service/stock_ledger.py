"""Domain service: Stock Ledger.

Read/write access to a single (tenant, item) stock pool.  Quantities are
never stored; they are derived from the movement log, and the only way
to change one is to append a movement.
"""

from __future__ import annotations

import logging

from pos_inventory.domain.exceptions import ConcurrencyConflict, InsufficientStock
from pos_inventory.domain.model.stock import StockMovement
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)

logger = logging.getLogger(__name__)


class StockLedger:

    def __init__(self, movement_repo: StockMovementRepository) -> None:
        self._movement_repo = movement_repo

    def current_quantity(self, tenant_id: str, item_id: str) -> int:
        """Current on-hand quantity; 0 for an item with no history."""
        return self._movement_repo.current_quantity(tenant_id, item_id)

    def history(self, tenant_id: str, item_id: str) -> list[StockMovement]:
        return self._movement_repo.list_for_item(tenant_id, item_id)

    def increase(
        self,
        tenant_id: str,
        item_id: str,
        quantity: int,
        note: str | None = None,
    ) -> StockMovement:
        """Append an ``in`` movement.  No upper bound is enforced."""
        movement = StockMovement.inbound(tenant_id, item_id, quantity, note)
        self._movement_repo.append(movement)
        logger.info("Stock in: tenant=%s item=%s qty=%d", tenant_id, item_id, quantity)
        return movement

    def decrease(
        self,
        tenant_id: str,
        item_id: str,
        quantity: int,
        note: str | None = None,
        expected_quantity: int | None = None,
    ) -> StockMovement:
        """Append an ``out`` movement if the pool can cover it.

        The append is conditional on the quantity read here, so a
        concurrent writer makes this fail with ConcurrencyConflict rather
        than drive the pool negative.  Pass *expected_quantity* when the
        caller planned the decrease from an earlier read.
        """
        movement = StockMovement.outbound(tenant_id, item_id, quantity, note)

        available = self.current_quantity(tenant_id, item_id)
        if expected_quantity is not None and available != expected_quantity:
            raise ConcurrencyConflict(
                (tenant_id, item_id),
                f"expected {expected_quantity} on hand, found {available}",
            )
        if quantity > available:
            raise InsufficientStock(item_id, requested=quantity, available=available)

        self._movement_repo.append(movement, expected_quantity=available)
        logger.info(
            "Stock out: tenant=%s item=%s qty=%d (was %d)",
            tenant_id, item_id, quantity, available,
        )
        return movement
