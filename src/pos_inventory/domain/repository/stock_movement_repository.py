"""Abstract repository for the append-only stock movement log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos_inventory.domain.model.stock import StockMovement, quantity_of


class StockMovementRepository(ABC):

    @abstractmethod
    def list_for_item(self, tenant_id: str, item_id: str) -> list[StockMovement]:
        """Return the movements of one (tenant, item) pool in append order."""

    @abstractmethod
    def append(
        self, movement: StockMovement, expected_quantity: int | None = None
    ) -> None:
        """Append *movement* to the log.

        When *expected_quantity* is given, the pool's quantity before the
        append must equal it or ConcurrencyConflict is raised and nothing
        is written.  The check and the append are one atomic step.
        """

    def current_quantity(self, tenant_id: str, item_id: str) -> int:
        """Signed sum of the pool's movements.

        Implementations keeping a running total may override this.
        """
        return quantity_of(self.list_for_item(tenant_id, item_id))
