"""Stock movements: the append-only facts behind every stock pool.

There is no stored "quantity" for a unit or ingredient item.  The current
quantity of a (tenant, item) pool is the signed sum of its movements,
which keeps every change auditable and replayable.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pos_inventory.domain.exceptions import ValidationError
from pos_inventory.domain.model.value_objects import Quantity


class MovementKind(Enum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True)
class StockMovement:
    """An immutable ledger entry.

    ``quantity`` is signed: positive for ``IN``, negative for ``OUT``.
    Use the ``inbound`` / ``outbound`` factories rather than building
    one by hand.
    """

    tenant_id: str
    item_id: str
    quantity: int
    kind: MovementKind
    note: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.kind is MovementKind.IN and self.quantity <= 0:
            raise ValidationError("Inbound movement quantity must be positive")
        if self.kind is MovementKind.OUT and self.quantity >= 0:
            raise ValidationError("Outbound movement quantity must be negative")

    @staticmethod
    def inbound(
        tenant_id: str, item_id: str, quantity: int, note: str | None = None
    ) -> StockMovement:
        qty = Quantity(quantity).value
        return StockMovement(tenant_id, item_id, qty, MovementKind.IN, note)

    @staticmethod
    def outbound(
        tenant_id: str, item_id: str, quantity: int, note: str | None = None
    ) -> StockMovement:
        qty = Quantity(quantity).value
        return StockMovement(tenant_id, item_id, -qty, MovementKind.OUT, note)


def quantity_of(movements: Iterable[StockMovement]) -> int:
    """Signed sum of *movements*."""
    return sum(m.quantity for m in movements)
