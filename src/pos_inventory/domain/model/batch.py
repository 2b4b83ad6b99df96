"""Batch aggregate: a produced lot of a recipe.

Invariants:
- ``portions_left`` is never negative
- an exhausted batch (``portions_left == 0``) is kept, not deleted,
  so expiry and wastage reports still see it

``version`` is bumped by the repository on every save and lets writers
detect that the batch changed after they read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from pos_inventory.domain.exceptions import ValidationError
from pos_inventory.domain.model.value_objects import Quantity


@dataclass
class Batch:

    tenant_id: str
    id: str
    recipe_id: str
    portions_left: int
    expiry_date: date | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def produce(
        tenant_id: str,
        batch_id: str,
        recipe_id: str,
        portions: int,
        expiry_date: date | None = None,
    ) -> Batch:
        """Create a freshly cooked batch."""
        return Batch(
            tenant_id=tenant_id,
            id=batch_id,
            recipe_id=recipe_id,
            portions_left=Quantity(portions).value,
            expiry_date=expiry_date,
        )

    # --- Mutations ------------------------------------------------------------

    def set_portions_left(self, new_value: int) -> None:
        """Overwrite the remaining portions.

        Low-level: the caller computes the new value.
        """
        if isinstance(new_value, bool) or not isinstance(new_value, int):
            raise ValidationError("Portions left must be an integer")
        if new_value < 0:
            raise ValidationError(
                f"Portions left cannot be negative (batch {self.id})"
            )
        self.portions_left = new_value

    # --- Computed properties --------------------------------------------------

    @property
    def is_exhausted(self) -> bool:
        return self.portions_left == 0

    def is_expired(self, today: date) -> bool:
        return self.expiry_date is not None and self.expiry_date < today

    @property
    def consumption_key(self) -> tuple[bool, date]:
        """Sort key: soonest expiry first, undated batches last."""
        if self.expiry_date is None:
            return (True, date.max)
        return (False, self.expiry_date)
