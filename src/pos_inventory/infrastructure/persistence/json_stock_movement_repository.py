"""JSON-file-backed implementation of StockMovementRepository.

The file is an append-only log; existing entries are never rewritten.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pos_inventory.domain.exceptions import ConcurrencyConflict
from pos_inventory.domain.model.stock import MovementKind, StockMovement, quantity_of
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.infrastructure.persistence.json_store import JsonStore


class JsonStockMovementRepository(StockMovementRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonStore(file_path)

    # --- StockMovementRepository interface ------------------------------------

    def list_for_item(self, tenant_id: str, item_id: str) -> list[StockMovement]:
        return self._select(self._store.load(), tenant_id, item_id)

    def append(
        self, movement: StockMovement, expected_quantity: int | None = None
    ) -> None:
        with self._store.locked():
            records = self._store.load()
            if expected_quantity is not None:
                current = quantity_of(
                    self._select(records, movement.tenant_id, movement.item_id)
                )
                if current != expected_quantity:
                    raise ConcurrencyConflict(
                        (movement.tenant_id, movement.item_id),
                        f"expected {expected_quantity} on hand, found {current}",
                    )
            records.append(self._to_raw(movement))
            self._store.persist(records)

    # --- Serialization --------------------------------------------------------

    def _select(
        self, records: list[dict], tenant_id: str, item_id: str
    ) -> list[StockMovement]:
        return [
            self._to_domain(raw)
            for raw in records
            if raw["tenant_id"] == tenant_id and raw["item_id"] == item_id
        ]

    @staticmethod
    def _to_raw(movement: StockMovement) -> dict:
        return {
            "tenant_id": movement.tenant_id,
            "item_id": movement.item_id,
            "quantity": movement.quantity,
            "movement": movement.kind.value,
            "note": movement.note,
            "created_at": movement.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockMovement:
        return StockMovement(
            tenant_id=raw["tenant_id"],
            item_id=raw["item_id"],
            quantity=raw["quantity"],
            kind=MovementKind(raw["movement"]),
            note=raw.get("note"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
