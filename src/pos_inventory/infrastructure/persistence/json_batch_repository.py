"""JSON-file-backed implementation of BatchRepository."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from pos_inventory.domain.exceptions import ConcurrencyConflict
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.infrastructure.persistence.json_store import JsonStore


class JsonBatchRepository(BatchRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonStore(file_path)

    # --- BatchRepository interface --------------------------------------------

    def next_id(self) -> str:
        return self._store.next_id()

    def get_by_id(self, tenant_id: str, batch_id: str) -> Batch | None:
        for raw in self._store.load():
            if raw["tenant_id"] == tenant_id and raw["id"] == batch_id:
                return self._to_domain(raw)
        return None

    def list_by_recipe(self, tenant_id: str, recipe_id: str) -> list[Batch]:
        return [
            batch for batch in self.list_all(tenant_id)
            if batch.recipe_id == recipe_id
        ]

    def list_all(self, tenant_id: str) -> list[Batch]:
        return [
            self._to_domain(raw)
            for raw in self._store.load()
            if raw["tenant_id"] == tenant_id
        ]

    def save(self, batch: Batch) -> None:
        with self._store.locked():
            records = self._store.load()
            for i, raw in enumerate(records):
                if raw["id"] == batch.id:
                    if raw.get("version", 0) != batch.version:
                        raise ConcurrencyConflict(
                            (batch.tenant_id, batch.id),
                            f"stored version {raw.get('version', 0)}, "
                            f"written from version {batch.version}",
                        )
                    batch.version += 1
                    records[i] = self._to_raw(batch)
                    break
            else:
                batch.version += 1
                records.append(self._to_raw(batch))
            self._store.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(batch: Batch) -> dict:
        return {
            "id": batch.id,
            "tenant_id": batch.tenant_id,
            "recipe_id": batch.recipe_id,
            "portions_left": batch.portions_left,
            "expiry_date": batch.expiry_date.isoformat() if batch.expiry_date else None,
            "created_at": batch.created_at.isoformat(),
            "version": batch.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Batch:
        expiry = raw.get("expiry_date")
        return Batch(
            tenant_id=raw["tenant_id"],
            id=raw["id"],
            recipe_id=raw["recipe_id"],
            portions_left=raw["portions_left"],
            expiry_date=date.fromisoformat(expiry) if expiry else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            version=raw.get("version", 0),
        )
