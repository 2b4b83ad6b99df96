"""JSON-file-backed implementation of WastageRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pos_inventory.domain.model.wastage import WastageReason, WastageRecord, WastageSource
from pos_inventory.domain.repository.wastage_repository import WastageRepository
from pos_inventory.infrastructure.persistence.json_store import JsonStore


class JsonWastageRepository(WastageRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonStore(file_path)

    def add(self, record: WastageRecord) -> None:
        with self._store.locked():
            records = self._store.load()
            records.append(
                {
                    "tenant_id": record.tenant_id,
                    "source_type": record.source.value,
                    "source_id": record.source_id,
                    "qty": record.quantity,
                    "reason": record.reason.value,
                    "created_at": record.created_at.isoformat(),
                }
            )
            self._store.persist(records)

    def list_all(self, tenant_id: str) -> list[WastageRecord]:
        return [
            WastageRecord(
                tenant_id=raw["tenant_id"],
                source=WastageSource(raw["source_type"]),
                source_id=raw["source_id"],
                quantity=raw["qty"],
                reason=WastageReason(raw["reason"]),
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
            for raw in self._store.load()
            if raw["tenant_id"] == tenant_id
        ]
