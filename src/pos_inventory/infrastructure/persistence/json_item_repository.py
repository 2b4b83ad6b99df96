"""JSON-file-backed implementation of ItemRepository."""

from __future__ import annotations

from pathlib import Path

from pos_inventory.domain.model.item import Item, ItemKind
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.infrastructure.persistence.json_store import JsonStore


class JsonItemRepository(ItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonStore(file_path)

    # --- ItemRepository interface ---------------------------------------------

    def next_id(self) -> str:
        return self._store.next_id()

    def get_by_id(self, tenant_id: str, item_id: str) -> Item | None:
        for raw in self._store.load():
            if raw["tenant_id"] == tenant_id and raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, tenant_id: str, name: str) -> Item | None:
        for raw in self._store.load():
            if raw["tenant_id"] == tenant_id and raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self, tenant_id: str) -> list[Item]:
        return [
            self._to_domain(raw)
            for raw in self._store.load()
            if raw["tenant_id"] == tenant_id
        ]

    def save(self, item: Item) -> None:
        with self._store.locked():
            records = self._store.load()
            for i, raw in enumerate(records):
                if raw["id"] == item.id:
                    records[i] = self._to_raw(item)
                    break
            else:
                records.append(self._to_raw(item))
            self._store.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "id": item.id,
            "tenant_id": item.tenant_id,
            "name": item.name,
            "kind": item.kind.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        return Item(
            tenant_id=raw["tenant_id"],
            id=raw["id"],
            name=raw["name"],
            kind=ItemKind(raw["kind"]),
        )
