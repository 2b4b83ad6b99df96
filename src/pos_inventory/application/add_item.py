"""Application service: Add Item use case."""

from __future__ import annotations

from pos_inventory.domain.exceptions import ValidationError
from pos_inventory.domain.model.item import Item, ItemKind
from pos_inventory.domain.repository.item_repository import ItemRepository


class AddItemHandler:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self, tenant_id: str, name: str, kind: str) -> Item:
        """Add a new item to the tenant's catalog."""
        try:
            item_kind = ItemKind(kind)
        except ValueError as exc:
            raise ValidationError(f"Unknown item kind: '{kind}'") from exc

        if name and self._item_repo.get_by_name(tenant_id, name.strip()) is not None:
            raise ValidationError(f"Item '{name.strip()}' already exists")

        item = Item.create(tenant_id, self._item_repo.next_id(), name, item_kind)
        self._item_repo.save(item)
        return item
