"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Batches are stored as copies so a caller mutating a loaded batch does
not change the stored row until ``save`` accepts it.
"""

from __future__ import annotations

from dataclasses import replace

from pos_inventory.domain.exceptions import ConcurrencyConflict
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.model.item import Item
from pos_inventory.domain.model.recipe import Recipe
from pos_inventory.domain.model.stock import StockMovement, quantity_of
from pos_inventory.domain.model.wastage import WastageRecord
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository
from pos_inventory.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from pos_inventory.domain.repository.wastage_repository import WastageRepository


class FakeItemRepository(ItemRepository):

    def __init__(self, items: list[Item] | None = None) -> None:
        self._store: dict[str, Item] = {}
        for item in items or []:
            self._store[item.id] = item

    def next_id(self) -> str:
        return str(len(self._store) + 1)

    def get_by_id(self, tenant_id: str, item_id: str) -> Item | None:
        item = self._store.get(item_id)
        if item is None or item.tenant_id != tenant_id:
            return None
        return item

    def get_by_name(self, tenant_id: str, name: str) -> Item | None:
        for item in self._store.values():
            if item.tenant_id == tenant_id and item.name.lower() == name.lower():
                return item
        return None

    def list_all(self, tenant_id: str) -> list[Item]:
        return [i for i in self._store.values() if i.tenant_id == tenant_id]

    def save(self, item: Item) -> None:
        self._store[item.id] = item


class FakeRecipeRepository(RecipeRepository):

    def __init__(self, recipes: list[Recipe] | None = None) -> None:
        self._store: dict[str, Recipe] = {}
        for recipe in recipes or []:
            self._store[recipe.id] = recipe

    def next_id(self) -> str:
        return f"r{len(self._store) + 1}"

    def get_by_id(self, recipe_id: str) -> Recipe | None:
        return self._store.get(recipe_id)

    def get_by_name(self, tenant_id: str, name: str) -> Recipe | None:
        for recipe in self._store.values():
            if recipe.tenant_id == tenant_id and recipe.name.lower() == name.lower():
                return recipe
        return None

    def get_by_item_id(self, tenant_id: str, item_id: str) -> Recipe | None:
        for recipe in self._store.values():
            if recipe.tenant_id == tenant_id and recipe.item_id == item_id:
                return recipe
        return None

    def list_all(self, tenant_id: str) -> list[Recipe]:
        return [r for r in self._store.values() if r.tenant_id == tenant_id]

    def save(self, recipe: Recipe) -> None:
        self._store[recipe.id] = recipe


class FakeBatchRepository(BatchRepository):

    def __init__(self, batches: list[Batch] | None = None) -> None:
        self._store: dict[str, Batch] = {}
        self.saves = 0
        for batch in batches or []:
            self._store[batch.id] = replace(batch)

    def next_id(self) -> str:
        return f"b{len(self._store) + 1}"

    def get_by_id(self, tenant_id: str, batch_id: str) -> Batch | None:
        batch = self._store.get(batch_id)
        if batch is None or batch.tenant_id != tenant_id:
            return None
        return replace(batch)

    def list_by_recipe(self, tenant_id: str, recipe_id: str) -> list[Batch]:
        return [b for b in self.list_all(tenant_id) if b.recipe_id == recipe_id]

    def list_all(self, tenant_id: str) -> list[Batch]:
        return [replace(b) for b in self._store.values() if b.tenant_id == tenant_id]

    def save(self, batch: Batch) -> None:
        stored = self._store.get(batch.id)
        if stored is not None and stored.version != batch.version:
            raise ConcurrencyConflict((batch.tenant_id, batch.id))
        batch.version += 1
        self._store[batch.id] = replace(batch)
        self.saves += 1

    # --- Test helpers ---------------------------------------------------------

    def portions_left(self, batch_id: str) -> int:
        return self._store[batch_id].portions_left

    def bump(self, batch_id: str, portions_left: int) -> None:
        """Simulate a concurrent writer changing a batch."""
        stored = self._store[batch_id]
        self._store[batch_id] = replace(
            stored, portions_left=portions_left, version=stored.version + 1
        )


class FakeStockMovementRepository(StockMovementRepository):

    def __init__(self) -> None:
        self._log: list[StockMovement] = []

    def list_for_item(self, tenant_id: str, item_id: str) -> list[StockMovement]:
        return [
            m for m in self._log
            if m.tenant_id == tenant_id and m.item_id == item_id
        ]

    def append(
        self, movement: StockMovement, expected_quantity: int | None = None
    ) -> None:
        if expected_quantity is not None:
            current = quantity_of(self.list_for_item(movement.tenant_id, movement.item_id))
            if current != expected_quantity:
                raise ConcurrencyConflict((movement.tenant_id, movement.item_id))
        self._log.append(movement)

    # --- Test helpers ---------------------------------------------------------

    def seed(self, tenant_id: str, item_id: str, quantity: int) -> None:
        self._log.append(StockMovement.inbound(tenant_id, item_id, quantity, "seed"))

    @property
    def movement_count(self) -> int:
        return len(self._log)


class FakeWastageRepository(WastageRepository):

    def __init__(self) -> None:
        self._records: list[WastageRecord] = []

    def add(self, record: WastageRecord) -> None:
        self._records.append(record)

    def list_all(self, tenant_id: str) -> list[WastageRecord]:
        return [r for r in self._records if r.tenant_id == tenant_id]
