"""Tests for the JSON-file-backed repositories."""

import json
from datetime import date

import pytest

from pos_inventory.domain.exceptions import ConcurrencyConflict
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.model.item import Item, ItemKind
from pos_inventory.domain.model.recipe import Recipe, RecipeIngredient
from pos_inventory.domain.model.stock import StockMovement
from pos_inventory.domain.model.wastage import WastageReason, WastageRecord, WastageSource
from pos_inventory.infrastructure.persistence.json_batch_repository import JsonBatchRepository
from pos_inventory.infrastructure.persistence.json_item_repository import JsonItemRepository
from pos_inventory.infrastructure.persistence.json_recipe_repository import JsonRecipeRepository
from pos_inventory.infrastructure.persistence.json_stock_movement_repository import (
    JsonStockMovementRepository,
)
from pos_inventory.infrastructure.persistence.json_wastage_repository import (
    JsonWastageRepository,
)


class TestJsonItemRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonItemRepository(tmp_path / "data" / "items.json")
        assert json.loads((tmp_path / "data" / "items.json").read_text()) == []

    def test_save_and_lookup_scoped_by_tenant(self, tmp_path):
        repo = JsonItemRepository(tmp_path / "items.json")
        repo.save(Item("acme", repo.next_id(), "Soda", ItemKind.UNIT))

        assert repo.get_by_name("acme", "SODA").kind == ItemKind.UNIT
        assert repo.get_by_name("globex", "Soda") is None
        assert repo.get_by_id("acme", "1").name == "Soda"
        assert repo.next_id() == "2"

    def test_save_replaces_existing(self, tmp_path):
        repo = JsonItemRepository(tmp_path / "items.json")
        repo.save(Item("acme", "1", "Soda", ItemKind.UNIT))
        repo.save(Item("acme", "1", "Cola", ItemKind.UNIT))
        assert [i.name for i in repo.list_all("acme")] == ["Cola"]


class TestJsonRecipeRepository:

    def test_round_trips_ingredients_in_order(self, tmp_path):
        repo = JsonRecipeRepository(tmp_path / "recipes.json")
        repo.save(Recipe(
            "acme", "1", "Lasagna", "10",
            [RecipeIngredient("20", 2), RecipeIngredient("21", 1)],
        ))

        recipe = JsonRecipeRepository(tmp_path / "recipes.json").get_by_id("1")

        assert [i.ingredient_id for i in recipe.ingredients] == ["20", "21"]
        assert repo.get_by_item_id("acme", "10").name == "Lasagna"


class TestJsonBatchRepository:

    def test_round_trip_and_version_bump(self, tmp_path):
        repo = JsonBatchRepository(tmp_path / "batches.json")
        batch = Batch("acme", repo.next_id(), "r1", 5, date(2026, 3, 1))
        repo.save(batch)

        loaded = repo.get_by_id("acme", batch.id)
        assert loaded.expiry_date == date(2026, 3, 1)
        assert loaded.version == 1

        loaded.set_portions_left(2)
        repo.save(loaded)
        assert repo.get_by_id("acme", batch.id).portions_left == 2
        assert repo.get_by_id("acme", batch.id).version == 2

    def test_stale_save_rejected(self, tmp_path):
        repo = JsonBatchRepository(tmp_path / "batches.json")
        repo.save(Batch("acme", "1", "r1", 5))
        first = repo.get_by_id("acme", "1")
        second = repo.get_by_id("acme", "1")

        first.set_portions_left(4)
        repo.save(first)
        second.set_portions_left(3)

        with pytest.raises(ConcurrencyConflict):
            repo.save(second)
        assert repo.get_by_id("acme", "1").portions_left == 4

    def test_undated_batch(self, tmp_path):
        repo = JsonBatchRepository(tmp_path / "batches.json")
        repo.save(Batch("acme", "1", "r1", 5))
        assert repo.list_by_recipe("acme", "r1")[0].expiry_date is None


class TestJsonStockMovementRepository:

    def test_quantity_is_sum_of_log(self, tmp_path):
        repo = JsonStockMovementRepository(tmp_path / "moves.json")
        repo.append(StockMovement.inbound("acme", "1", 10))
        repo.append(StockMovement.outbound("acme", "1", 4), expected_quantity=10)
        repo.append(StockMovement.inbound("globex", "1", 99))

        assert repo.current_quantity("acme", "1") == 6
        assert len(repo.list_for_item("acme", "1")) == 2

    def test_conditional_append_rejects_stale_quantity(self, tmp_path):
        repo = JsonStockMovementRepository(tmp_path / "moves.json")
        repo.append(StockMovement.inbound("acme", "1", 10))

        with pytest.raises(ConcurrencyConflict):
            repo.append(StockMovement.outbound("acme", "1", 4), expected_quantity=11)

        assert repo.current_quantity("acme", "1") == 10


class TestJsonWastageRepository:

    def test_add_and_list(self, tmp_path):
        repo = JsonWastageRepository(tmp_path / "wastages.json")
        record = WastageRecord("acme", WastageSource.BATCH, "1", 2, WastageReason.LEFTOVER)
        repo.add(record)

        assert repo.list_all("acme") == [record]
        assert repo.list_all("globex") == []
