"""Integration tests for the RecordSale use case."""

from datetime import date

import pytest

from pos_inventory.application.dto import SaleItemSpec
from pos_inventory.application.record_sale import RecordSaleHandler
from pos_inventory.domain.exceptions import (
    EntityNotFoundError,
    InsufficientIngredients,
    InsufficientStock,
    ValidationError,
)
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.model.item import Item, ItemKind
from pos_inventory.domain.model.recipe import Recipe, RecipeIngredient
from pos_inventory.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    FakeBatchRepository,
    FakeItemRepository,
    FakeRecipeRepository,
    FakeStockMovementRepository,
)


def _setup(cheese=10, soda=10):
    items = [
        Item("acme", "1", "Lasagna", ItemKind.BATCH_PORTION),
        Item("acme", "2", "Soda", ItemKind.UNIT),
        Item("acme", "3", "Cheese", ItemKind.INGREDIENT),
    ]
    recipes = [Recipe("acme", "r1", "Lasagna", "1", [RecipeIngredient("3", 1)])]
    batches = [Batch("acme", "b1", "r1", 2, date(2026, 1, 1))]

    item_repo = FakeItemRepository(items)
    batch_repo = FakeBatchRepository(batches)
    movement_repo = FakeStockMovementRepository()
    movement_repo.seed("acme", "2", soda)
    movement_repo.seed("acme", "3", cheese)

    handler = RecordSaleHandler(
        item_repo=item_repo,
        recipe_repo=FakeRecipeRepository(recipes),
        batch_repo=batch_repo,
        movement_repo=movement_repo,
    )
    return handler, batch_repo, StockLedger(movement_repo)


class TestRecordSaleHappyPath:

    def test_mixed_cart(self):
        handler, batches, stock = _setup()

        receipt = handler.handle(
            "acme", [SaleItemSpec("Soda", 3), SaleItemSpec("lasagna", 5)]
        )

        assert receipt.items_sold == 8
        assert [(d.source, d.target, d.quantity) for d in receipt.decrements] == [
            ("stock", "Soda", 3),
            ("batch", "batch #b1", 2),
            ("ingredient", "Cheese", 3),
        ]
        assert stock.current_quantity("acme", "2") == 7
        assert stock.current_quantity("acme", "3") == 7
        assert batches.portions_left("b1") == 0

    def test_recipe_attached_for_fallback(self):
        handler, _, stock = _setup(cheese=8)

        handler.handle("acme", [SaleItemSpec("Lasagna", 10)])

        assert stock.current_quantity("acme", "3") == 0


class TestRecordSaleFailures:

    def test_unknown_item_name(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Item not found"):
            handler.handle("acme", [SaleItemSpec("Pizza", 1)])

    def test_non_positive_quantity(self):
        handler, _, stock = _setup()
        with pytest.raises(ValidationError):
            handler.handle("acme", [SaleItemSpec("Soda", 0)])
        assert stock.current_quantity("acme", "2") == 10

    def test_insufficient_ingredients_leaves_batches(self):
        handler, batches, stock = _setup(cheese=2)

        with pytest.raises(InsufficientIngredients) as exc_info:
            handler.handle("acme", [SaleItemSpec("Soda", 1), SaleItemSpec("Lasagna", 5)])

        assert exc_info.value.deficit == 1
        assert batches.portions_left("b1") == 2
        assert stock.current_quantity("acme", "3") == 2
        # earlier line stays committed
        assert stock.current_quantity("acme", "2") == 9

    def test_insufficient_units(self):
        handler, _, _ = _setup(soda=1)
        with pytest.raises(InsufficientStock):
            handler.handle("acme", [SaleItemSpec("Soda", 2)])
