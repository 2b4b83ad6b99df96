"""Unit tests for domain model invariants."""

from datetime import date

import pytest

from pos_inventory.domain.exceptions import ValidationError
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.model.item import Item, ItemKind
from pos_inventory.domain.model.recipe import Recipe, RecipeIngredient
from pos_inventory.domain.model.stock import MovementKind, StockMovement, quantity_of
from pos_inventory.domain.model.value_objects import Quantity


class TestQuantity:

    def test_positive_accepted(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    @pytest.mark.parametrize("value", [1.5, "2", True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(value)


class TestStockMovement:

    def test_inbound_is_positive(self):
        m = StockMovement.inbound("acme", "flour", 5)
        assert m.kind == MovementKind.IN
        assert m.quantity == 5

    def test_outbound_is_negative(self):
        m = StockMovement.outbound("acme", "flour", 5)
        assert m.kind == MovementKind.OUT
        assert m.quantity == -5

    def test_sign_must_match_kind(self):
        with pytest.raises(ValidationError):
            StockMovement("acme", "flour", 5, MovementKind.OUT)

    def test_is_immutable(self):
        m = StockMovement.inbound("acme", "flour", 5)
        with pytest.raises(AttributeError):
            m.quantity = 7

    def test_quantity_of_sums_signed(self):
        movements = [
            StockMovement.inbound("acme", "flour", 5),
            StockMovement.outbound("acme", "flour", 2),
        ]
        assert quantity_of(movements) == 3


class TestBatch:

    def test_consumption_key_puts_undated_last(self):
        dated = Batch("acme", "1", "r1", 1, date(2030, 1, 1))
        undated = Batch("acme", "2", "r1", 1, None)
        assert dated.consumption_key < undated.consumption_key

    def test_expired(self):
        batch = Batch("acme", "1", "r1", 1, date(2026, 1, 1))
        assert batch.is_expired(date(2026, 1, 2))
        assert not batch.is_expired(date(2026, 1, 1))

    def test_undated_never_expires(self):
        assert not Batch("acme", "1", "r1", 1, None).is_expired(date.max)


class TestRecipe:

    def test_duplicate_ingredient_rejected(self):
        with pytest.raises(ValidationError, match="listed twice"):
            Recipe.create(
                "acme", "r1", "Lasagna", "lasagna",
                [RecipeIngredient("cheese", 1), RecipeIngredient("cheese", 2)],
            )

    def test_zero_quantity_per_portion_rejected(self):
        with pytest.raises(ValidationError):
            RecipeIngredient("cheese", 0)


class TestItem:

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Item.create("acme", "1", "  ", ItemKind.UNIT)

    def test_batch_portion_is_not_stocked(self):
        assert not ItemKind.BATCH_PORTION.is_stocked
        assert ItemKind.UNIT.is_stocked
        assert ItemKind.INGREDIENT.is_stocked
