"""Domain service: Allocation Engine.

Turns the line items of a completed sale into concrete decrements
against the stock ledger and the batch ledger.

Every line item is all-or-nothing.  For ``batch_portion`` items the work
is split in two phases so nothing is written until the whole line item
is known to be satisfiable:

  Phase A: plan draws from active batches, soonest expiry first.
  Phase B: if batches fall short, check that the recipe's ingredients
            cover the rest; only then apply the batch writes followed
            by the ingredient decreases.

Line items are processed in input order and each is its own atomic
unit: a failure does not roll back line items committed before it.

Writes are conditional on the snapshot they were planned from (batch
version, ingredient quantity).  If the row moved in between, the write
fails with ConcurrencyConflict instead of oversubscribing the pool, and
the writes already made for that line item are undone first.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pos_inventory.domain.exceptions import (
    ConcurrencyConflict,
    FulfillmentError,
    InsufficientIngredients,
    InsufficientPortions,
    UnknownRecipe,
    ValidationError,
)
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.model.item import ItemKind
from pos_inventory.domain.model.sale import DecrementRecord, SaleLineItem
from pos_inventory.domain.model.value_objects import Quantity
from pos_inventory.domain.service.batch_ledger import BatchLedger
from pos_inventory.domain.service.recipe_catalog import RecipeCatalog
from pos_inventory.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)

SALE_NOTE = "sale"


@dataclass(frozen=True)
class BatchDraw:
    """A planned deduction from one batch, as read at planning time."""

    batch_id: str
    version: int
    portions_left: int
    take: int

    @property
    def new_portions_left(self) -> int:
        return self.portions_left - self.take


@dataclass(frozen=True)
class IngredientDraw:
    """A planned fallback deduction from one ingredient pool."""

    ingredient_id: str
    needed: int
    available: int


def plan_batch_draws(batches: Sequence[Batch], quantity: int) -> tuple[list[BatchDraw], int]:
    """Walk *batches* in order, taking what each can give.

    Returns the planned draws and the quantity still needed afterwards.
    """
    draws: list[BatchDraw] = []
    remaining = quantity
    for batch in batches:
        if remaining <= 0:
            break
        take = min(batch.portions_left, remaining)
        draws.append(BatchDraw(batch.id, batch.version, batch.portions_left, take))
        remaining -= take
    return draws, remaining


class AllocationEngine:

    def __init__(
        self,
        stock_ledger: StockLedger,
        batch_ledger: BatchLedger,
        recipe_catalog: RecipeCatalog,
    ) -> None:
        self._stock_ledger = stock_ledger
        self._batch_ledger = batch_ledger
        self._catalog = recipe_catalog

    def fulfill(
        self, tenant_id: str, line_items: Sequence[SaleLineItem]
    ) -> list[DecrementRecord]:
        """Apply the decrements for every line item of a sale.

        All line items are validated before any ledger is touched.  On a
        fulfillment failure the raised error carries ``line_index`` and
        the records already ``committed`` for earlier line items.
        """
        items = list(line_items)
        if not items:
            raise ValidationError("Sale must contain at least one line item")
        for line in items:
            self._validate(tenant_id, line)

        decrements: list[DecrementRecord] = []
        for index, line in enumerate(items, start=1):
            try:
                if line.kind.is_stocked:
                    applied = self._fulfill_from_stock(tenant_id, line)
                else:
                    applied = self._fulfill_portions(tenant_id, line)
            except (FulfillmentError, ConcurrencyConflict) as exc:
                exc.line_index = index
                exc.committed = tuple(decrements)
                if isinstance(exc, ConcurrencyConflict):
                    exc.committed += exc.unreverted
                logger.warning(
                    "Line %d (item=%s qty=%d) rejected for tenant %s: %s",
                    index, line.item_id, line.quantity, tenant_id, exc,
                )
                raise
            decrements.extend(applied)

        logger.info(
            "Sale fulfilled for tenant %s: %d line items, %d decrements",
            tenant_id, len(items), len(decrements),
        )
        return decrements

    # --- Validation -----------------------------------------------------------

    def _validate(self, tenant_id: str, line: SaleLineItem) -> None:
        Quantity(line.quantity)

        item = self._catalog.get_item(tenant_id, line.item_id)
        if item.kind is not line.kind:
            raise ValidationError(
                f"Item '{item.name}' is {item.kind.value}, "
                f"not {line.kind.value}"
            )

        if line.recipe_id is None:
            return
        if line.kind is not ItemKind.BATCH_PORTION:
            raise ValidationError(
                f"Only batch portions can carry a recipe (item '{item.name}')"
            )
        recipe = self._catalog.get_recipe(line.recipe_id)
        if recipe.tenant_id != tenant_id:
            raise UnknownRecipe(line.recipe_id)
        if recipe.item_id != line.item_id:
            raise ValidationError(
                f"Recipe '{recipe.name}' does not produce item '{item.name}'"
            )

    # --- Units and ingredients ------------------------------------------------

    def _fulfill_from_stock(
        self, tenant_id: str, line: SaleLineItem
    ) -> list[DecrementRecord]:
        self._stock_ledger.decrease(
            tenant_id, line.item_id, line.quantity, note=SALE_NOTE
        )
        return [DecrementRecord.from_stock(line.item_id, line.quantity)]

    # --- Batch portions -------------------------------------------------------

    def _fulfill_portions(
        self, tenant_id: str, line: SaleLineItem
    ) -> list[DecrementRecord]:
        recipe_id = line.recipe_id
        if recipe_id is None:
            # No fallback, but the item's batches can still be drawn from.
            recipe = self._catalog.recipe_for_item(tenant_id, line.item_id)
            batch_recipe_id = recipe.id if recipe is not None else None
        else:
            batch_recipe_id = recipe_id

        batches = (
            self._batch_ledger.list_active_batches(tenant_id, batch_recipe_id)
            if batch_recipe_id is not None
            else []
        )

        # Phase A: plan only.
        batch_draws, remaining = plan_batch_draws(batches, line.quantity)
        logger.debug(
            "Planned %d batch draws for item %s, %d portions still needed",
            len(batch_draws), line.item_id, remaining,
        )

        # Phase B: resolve any shortfall before writing anything.
        ingredient_draws: list[IngredientDraw] = []
        if remaining > 0:
            if recipe_id is None:
                raise InsufficientPortions(
                    batch_recipe_id,
                    requested=line.quantity,
                    available=line.quantity - remaining,
                )
            ingredient_draws = self._plan_ingredients(tenant_id, recipe_id, remaining)

        return self._commit(tenant_id, recipe_id, batch_draws, ingredient_draws)

    def _plan_ingredients(
        self, tenant_id: str, recipe_id: str, shortfall: int
    ) -> list[IngredientDraw]:
        """Check every ingredient can cover *shortfall* portions.

        An empty ingredient list covers any shortfall.
        """
        draws: list[IngredientDraw] = []
        for ingredient in self._catalog.ingredients_of(recipe_id):
            needed = shortfall * ingredient.quantity_per_portion
            available = self._stock_ledger.current_quantity(
                tenant_id, ingredient.ingredient_id
            )
            if available < needed:
                raise InsufficientIngredients(
                    recipe_id, ingredient.ingredient_id, deficit=needed - available
                )
            draws.append(IngredientDraw(ingredient.ingredient_id, needed, available))
        return draws

    def _commit(
        self,
        tenant_id: str,
        recipe_id: str | None,
        batch_draws: list[BatchDraw],
        ingredient_draws: list[IngredientDraw],
    ) -> list[DecrementRecord]:
        """Apply the planned writes, undoing them if a later one conflicts."""
        written_batches: list[tuple[BatchDraw, int]] = []
        written_ingredients: list[IngredientDraw] = []
        try:
            for draw in batch_draws:
                batch = self._batch_ledger.set_portions_left(
                    tenant_id,
                    draw.batch_id,
                    draw.new_portions_left,
                    expected_version=draw.version,
                )
                written_batches.append((draw, batch.version))

            for draw in ingredient_draws:
                self._stock_ledger.decrease(
                    tenant_id,
                    draw.ingredient_id,
                    draw.needed,
                    note=f"{SALE_NOTE}: recipe {recipe_id} fallback",
                    expected_quantity=draw.available,
                )
                written_ingredients.append(draw)
        except ConcurrencyConflict as exc:
            exc.unreverted = self._undo(
                tenant_id, recipe_id, written_batches, written_ingredients
            )
            raise

        applied = [DecrementRecord.from_batch(d.batch_id, d.take) for d, _ in written_batches]
        applied.extend(
            DecrementRecord.from_ingredient(d.ingredient_id, d.needed)
            for d in written_ingredients
        )
        return applied

    def _undo(
        self,
        tenant_id: str,
        recipe_id: str | None,
        written_batches: list[tuple[BatchDraw, int]],
        written_ingredients: list[IngredientDraw],
    ) -> tuple[DecrementRecord, ...]:
        """Put back what a failed commit already wrote.

        Ingredient pools get a compensating ``in`` movement.  A batch is
        restored only if it still holds the version this commit wrote;
        batches another writer touched since are left alone and returned.
        """
        for draw in reversed(written_ingredients):
            self._stock_ledger.increase(
                tenant_id,
                draw.ingredient_id,
                draw.needed,
                note=f"{SALE_NOTE}: recipe {recipe_id} rollback",
            )

        unreverted: list[DecrementRecord] = []
        for draw, version in reversed(written_batches):
            try:
                self._batch_ledger.set_portions_left(
                    tenant_id,
                    draw.batch_id,
                    draw.portions_left,
                    expected_version=version,
                )
            except ConcurrencyConflict:
                logger.error(
                    "Could not restore batch %s to %d portions (tenant=%s)",
                    draw.batch_id, draw.portions_left, tenant_id,
                )
                unreverted.append(DecrementRecord.from_batch(draw.batch_id, draw.take))
        return tuple(reversed(unreverted))
