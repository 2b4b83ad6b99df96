"""Application service: Produce Batch use case."""

from __future__ import annotations

from datetime import date

from pos_inventory.domain.exceptions import EntityNotFoundError
from pos_inventory.domain.model.batch import Batch
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository
from pos_inventory.domain.service.batch_ledger import BatchLedger


class ProduceBatchHandler:

    def __init__(
        self,
        batch_repo: BatchRepository,
        recipe_repo: RecipeRepository,
    ) -> None:
        self._batch_repo = batch_repo
        self._recipe_repo = recipe_repo

    def handle(
        self,
        tenant_id: str,
        recipe_name: str,
        portions: int,
        expiry_date: date | None = None,
    ) -> Batch:
        """Record a batch the kitchen has just produced.

        Producing a batch does not consume ingredient stock; ingredients
        are only drawn on when a sale falls back to them.
        """
        recipe = self._recipe_repo.get_by_name(tenant_id, recipe_name)
        if recipe is None:
            raise EntityNotFoundError(f"Recipe not found: '{recipe_name}'")

        ledger = BatchLedger(self._batch_repo)
        return ledger.produce(tenant_id, recipe.id, portions, expiry_date)
