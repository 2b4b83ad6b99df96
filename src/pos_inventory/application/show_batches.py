"""Application service: Show Batches use case (query).

Lists exhausted batches too, so expired or written-off lots stay visible.
"""

from __future__ import annotations

from datetime import date

from pos_inventory.application.dto import BatchLineDTO
from pos_inventory.domain.exceptions import EntityNotFoundError
from pos_inventory.domain.repository.batch_repository import BatchRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository
from pos_inventory.domain.service.batch_ledger import BatchLedger


class ShowBatchesHandler:

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
        recipe_name: str | None = None,
        today: date | None = None,
    ) -> list[BatchLineDTO]:
        today = today or date.today()
        recipe_id = None
        if recipe_name is not None:
            recipe = self._recipe_repo.get_by_name(tenant_id, recipe_name)
            if recipe is None:
                raise EntityNotFoundError(f"Recipe not found: '{recipe_name}'")
            recipe_id = recipe.id

        names = {r.id: r.name for r in self._recipe_repo.list_all(tenant_id)}
        batches = BatchLedger(self._batch_repo).list_batches(tenant_id, recipe_id)
        return [
            BatchLineDTO(
                batch_id=b.id,
                recipe_name=names.get(b.recipe_id, b.recipe_id),
                portions_left=b.portions_left,
                expiry_date=b.expiry_date.isoformat() if b.expiry_date else "-",
                exhausted=b.is_exhausted,
                expired=b.is_expired(today),
            )
            for b in sorted(batches, key=lambda b: b.consumption_key)
        ]
