"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pos_inventory.infrastructure.config import get_settings
from pos_inventory.infrastructure.persistence.json_batch_repository import (
    JsonBatchRepository,
)
from pos_inventory.infrastructure.persistence.json_item_repository import (
    JsonItemRepository,
)
from pos_inventory.infrastructure.persistence.json_recipe_repository import (
    JsonRecipeRepository,
)
from pos_inventory.infrastructure.persistence.json_stock_movement_repository import (
    JsonStockMovementRepository,
)
from pos_inventory.infrastructure.persistence.json_wastage_repository import (
    JsonWastageRepository,
)


def item_repository() -> JsonItemRepository:
    return JsonItemRepository(get_settings().data_dir / "items.json")


def recipe_repository() -> JsonRecipeRepository:
    return JsonRecipeRepository(get_settings().data_dir / "recipes.json")


def batch_repository() -> JsonBatchRepository:
    return JsonBatchRepository(get_settings().data_dir / "batches.json")


def stock_movement_repository() -> JsonStockMovementRepository:
    return JsonStockMovementRepository(get_settings().data_dir / "stock_movements.json")


def wastage_repository() -> JsonWastageRepository:
    return JsonWastageRepository(get_settings().data_dir / "wastages.json")
