"""Domain service: Recipe Catalog.

Read-only view over items and recipes as the fulfillment engine needs
them.  Missing rows surface as UnknownItem / UnknownRecipe.
"""

from __future__ import annotations

from pos_inventory.domain.exceptions import UnknownItem, UnknownRecipe
from pos_inventory.domain.model.item import Item
from pos_inventory.domain.model.recipe import Recipe, RecipeIngredient
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository


class RecipeCatalog:

    def __init__(
        self,
        recipe_repo: RecipeRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._recipe_repo = recipe_repo
        self._item_repo = item_repo

    def ingredients_of(self, recipe_id: str) -> list[RecipeIngredient]:
        """Ingredient requirements per portion, in declared order."""
        return list(self.get_recipe(recipe_id).ingredients)

    def get_recipe(self, recipe_id: str) -> Recipe:
        recipe = self._recipe_repo.get_by_id(recipe_id)
        if recipe is None:
            raise UnknownRecipe(recipe_id)
        return recipe

    def recipe_for_item(self, tenant_id: str, item_id: str) -> Recipe | None:
        return self._recipe_repo.get_by_item_id(tenant_id, item_id)

    def get_item(self, tenant_id: str, item_id: str) -> Item:
        item = self._item_repo.get_by_id(tenant_id, item_id)
        if item is None:
            raise UnknownItem(item_id)
        return item
