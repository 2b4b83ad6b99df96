"""Application service: Add Recipe use case.

A recipe links a batch-portion item to the ingredients one portion of
it consumes.  Ingredients are given by item name.
"""

from __future__ import annotations

from pos_inventory.domain.exceptions import EntityNotFoundError, ValidationError
from pos_inventory.domain.model.item import ItemKind
from pos_inventory.domain.model.recipe import Recipe, RecipeIngredient
from pos_inventory.domain.repository.item_repository import ItemRepository
from pos_inventory.domain.repository.recipe_repository import RecipeRepository


class AddRecipeHandler:

    def __init__(
        self,
        recipe_repo: RecipeRepository,
        item_repo: ItemRepository,
    ) -> None:
        self._recipe_repo = recipe_repo
        self._item_repo = item_repo

    def handle(
        self,
        tenant_id: str,
        name: str,
        item_name: str,
        ingredients: dict[str, int],
    ) -> Recipe:
        item = self._item_repo.get_by_name(tenant_id, item_name)
        if item is None:
            raise EntityNotFoundError(f"Item not found: '{item_name}'")
        if item.kind is not ItemKind.BATCH_PORTION:
            raise ValidationError(
                f"Recipes can only produce batch portions, '{item.name}' is {item.kind.value}"
            )
        if self._recipe_repo.get_by_item_id(tenant_id, item.id) is not None:
            raise ValidationError(f"Item '{item.name}' already has a recipe")
        if name and self._recipe_repo.get_by_name(tenant_id, name.strip()) is not None:
            raise ValidationError(f"Recipe '{name.strip()}' already exists")

        requirements: list[RecipeIngredient] = []
        for ingredient_name, qty in ingredients.items():
            ingredient = self._item_repo.get_by_name(tenant_id, ingredient_name)
            if ingredient is None:
                raise EntityNotFoundError(f"Ingredient not found: '{ingredient_name}'")
            if not ingredient.kind.is_stocked:
                raise ValidationError(
                    f"'{ingredient.name}' is a batch portion and cannot be an ingredient"
                )
            requirements.append(RecipeIngredient(ingredient.id, qty))

        recipe = Recipe.create(
            tenant_id=tenant_id,
            recipe_id=self._recipe_repo.next_id(),
            name=name,
            item_id=item.id,
            ingredients=requirements,
        )
        self._recipe_repo.save(recipe)
        return recipe
