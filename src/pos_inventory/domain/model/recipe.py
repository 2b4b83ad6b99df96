"""Recipe aggregate: what one portion of a prepared item is made of."""

from __future__ import annotations

from dataclasses import dataclass, field

from pos_inventory.domain.exceptions import ValidationError
from pos_inventory.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class RecipeIngredient:
    ingredient_id: str
    quantity_per_portion: int

    def __post_init__(self) -> None:
        Quantity(self.quantity_per_portion)


@dataclass
class Recipe:
    """A recipe produces portions of one ``batch_portion`` item.

    The ingredient list keeps its declared order; fulfillment checks
    ingredients in that order and reports the first one that is short.
    """

    tenant_id: str
    id: str
    name: str
    item_id: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)

    @staticmethod
    def create(
        tenant_id: str,
        recipe_id: str,
        name: str,
        item_id: str,
        ingredients: list[RecipeIngredient],
    ) -> Recipe:
        if not name or not name.strip():
            raise ValidationError("Recipe name is required")

        seen: set[str] = set()
        for ingredient in ingredients:
            if ingredient.ingredient_id in seen:
                raise ValidationError(
                    f"Ingredient '{ingredient.ingredient_id}' listed twice"
                )
            seen.add(ingredient.ingredient_id)

        return Recipe(
            tenant_id=tenant_id,
            id=recipe_id,
            name=name.strip(),
            item_id=item_id,
            ingredients=list(ingredients),
        )
