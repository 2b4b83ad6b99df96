"""JSON-file-backed implementation of RecipeRepository."""

from __future__ import annotations

from pathlib import Path

from pos_inventory.domain.model.recipe import Recipe, RecipeIngredient
from pos_inventory.domain.repository.recipe_repository import RecipeRepository
from pos_inventory.infrastructure.persistence.json_store import JsonStore


class JsonRecipeRepository(RecipeRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonStore(file_path)

    # --- RecipeRepository interface -------------------------------------------

    def next_id(self) -> str:
        return self._store.next_id()

    def get_by_id(self, recipe_id: str) -> Recipe | None:
        for raw in self._store.load():
            if raw["id"] == recipe_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, tenant_id: str, name: str) -> Recipe | None:
        for raw in self._store.load():
            if raw["tenant_id"] == tenant_id and raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def get_by_item_id(self, tenant_id: str, item_id: str) -> Recipe | None:
        for raw in self._store.load():
            if raw["tenant_id"] == tenant_id and raw["item_id"] == item_id:
                return self._to_domain(raw)
        return None

    def list_all(self, tenant_id: str) -> list[Recipe]:
        return [
            self._to_domain(raw)
            for raw in self._store.load()
            if raw["tenant_id"] == tenant_id
        ]

    def save(self, recipe: Recipe) -> None:
        with self._store.locked():
            records = self._store.load()
            for i, raw in enumerate(records):
                if raw["id"] == recipe.id:
                    records[i] = self._to_raw(recipe)
                    break
            else:
                records.append(self._to_raw(recipe))
            self._store.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(recipe: Recipe) -> dict:
        return {
            "id": recipe.id,
            "tenant_id": recipe.tenant_id,
            "name": recipe.name,
            "item_id": recipe.item_id,
            "ingredients": [
                {
                    "ingredient_id": ing.ingredient_id,
                    "quantity_per_portion": ing.quantity_per_portion,
                }
                for ing in recipe.ingredients
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Recipe:
        return Recipe(
            tenant_id=raw["tenant_id"],
            id=raw["id"],
            name=raw["name"],
            item_id=raw["item_id"],
            ingredients=[
                RecipeIngredient(i["ingredient_id"], i["quantity_per_portion"])
                for i in raw.get("ingredients", [])
            ],
        )
