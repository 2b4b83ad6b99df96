"""Abstract repository for Recipe aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos_inventory.domain.model.recipe import Recipe


class RecipeRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique recipe ID."""

    @abstractmethod
    def get_by_id(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by its globally unique ID, or None."""

    @abstractmethod
    def get_by_name(self, tenant_id: str, name: str) -> Recipe | None:
        """Return a recipe by its name (case-insensitive), or None."""

    @abstractmethod
    def get_by_item_id(self, tenant_id: str, item_id: str) -> Recipe | None:
        """Return the recipe producing *item_id*, or None."""

    @abstractmethod
    def list_all(self, tenant_id: str) -> list[Recipe]:
        """Return every recipe owned by the tenant."""

    @abstractmethod
    def save(self, recipe: Recipe) -> None:
        """Persist a new or updated recipe."""
