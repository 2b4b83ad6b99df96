"""Abstract repository for Item aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Every lookup is scoped by tenant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos_inventory.domain.model.item import Item


class ItemRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique item ID."""

    @abstractmethod
    def get_by_id(self, tenant_id: str, item_id: str) -> Item | None:
        """Return an item by its ID, or None if the tenant has no such item."""

    @abstractmethod
    def get_by_name(self, tenant_id: str, name: str) -> Item | None:
        """Return an item by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self, tenant_id: str) -> list[Item]:
        """Return every item owned by the tenant."""

    @abstractmethod
    def save(self, item: Item) -> None:
        """Persist a new or updated item."""
