"""Abstract repository for Batch aggregate.

``save`` is a compare-and-swap on ``Batch.version``: the stored version
must equal the version the caller read, otherwise ConcurrencyConflict is
raised and nothing is written.  On success the version is bumped on both
the stored row and the passed-in batch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos_inventory.domain.model.batch import Batch


class BatchRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique batch ID."""

    @abstractmethod
    def get_by_id(self, tenant_id: str, batch_id: str) -> Batch | None:
        """Return a batch by its ID, or None."""

    @abstractmethod
    def list_by_recipe(self, tenant_id: str, recipe_id: str) -> list[Batch]:
        """Return every batch of a recipe, in creation order."""

    @abstractmethod
    def list_all(self, tenant_id: str) -> list[Batch]:
        """Return every batch owned by the tenant, in creation order."""

    @abstractmethod
    def save(self, batch: Batch) -> None:
        """Persist a new or updated batch (conditional on its version)."""
