"""Abstract repository for wastage records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos_inventory.domain.model.wastage import WastageRecord


class WastageRepository(ABC):

    @abstractmethod
    def add(self, record: WastageRecord) -> None:
        """Append a wastage record."""

    @abstractmethod
    def list_all(self, tenant_id: str) -> list[WastageRecord]:
        """Return every wastage record of the tenant, oldest first."""
