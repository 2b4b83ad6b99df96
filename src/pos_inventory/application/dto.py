"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: one cart entry (item name + quantity sold)."""

    item_name: str
    quantity: int


@dataclass(frozen=True)
class DecrementDTO:
    """Output: one applied decrement as displayed on a receipt."""

    source: str  # "batch" | "stock" | "ingredient"
    target: str  # item name, or batch label
    quantity: int


@dataclass(frozen=True)
class SaleReceiptDTO:
    tenant_id: str
    items_sold: int
    decrements: list[DecrementDTO]


@dataclass(frozen=True)
class StockLineDTO:
    item_name: str
    kind: str
    on_hand: int
    low_stock: bool


@dataclass(frozen=True)
class BatchLineDTO:
    batch_id: str
    recipe_name: str
    portions_left: int
    expiry_date: str  # ISO date, or "-" when the batch never expires
    exhausted: bool
    expired: bool


@dataclass(frozen=True)
class MovementDTO:
    kind: str
    quantity: int
    note: str
    created_at: str
