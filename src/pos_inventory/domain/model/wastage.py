"""Wastage records: portions or units written off outside of a sale."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class WastageReason(Enum):
    LEFTOVER = "leftover"
    DISCARD = "discard"
    COURTESY = "courtesy"
    ADJUSTMENT = "adjustment"


class WastageSource(Enum):
    BATCH = "batch"
    ITEM = "item"


@dataclass(frozen=True)
class WastageRecord:
    """``quantity`` is what was actually removed, which can be less than
    what was reported when the pool held fewer portions or units."""

    tenant_id: str
    source: WastageSource
    source_id: str
    quantity: int
    reason: WastageReason
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
