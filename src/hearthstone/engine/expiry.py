"""
Expiry grouping for inventory items.

Status bands by whole days remaining (rounded up):
- urgent: 3 or fewer (already expired counts as urgent)
- warning: 4-7
- upcoming: 8-14
- safe: more than 14
- none: no expiry date
"""

import math
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from hearthstone.models import InventoryItem

ExpiryStatus = Literal["urgent", "warning", "upcoming", "safe", "none"]

_SECONDS_PER_DAY = 24 * 60 * 60


def days_until_expiry(item: InventoryItem, now: datetime) -> int | None:
    if item.expiry_date is None:
        return None
    return math.ceil((item.expiry_date - now).total_seconds() / _SECONDS_PER_DAY)


def expiry_status(item: InventoryItem, now: datetime) -> ExpiryStatus:
    days = days_until_expiry(item, now)
    if days is None:
        return "none"
    if days <= 3:
        return "urgent"
    if days <= 7:
        return "warning"
    if days <= 14:
        return "upcoming"
    return "safe"


class ExpiryGroups(BaseModel):
    """Items bucketed by expiry status, each bucket soonest first."""

    urgent: list[InventoryItem] = Field(default_factory=list)
    warning: list[InventoryItem] = Field(default_factory=list)
    upcoming: list[InventoryItem] = Field(default_factory=list)

    @property
    def urgent_count(self) -> int:
        return len(self.urgent)

    @property
    def warning_count(self) -> int:
        return len(self.warning)

    @property
    def has_urgent_items(self) -> bool:
        return bool(self.urgent)


def group_by_expiry(items: list[InventoryItem], now: datetime) -> ExpiryGroups:
    groups: dict[str, list[InventoryItem]] = {"urgent": [], "warning": [], "upcoming": []}
    for item in items:
        status = expiry_status(item, now)
        if status in groups:
            groups[status].append(item)

    for bucket in groups.values():
        bucket.sort(key=lambda item: days_until_expiry(item, now))
    return ExpiryGroups(**groups)
