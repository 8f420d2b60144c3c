"""
Inventory Ledger.

Holds the household's fridge/freezer/pantry items and answers the
"what expires soon" query the recommendation scorer depends on.

User input is forgiving: an empty name drops the add, a bad quantity
becomes 1 and an unparseable expiry becomes None.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any

from pydantic import ValidationError

from hearthstone.ids import generate_id
from hearthstone.models import FoodCategory, InventoryItem, StorageLocation
from hearthstone.storage import INVENTORY_KEY, codec
from hearthstone.stores.base import Clock, PersistentStore

logger = logging.getLogger(__name__)


def _coerce_quantity(value: Any) -> int:
    """Positive integer quantity, 1 when the input is unusable."""
    try:
        quantity = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1
    return quantity if quantity > 0 else 1


def _coerce_expiry(value: Any) -> datetime | None:
    """Naive expiry datetime, None when the input is unusable."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str) and value.strip():
        try:
            return codec.parse_datetime(value.strip())
        except ValueError:
            logger.debug(f"Ignoring unparseable expiry date: {value!r}")
    return None


class InventoryLedger(PersistentStore):
    """Owning store for InventoryItem records."""

    STORAGE_KEY = INVENTORY_KEY

    def __init__(self, items: list[InventoryItem] | None = None, clock: Clock | None = None):
        super().__init__(clock)
        self.items: list[InventoryItem] = list(items or [])

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(
        self,
        name: str,
        quantity: Any = 1,
        unit: str = "count",
        location: StorageLocation = "fridge",
        category: FoodCategory = "other",
        expiry_date: datetime | str | None = None,
        emoji: str | None = None,
    ) -> InventoryItem | None:
        """
        Add an item, assigning its id and added timestamp.

        Returns:
            The stored item, or None when the name is empty
        """
        name = (name or "").strip()
        if not name:
            logger.debug("Ignoring inventory add with empty name")
            return None

        fields = {
            "id": generate_id("inv"),
            "name": name,
            "emoji": emoji or "📦",
            "quantity": _coerce_quantity(quantity),
            "unit": unit,
            "location": location,
            "category": category,
            "expiry_date": _coerce_expiry(expiry_date),
            "added_date": self.now(),
        }
        try:
            item = InventoryItem(**fields)
        except ValidationError:
            # Unknown unit/location/category values fall back to the model defaults
            for key in ("unit", "location", "category"):
                fields.pop(key)
            item = InventoryItem(**fields)

        self.items.append(item)
        return item

    def update(self, item_id: str, **changes: Any) -> InventoryItem | None:
        """Apply field changes to one item. Unknown ids are ignored."""
        for i, item in enumerate(self.items):
            if item.id != item_id:
                continue
            if "quantity" in changes:
                changes["quantity"] = _coerce_quantity(changes["quantity"])
            if "expiry_date" in changes:
                changes["expiry_date"] = _coerce_expiry(changes["expiry_date"])
            changes.pop("id", None)
            updated = InventoryItem.model_validate({**item.model_dump(), **changes})
            self.items[i] = updated
            return updated
        return None

    def remove(self, item_id: str) -> None:
        """Remove an item. Removing an unknown id is a no-op."""
        self.items = [item for item in self.items if item.id != item_id]

    def clear(self) -> None:
        self.items = []

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, item_id: str) -> InventoryItem | None:
        return next((item for item in self.items if item.id == item_id), None)

    def expiring_within(self, days: float, now: datetime | None = None) -> list[InventoryItem]:
        """
        Items expiring on or before now + days, soonest first.

        Items without an expiry date are never included.
        """
        cutoff = (now or self.now()) + timedelta(days=days)
        expiring = [
            item for item in self.items
            if item.expiry_date is not None and item.expiry_date <= cutoff
        ]
        return sorted(expiring, key=lambda item: item.expiry_date)

    def by_location(self, location: StorageLocation) -> list[InventoryItem]:
        return [item for item in self.items if item.location == location]

    def by_category(self, category: FoodCategory) -> list[InventoryItem]:
        return [item for item in self.items if item.category == category]

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_state(self) -> dict[str, Any]:
        return {"items": [item.model_dump() for item in self.items]}

    def load_state(self, state: dict[str, Any]) -> None:
        self.items = [
            InventoryItem.model_validate({**raw, "expiry_date": _coerce_expiry(raw.get("expiry_date"))})
            for raw in state.get("items", [])
        ]
