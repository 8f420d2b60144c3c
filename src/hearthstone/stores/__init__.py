"""
Hearthstone - Owning stores.

Each store owns one slice of state and snapshots it to a KeyValueStore.
"""

from hearthstone.stores.base import PersistentStore
from hearthstone.stores.catalog import RecipeCatalog
from hearthstone.stores.inventory import InventoryLedger
from hearthstone.stores.meal_plans import MealPlanStore
from hearthstone.stores.prep import PrepTaskStore
from hearthstone.stores.progress import (
    ProgressLedger,
    cooking_xp,
    find_all_newly_unlocked,
    find_newly_unlocked,
    xp_for_level,
)
from hearthstone.stores.user import UserStore

__all__ = [
    "PersistentStore",
    "RecipeCatalog",
    "InventoryLedger",
    "MealPlanStore",
    "PrepTaskStore",
    "ProgressLedger",
    "cooking_xp",
    "find_all_newly_unlocked",
    "find_newly_unlocked",
    "xp_for_level",
    "UserStore",
]
