"""
Hearthstone - Persistence.

Async key-value stores with date-aware JSON encoding.
"""

from hearthstone.storage.base import KeyValueStore
from hearthstone.storage.file import JsonFileStore
from hearthstone.storage.memory import MemoryStore

# Storage keys, one per owning store
INVENTORY_KEY = "hearthstone-inventory"
MEAL_PLAN_KEY = "hearthstone-mealplan"
PROGRESS_KEY = "hearthstone-progress"
PREP_KEY = "hearthstone-prep"
USER_KEY = "hearthstone-user"
SYNC_QUEUE_KEY = "hearthstone-sync-queue"
RECIPES_CACHE_KEY = "hearthstone-recipes-cache"

__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "INVENTORY_KEY",
    "MEAL_PLAN_KEY",
    "PROGRESS_KEY",
    "PREP_KEY",
    "USER_KEY",
    "SYNC_QUEUE_KEY",
    "RECIPES_CACHE_KEY",
]
