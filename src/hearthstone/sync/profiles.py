"""
Remote profile store (Supabase).

Read/write contract for profiles, progress records, inventory items,
meal plans and the remote recipe catalog. Every call raises SyncError
on failure; callers decide whether to queue and retry.

Tables:
- profiles: id, name, avatar_url, partner_id, preferences
- user_progress: user_id, level, current_xp, streak, longest_streak, achievements, badges
- inventory_items: id, user_id, name, emoji, quantity, unit, location, expiry_date, category
- meal_plans: id, user_id, date, meal_type, recipe_id, notes, completed, rating
- recipes: the Recipe shape with snake_case columns
"""

import logging
from datetime import datetime
from typing import Any

from supabase import Client

from hearthstone.errors import SyncError
from hearthstone.models import (
    InventoryItem,
    MealPlan,
    Recipe,
    User,
    UserPreferences,
    UserProgress,
)
from hearthstone.storage import codec
from hearthstone.stores import xp_for_level
from hearthstone.sync.client import get_client

logger = logging.getLogger(__name__)

# Queue item type -> (table, key column)
TABLES: dict[str, tuple[str, str]] = {
    "inventory": ("inventory_items", "id"),
    "mealplan": ("meal_plans", "id"),
    "progress": ("user_progress", "user_id"),
    "profile": ("profiles", "id"),
}


# =============================================================================
# Row converters
# =============================================================================


def profile_row_to_user(row: dict[str, Any], email: str = "") -> User:
    prefs = row.get("preferences")
    return User(
        id=row["id"],
        name=row.get("name") or "",
        email=email,
        avatar_url=row.get("avatar_url"),
        preferences=UserPreferences.model_validate(prefs) if prefs else UserPreferences(),
        partner_id=row.get("partner_id"),
    )


def progress_row_to_model(row: dict[str, Any]) -> UserProgress:
    """next_level_xp is derived from level, not stored."""
    level = row.get("level") or 1
    return UserProgress(
        level=level,
        current_xp=row.get("current_xp") or 0,
        next_level_xp=xp_for_level(level),
        streak=row.get("streak") or 0,
        longest_streak=row.get("longest_streak") or 0,
        achievements=row.get("achievements") or [],
        badges=row.get("badges") or [],
    )


def progress_to_row(progress: UserProgress, user_id: str) -> dict[str, Any]:
    dumped = progress.model_dump(mode="json")
    return {
        "user_id": user_id,
        "level": progress.level,
        "current_xp": progress.current_xp,
        "streak": progress.streak,
        "longest_streak": progress.longest_streak,
        "achievements": dumped["achievements"],
        "badges": dumped["badges"],
    }


def inventory_to_row(item: InventoryItem, user_id: str) -> dict[str, Any]:
    return {
        "id": item.id,
        "user_id": user_id,
        "name": item.name,
        "emoji": item.emoji,
        "quantity": item.quantity,
        "unit": item.unit,
        "location": item.location,
        "expiry_date": item.expiry_date.isoformat() if item.expiry_date else None,
        "category": item.category,
    }


def inventory_row_to_item(row: dict[str, Any]) -> InventoryItem:
    return InventoryItem(
        id=row["id"],
        name=row["name"],
        emoji=row.get("emoji") or "📦",
        quantity=row.get("quantity") or 1,
        unit=row.get("unit") or "count",
        location=row.get("location") or "fridge",
        expiry_date=_parse_timestamp(row.get("expiry_date")),
        added_date=_parse_timestamp(row.get("created_at")) or datetime.now(),
        category=row.get("category") or "other",
    )


def meal_plan_to_row(plan: MealPlan, user_id: str) -> dict[str, Any]:
    return {
        "id": plan.id,
        "user_id": user_id,
        "date": plan.date.date().isoformat(),
        "meal_type": plan.meal_type,
        "recipe_id": plan.recipe.id if plan.recipe else None,
        "notes": plan.notes,
        "completed": plan.completed,
        "rating": plan.rating,
    }


def meal_plan_row_to_model(row: dict[str, Any], recipes: list[Recipe]) -> MealPlan:
    recipe_id = row.get("recipe_id")
    recipe = next((r for r in recipes if r.id == recipe_id), None) if recipe_id else None
    return MealPlan(
        id=row["id"],
        date=_parse_timestamp(row["date"]),
        meal_type=row.get("meal_type") or "dinner",
        recipe=recipe,
        notes=row.get("notes") or "",
        completed=bool(row.get("completed")),
        rating=row.get("rating"),
    )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return codec.parse_datetime(value)


# =============================================================================
# Store
# =============================================================================


class RemoteProfileStore:
    """
    Supabase-backed profile/progress store.

    The client is resolved lazily so constructing the store never
    touches the network.
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    def _execute(self, query: Any, action: str) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Supabase {action} failed: {e}")
            raise SyncError(f"{action} failed: {e}") from e
        return response.data or []

    # =========================================================================
    # Profiles
    # =========================================================================

    async def get_profile(self, user_id: str) -> User | None:
        rows = self._execute(
            self.client.table("profiles").select("*").eq("id", user_id).limit(1),
            "get_profile",
        )
        return profile_row_to_user(rows[0]) if rows else None

    async def update_profile(self, user_id: str, **fields: Any) -> None:
        self._execute(
            self.client.table("profiles").update(fields).eq("id", user_id),
            "update_profile",
        )

    async def update_preferences(self, user_id: str, preferences: UserPreferences) -> None:
        await self.update_profile(user_id, preferences=preferences.model_dump(mode="json"))

    # =========================================================================
    # Progress
    # =========================================================================

    async def get_progress(self, user_id: str) -> UserProgress | None:
        rows = self._execute(
            self.client.table("user_progress").select("*").eq("user_id", user_id).limit(1),
            "get_progress",
        )
        return progress_row_to_model(rows[0]) if rows else None

    async def save_progress(self, user_id: str, progress: UserProgress) -> None:
        self._execute(
            self.client.table("user_progress").upsert(progress_to_row(progress, user_id)),
            "save_progress",
        )

    # =========================================================================
    # Inventory and meal plans
    # =========================================================================

    async def get_inventory(self, user_id: str) -> list[InventoryItem]:
        rows = self._execute(
            self.client.table("inventory_items")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True),
            "get_inventory",
        )
        return [inventory_row_to_item(row) for row in rows]

    async def upsert_inventory_item(self, user_id: str, item: InventoryItem) -> None:
        self._execute(
            self.client.table("inventory_items").upsert(inventory_to_row(item, user_id)),
            "upsert_inventory_item",
        )

    async def upsert_meal_plan(self, user_id: str, plan: MealPlan) -> None:
        self._execute(
            self.client.table("meal_plans").upsert(meal_plan_to_row(plan, user_id)),
            "upsert_meal_plan",
        )

    async def fetch_recipes(self) -> list[dict[str, Any]]:
        """Raw recipe rows for RecipeCatalog.refresh()."""
        return self._execute(self.client.table("recipes").select("*"), "fetch_recipes")

    # =========================================================================
    # Generic write (used by the offline queue)
    # =========================================================================

    async def apply(self, type: str, action: str, data: dict[str, Any]) -> None:
        """Replay one queued write: insert upserts, update patches, delete removes."""
        if type not in TABLES:
            raise SyncError(f"Unknown sync type: {type}")
        table_name, key = TABLES[type]
        table = self.client.table(table_name)

        if action == "insert":
            query = table.upsert(data)
        elif action == "update":
            changes = {k: v for k, v in data.items() if k != key}
            query = table.update(changes).eq(key, data[key])
        elif action == "delete":
            query = table.delete().eq(key, data[key])
        else:
            raise SyncError(f"Unknown sync action: {action}")

        self._execute(query, f"{action} {table_name}")
