"""
User store.

Local profile, linked partner, preferences and the monthly/weekly
stats shown on the dashboard.
"""

import logging
from typing import Any

from hearthstone.ids import generate_id
from hearthstone.models import MonthlyStats, User, UserPreferences, WeeklyStats
from hearthstone.storage import USER_KEY
from hearthstone.stores.base import Clock, PersistentStore

logger = logging.getLogger(__name__)

DEFAULT_WEEKNIGHT_MAX_TIME = 45
DEFAULT_WEEKEND_MAX_TIME = 90


def normalize_preferences(preferences: UserPreferences) -> UserPreferences:
    """Replace non-positive time budgets with the defaults."""
    updates = {}
    if preferences.weeknight_max_time <= 0:
        updates["weeknight_max_time"] = DEFAULT_WEEKNIGHT_MAX_TIME
    if preferences.weekend_max_time <= 0:
        updates["weekend_max_time"] = DEFAULT_WEEKEND_MAX_TIME
    return preferences.model_copy(update=updates) if updates else preferences


class UserStore(PersistentStore):
    """Owning store for the local user and partner."""

    STORAGE_KEY = USER_KEY

    def __init__(self, user: User | None = None, clock: Clock | None = None):
        super().__init__(clock)
        self.user = user
        self.partner: User | None = None
        self.monthly_stats = MonthlyStats()
        self.weekly_stats = WeeklyStats()
        self.onboarding_complete = user is not None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def preferences(self) -> UserPreferences:
        """Current preferences, defaults when nobody is signed in."""
        if self.user is None:
            return UserPreferences()
        return normalize_preferences(self.user.preferences)

    def set_user(self, user: User | None) -> None:
        self.user = user

    def set_partner(self, partner: User | None) -> None:
        self.partner = partner
        if self.user is not None:
            self.user = self.user.model_copy(
                update={"partner_id": partner.id if partner else None}
            )

    def update_preferences(self, **changes: Any) -> UserPreferences | None:
        """Merge preference changes. No-op without a user."""
        if self.user is None:
            return None
        merged = UserPreferences.model_validate(
            {**self.user.preferences.model_dump(), **changes}
        )
        self.user = self.user.model_copy(update={"preferences": normalize_preferences(merged)})
        return self.user.preferences

    def update_monthly_stats(self, **changes: Any) -> MonthlyStats:
        self.monthly_stats = self.monthly_stats.model_copy(update=changes)
        return self.monthly_stats

    def update_weekly_stats(self, **changes: Any) -> WeeklyStats:
        self.weekly_stats = self.weekly_stats.model_copy(update=changes)
        return self.weekly_stats

    def complete_onboarding(self, name: str, **preferences: Any) -> User:
        """Create the local user with default preferences plus the given overrides."""
        prefs = normalize_preferences(UserPreferences(**preferences))
        self.user = User(id=generate_id("user"), name=name.strip() or "Chef", preferences=prefs)
        self.onboarding_complete = True
        logger.info(f"Onboarding complete for {self.user.name}")
        return self.user

    def logout(self) -> None:
        self.user = None
        self.partner = None
        self.onboarding_complete = False
        self.monthly_stats = MonthlyStats()
        self.weekly_stats = WeeklyStats()

    def to_state(self) -> dict[str, Any]:
        return {
            "user": self.user.model_dump() if self.user else None,
            "partner": self.partner.model_dump() if self.partner else None,
            "monthly_stats": self.monthly_stats.model_dump(),
            "weekly_stats": self.weekly_stats.model_dump(),
            "onboarding_complete": self.onboarding_complete,
        }

    def load_state(self, state: dict[str, Any]) -> None:
        user = state.get("user")
        partner = state.get("partner")
        self.user = User.model_validate(user) if user else None
        self.partner = User.model_validate(partner) if partner else None
        self.monthly_stats = MonthlyStats.model_validate(state.get("monthly_stats", {}))
        self.weekly_stats = WeeklyStats.model_validate(state.get("weekly_stats", {}))
        self.onboarding_complete = bool(state.get("onboarding_complete", self.user is not None))
