"""
Meal Plan store.

Owns planned/cooked meals, today's recommendation slot and the
persisted slice of the active cooking session (used for resume).
"""

import logging
from datetime import datetime, timedelta
from typing import Any

from hearthstone.ids import generate_id
from hearthstone.models import (
    CookingSessionRecord,
    MealPlan,
    MealRecommendation,
    MealType,
    Recipe,
)
from hearthstone.storage import MEAL_PLAN_KEY
from hearthstone.stores.base import Clock, PersistentStore

logger = logging.getLogger(__name__)


class MealPlanStore(PersistentStore):
    """Owning store for MealPlan records."""

    STORAGE_KEY = MEAL_PLAN_KEY

    def __init__(self, plans: list[MealPlan] | None = None, clock: Clock | None = None):
        super().__init__(clock)
        self.plans: list[MealPlan] = list(plans or [])
        self.today_recommendation: MealRecommendation | None = None
        self.active_session: CookingSessionRecord | None = None

    # =========================================================================
    # Plans
    # =========================================================================

    def set_plans(self, plans: list[MealPlan]) -> None:
        self.plans = list(plans)

    def add(
        self,
        recipe: Recipe | None,
        date: datetime | None = None,
        meal_type: MealType = "dinner",
        notes: str = "",
    ) -> MealPlan:
        plan = MealPlan(
            id=generate_id("plan"),
            date=date or self.now(),
            meal_type=meal_type,
            recipe=recipe,
            notes=notes,
        )
        self.plans.append(plan)
        return plan

    def get(self, plan_id: str) -> MealPlan | None:
        return next((p for p in self.plans if p.id == plan_id), None)

    def update(self, plan_id: str, **changes: Any) -> MealPlan | None:
        for i, plan in enumerate(self.plans):
            if plan.id == plan_id:
                changes.pop("id", None)
                self.plans[i] = plan.model_copy(update=changes)
                return self.plans[i]
        return None

    def remove(self, plan_id: str) -> None:
        self.plans = [p for p in self.plans if p.id != plan_id]

    def mark_completed(
        self,
        plan_id: str,
        rating: int | None = None,
        notes: str | None = None,
    ) -> MealPlan | None:
        """Mark a plan cooked. A missing rating clears any earlier one."""
        plan = self.get(plan_id)
        if plan is None:
            logger.warning(f"mark_completed: unknown plan {plan_id}")
            return None
        return self.update(
            plan_id,
            completed=True,
            rating=rating,
            notes=plan.notes if notes is None else notes,
        )

    def plans_for_date(self, day: datetime) -> list[MealPlan]:
        return [p for p in self.plans if p.date.date() == day.date()]

    def plans_for_week(self, start: datetime) -> list[MealPlan]:
        """Plans in the 7 days beginning at midnight of start."""
        begin = start.replace(hour=0, minute=0, second=0, microsecond=0)
        end = begin + timedelta(days=7)
        return [p for p in self.plans if begin <= p.date < end]

    def completed_plans(self) -> list[MealPlan]:
        return [p for p in self.plans if p.completed]

    # =========================================================================
    # Recommendation slot
    # =========================================================================

    def set_today_recommendation(self, recommendation: MealRecommendation | None) -> None:
        self.today_recommendation = recommendation

    # =========================================================================
    # Cooking session record
    # =========================================================================

    def start_cooking_session(self, plan_id: str, recipe_id: str) -> CookingSessionRecord:
        self.active_session = CookingSessionRecord(
            plan_id=plan_id,
            recipe_id=recipe_id,
            current_step=0,
            started_at=self.now(),
        )
        return self.active_session

    def update_cooking_progress(self, step: int) -> None:
        if self.active_session is not None:
            self.active_session = self.active_session.model_copy(update={"current_step": step})

    def end_cooking_session(self) -> None:
        self.active_session = None

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_state(self) -> dict[str, Any]:
        return {
            "plans": [p.model_dump() for p in self.plans],
            "today_recommendation": (
                self.today_recommendation.model_dump() if self.today_recommendation else None
            ),
            "active_session": self.active_session.model_dump() if self.active_session else None,
        }

    def load_state(self, state: dict[str, Any]) -> None:
        self.plans = [MealPlan.model_validate(raw) for raw in state.get("plans", [])]
        rec = state.get("today_recommendation")
        self.today_recommendation = MealRecommendation.model_validate(rec) if rec else None
        session = state.get("active_session")
        self.active_session = CookingSessionRecord.model_validate(session) if session else None
