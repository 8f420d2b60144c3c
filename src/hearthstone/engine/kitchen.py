"""
Kitchen service container.

Built once per process with a key-value store, an optional remote
profile store, a random source and a clock. Owns every store and the
engine objects that work on them.

Completion order:
1. session -> COMPLETED (plan marked, XP granted, streak extended)
2. achievements/challenges updated
3. progress, meal plans and stats persisted in one set_many
4. remote sync pushed (failures queued, never raised)
"""

import logging
import random
from datetime import datetime

from pydantic import BaseModel

from hearthstone.engine.achievements import AchievementTracker
from hearthstone.engine.cooking import CompletionResult, CookingSession
from hearthstone.engine.prep import regenerate_prep
from hearthstone.engine.recommend import DEFAULT_EXPIRY_WINDOW_DAYS, RecommendationScorer
from hearthstone.errors import PreconditionError
from hearthstone.models import Achievement, MealRecommendation, Recipe, User
from hearthstone.storage import KeyValueStore
from hearthstone.stores import (
    InventoryLedger,
    MealPlanStore,
    PrepTaskStore,
    ProgressLedger,
    RecipeCatalog,
    UserStore,
)
from hearthstone.stores.base import Clock
from hearthstone.sync import PartnerLink, RemoteProfileStore, SyncQueue
from hearthstone.sync.profiles import meal_plan_to_row, progress_to_row

logger = logging.getLogger(__name__)


class CookingOutcome(BaseModel):
    """Result of complete_cooking()."""

    result: CompletionResult
    unlocked: list[Achievement]


class Kitchen:
    """Wires the stores, scorer, cooking session and progression together."""

    def __init__(
        self,
        kv: KeyValueStore,
        remote: RemoteProfileStore | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
        catalog: RecipeCatalog | None = None,
        expiry_window_days: int = DEFAULT_EXPIRY_WINDOW_DAYS,
    ):
        self.kv = kv
        self.remote = remote
        self.clock = clock or datetime.now

        self.inventory = InventoryLedger(clock=self.clock)
        self.catalog = catalog or RecipeCatalog()
        self.meal_plans = MealPlanStore(clock=self.clock)
        self.progress = ProgressLedger(clock=self.clock)
        self.prep = PrepTaskStore(clock=self.clock)
        self.user = UserStore(clock=self.clock)

        self.scorer = RecommendationScorer(rng=rng, expiry_window_days=expiry_window_days)
        self.tracker = AchievementTracker(self.progress, self.meal_plans)
        self.session = CookingSession(self.meal_plans, self.progress, clock=self.clock)
        self.sync_queue = SyncQueue(kv, remote) if remote is not None else None

    @property
    def _stores(self):
        return (self.inventory, self.meal_plans, self.progress, self.prep, self.user)

    # =========================================================================
    # Persistence
    # =========================================================================

    async def load(self) -> None:
        for store in self._stores:
            await store.load(self.kv)
        # Keep the no-repeat rule across restarts
        rec = self.meal_plans.today_recommendation
        if rec is not None:
            self.scorer.last_recipe_id = rec.recipe.id

    async def save(self) -> None:
        await self.kv.set_many({s.STORAGE_KEY: s.to_state() for s in self._stores})

    # =========================================================================
    # Recommendation
    # =========================================================================

    def recommend(self) -> MealRecommendation:
        rec = self.scorer.recommend(
            self.inventory, self.catalog, self.user.preferences, self.clock()
        )
        self.meal_plans.set_today_recommendation(rec)
        return rec

    def reject_and_get_next(self, reason: str | None = None) -> MealRecommendation:
        rec = self.scorer.reject_and_get_next(
            self.inventory, self.catalog, self.user.preferences, self.clock(), reason=reason
        )
        self.meal_plans.set_today_recommendation(rec)
        return rec

    # =========================================================================
    # Cooking
    # =========================================================================

    def start_cooking(self, recipe: Recipe | str) -> CookingSession:
        """Start (or resume) a session for a recipe or recipe id."""
        if isinstance(recipe, str):
            found = self.catalog.get(recipe)
            if found is None:
                raise PreconditionError(f"Unknown recipe: {recipe}")
            recipe = found
        self.session.start(recipe)
        return self.session

    async def complete_cooking(
        self,
        rating: int | None = None,
        notes: str | None = None,
        with_partner: bool | None = None,
    ) -> CookingOutcome:
        """
        Finish the session waiting for a rating.

        A None rating skips the rating. with_partner defaults to whether
        the user has a linked partner.
        """
        if rating is None:
            result = self.session.skip_rating()
        else:
            result = self.session.submit_rating(rating, notes)

        if with_partner is None:
            with_partner = bool(self.user.user and self.user.user.partner_id)
        unlocked = self.tracker.on_meal_completed(result.plan_id, with_partner=with_partner)
        self._record_stats(result, with_partner)

        await self.kv.set_many({
            self.progress.STORAGE_KEY: self.progress.to_state(),
            self.meal_plans.STORAGE_KEY: self.meal_plans.to_state(),
            self.user.STORAGE_KEY: self.user.to_state(),
        })
        await self._sync_completion(result)
        return CookingOutcome(result=result, unlocked=unlocked)

    def _record_stats(self, result: CompletionResult, with_partner: bool) -> None:
        monthly = self.user.monthly_stats
        recipe = self.catalog.get(result.recipe_id) or self.session.recipe
        cuisines = list(monthly.cuisines_explored)
        if recipe and recipe.cuisine and recipe.cuisine not in cuisines:
            cuisines.append(recipe.cuisine)

        rated = [p.rating for p in self.meal_plans.completed_plans() if p.rating is not None]
        self.user.update_monthly_stats(
            meals_cooked=monthly.meals_cooked + 1,
            total_meals=monthly.total_meals + 1,
            couples_meals=monthly.couples_meals + (1 if with_partner else 0),
            cuisines_explored=cuisines,
            average_rating=round(sum(rated) / len(rated), 2) if rated else 0,
        )
        weekly = self.user.weekly_stats
        self.user.update_weekly_stats(meals_cooked=weekly.meals_cooked + 1)

    async def _sync_completion(self, result: CompletionResult) -> None:
        user = self.user.user
        if self.sync_queue is None or user is None:
            return
        plan = self.meal_plans.get(result.plan_id)
        if plan is not None:
            await self.sync_queue.push("mealplan", "insert", meal_plan_to_row(plan, user.id))
        await self.sync_queue.push(
            "progress", "insert", progress_to_row(self.progress.progress, user.id)
        )

    # =========================================================================
    # Partner
    # =========================================================================

    def link_partner(self, link: PartnerLink) -> list[Achievement]:
        """Record an accepted partner invite locally and unlock partner_up."""
        self.user.set_partner(User(id=link.partner_id, name=link.partner_name))
        return self.tracker.on_partner_linked()

    def unlink_partner(self) -> None:
        self.user.set_partner(None)

    # =========================================================================
    # Prep
    # =========================================================================

    def regenerate_prep(self) -> bool:
        return regenerate_prep(self.prep, self.meal_plans.plans, self.clock())
