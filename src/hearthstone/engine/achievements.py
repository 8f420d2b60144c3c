"""
Achievement orchestration.

The ProgressLedger only stores progress; this tracker decides which
achievements and challenges an event moves:

- meal completed: meal count, streak length, distinct cuisines,
  partner meals, five-star ratings, level
- partner linked: partner_up

Challenges whose progress reaches target pay out their reward once.
"""

import logging
from datetime import datetime

from hearthstone.data import get_achievements_by_category
from hearthstone.models import Achievement, Challenge, MealPlan
from hearthstone.stores import MealPlanStore, ProgressLedger, find_all_newly_unlocked

logger = logging.getLogger(__name__)

COUPLE_ACHIEVEMENTS = ("couple_cooking", "kitchen_duo")
FIVE_STAR_ACHIEVEMENTS = ("five_star_meal", "perfectionist")
LEVEL_ACHIEVEMENTS = ("level_10", "level_25")


def distinct_cuisines(plans: list[MealPlan]) -> set[str]:
    return {
        p.recipe.cuisine.lower()
        for p in plans
        if p.completed and p.recipe is not None and p.recipe.cuisine
    }


class AchievementTracker:
    """Applies engine events to the progression ledger."""

    def __init__(self, progress: ProgressLedger, meal_plans: MealPlanStore):
        self.progress = progress
        self.meal_plans = meal_plans

    def on_meal_completed(self, plan_id: str, with_partner: bool = False) -> list[Achievement]:
        """
        Update every achievement a completed meal can move.

        Returns:
            Achievements unlocked by this event, in definition order
        """
        before = list(self.progress.progress.achievements)
        completed = self.meal_plans.completed_plans()
        p = self.progress.progress

        for d in get_achievements_by_category("cooking"):
            self.progress.set_achievement_progress(d.id, len(completed))
        for d in get_achievements_by_category("streak"):
            self.progress.set_achievement_progress(d.id, p.streak)
        cuisines = distinct_cuisines(completed)
        for d in get_achievements_by_category("exploration"):
            self.progress.set_achievement_progress(d.id, len(cuisines))

        if with_partner:
            for achievement_id in COUPLE_ACHIEVEMENTS:
                self.progress.increment_achievement(achievement_id)

        five_stars = sum(1 for plan in completed if plan.rating == 5)
        for achievement_id in FIVE_STAR_ACHIEVEMENTS:
            self.progress.set_achievement_progress(achievement_id, five_stars)

        plan = self.meal_plans.get(plan_id)
        if plan is not None:
            self._advance_challenges(plan, len(cuisines))

        # After challenge rewards, which can level up
        for achievement_id in LEVEL_ACHIEVEMENTS:
            self.progress.set_achievement_progress(achievement_id, self.progress.progress.level)

        return self._unlocked_since(before)

    def on_partner_linked(self) -> list[Achievement]:
        before = list(self.progress.progress.achievements)
        self.progress.unlock_achievement("partner_up")
        return self._unlocked_since(before)

    def _unlocked_since(self, before: list[Achievement]) -> list[Achievement]:
        unlocked = find_all_newly_unlocked(before, self.progress.progress.achievements)
        for a in unlocked:
            logger.info(f"New achievement: {a.emoji} {a.name}")
        return unlocked

    # =========================================================================
    # Challenges
    # =========================================================================

    def _advance_challenges(self, plan: MealPlan, cuisine_count: int) -> None:
        now = self.progress.now()
        for challenge in self.progress.active_challenges(now):
            delta = self._challenge_delta(challenge, plan, cuisine_count, now)
            if not delta or challenge.is_complete:
                continue
            updated = self.progress.update_challenge_progress(challenge.id, delta)
            if updated is not None and updated.is_complete:
                self._pay_reward(updated, now)

    @staticmethod
    def _challenge_delta(
        challenge: Challenge,
        plan: MealPlan,
        cuisine_count: int,
        now: datetime,
    ) -> int:
        recipe = plan.recipe
        title = challenge.title
        if title in ("Your First Meal", "Daily Cook"):
            return 1
        if title == "Kitchen Apprentice":
            return 1 if recipe is not None and recipe.difficulty == "easy" else 0
        if title == "Breakfast Champion":
            return 1 if plan.meal_type == "breakfast" else 0
        if title == "Weekend Chef":
            return 1 if now.weekday() in (5, 6) else 0
        if title == "World Traveler":
            return max(0, cuisine_count - challenge.progress)
        if title == "Learn to Dice":
            steps = recipe.steps if recipe is not None else []
            return 1 if any("dice" in s.instruction.lower() for s in steps) else 0
        return 0

    def _pay_reward(self, challenge: Challenge, now: datetime) -> None:
        logger.info(f"Challenge complete: {challenge.title} (+{challenge.reward.xp} XP)")
        self.progress.add_xp(challenge.reward.xp)
        if challenge.reward.badge is not None:
            self.progress.award_badge(challenge.reward.badge.model_copy(update={"earned_at": now}))
