"""
Recommendation Scorer.

Picks tonight's recipe from the catalog using inventory expiry data,
the household's time budget and the day of the week.

Algorithm:
1. Items expiring within the window (default 5 days)
2. Time budget: weekend_max_time on Sat/Sun, weeknight_max_time otherwise
3. Candidates = recipes within budget, or the whole catalog if none fit
4. Uniform random pick, never repeating the previous pick when there is
   more than one candidate
5. Reasoning from up to two applicable reasons
6. Matching expiring items / missing ingredients / savings

Missing ingredients are only checked against the expiring items, not
the full inventory.
"""

import logging
import random
from datetime import datetime

from hearthstone.errors import PreconditionError
from hearthstone.models import InventoryItem, MealRecommendation, Recipe, UserPreferences
from hearthstone.stores import InventoryLedger, RecipeCatalog
from hearthstone.stores.user import normalize_preferences

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_WINDOW_DAYS = 5
QUICK_RECIPE_MINUTES = 30
MAX_MISSING_INGREDIENTS = 3
SAVINGS_PER_ITEM = 3
MAX_REASONS = 2
REASON_SEPARATOR = " + "
GENERIC_REASON = "A tasty pick for tonight"


def names_match(a: str, b: str) -> bool:
    """Case-insensitive substring match in either direction."""
    a, b = a.lower().strip(), b.lower().strip()
    if not a or not b:
        return False
    return a in b or b in a


def is_weekend(now: datetime) -> bool:
    return now.weekday() in (5, 6)


def time_budget(preferences: UserPreferences, now: datetime) -> int:
    prefs = normalize_preferences(preferences)
    return prefs.weekend_max_time if is_weekend(now) else prefs.weeknight_max_time


def build_reasoning(recipe: Recipe, expiring: list[InventoryItem], now: datetime) -> str:
    """Join the first two applicable reasons, in priority order."""
    reasons: list[str] = []

    used = [
        item.name for item in expiring
        if any(names_match(item.name, ing.name) for ing in recipe.ingredients)
    ]
    if used:
        reasons.append(f"Uses {' and '.join(used[:2])} before it expires")

    if recipe.difficulty == "easy":
        reasons.append("Quick and easy to make")
    elif recipe.difficulty == "hard" and is_weekend(now):
        reasons.append("A fun weekend challenge")

    if recipe.total_time <= QUICK_RECIPE_MINUTES:
        reasons.append(f"Ready in {recipe.total_time} minutes")

    if recipe.cuisine:
        reasons.append(f"A chance to explore {recipe.cuisine} cuisine")

    if not reasons:
        return GENERIC_REASON
    return REASON_SEPARATOR.join(reasons[:MAX_REASONS])


class RecommendationScorer:
    """
    Stateful scorer: remembers the last recipe it picked.

    Inject a seeded random.Random for reproducible picks.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        expiry_window_days: int = DEFAULT_EXPIRY_WINDOW_DAYS,
    ):
        self.rng = rng or random.Random()
        self.expiry_window_days = expiry_window_days
        self._last_recipe_id: str | None = None

    @property
    def last_recipe_id(self) -> str | None:
        return self._last_recipe_id

    @last_recipe_id.setter
    def last_recipe_id(self, recipe_id: str | None) -> None:
        self._last_recipe_id = recipe_id

    def recommend(
        self,
        inventory: InventoryLedger,
        catalog: RecipeCatalog,
        preferences: UserPreferences,
        now: datetime,
    ) -> MealRecommendation:
        if len(catalog) == 0:
            raise PreconditionError("Cannot recommend from an empty recipe catalog")

        expiring = inventory.expiring_within(self.expiry_window_days, now=now)

        budget = time_budget(preferences, now)
        candidates = catalog.within_time(budget)
        if not candidates:
            logger.debug(f"No recipe fits {budget} minutes, using the full catalog")
            candidates = list(catalog)

        recipe = self._pick(candidates)
        required = recipe.required_ingredients

        matching = [
            item for item in expiring
            if any(names_match(item.name, ing.name) for ing in required)
        ]
        missing = [
            ing.name for ing in required
            if not any(names_match(item.name, ing.name) for item in expiring)
        ][:MAX_MISSING_INGREDIENTS]

        recommendation = MealRecommendation(
            recipe=recipe,
            score=0.75 + self.rng.random() * 0.2,
            reasoning=build_reasoning(recipe, expiring, now),
            expiring_ingredients=matching,
            missing_ingredients=missing,
            estimated_savings=SAVINGS_PER_ITEM * len(matching),
        )
        logger.info(f"Recommended {recipe.name} (score {recommendation.score:.2f})")
        return recommendation

    def reject_and_get_next(
        self,
        inventory: InventoryLedger,
        catalog: RecipeCatalog,
        preferences: UserPreferences,
        now: datetime,
        reason: str | None = None,
    ) -> MealRecommendation:
        """Re-run recommend(). The reason is logged only; scoring ignores it."""
        logger.info(f"Recommendation rejected: {reason or 'no reason given'}")
        return self.recommend(inventory, catalog, preferences, now)

    def _pick(self, candidates: list[Recipe]) -> Recipe:
        index = self.rng.randrange(len(candidates))
        if len({c.id for c in candidates}) > 1:
            while candidates[index].id == self._last_recipe_id:
                index = self.rng.randrange(len(candidates))
        recipe = candidates[index]
        self._last_recipe_id = recipe.id
        return recipe
