"""
Cooking Session state machine.

States:
- NOT_STARTED: no recipe bound
- IN_PROGRESS: stepping through the recipe
- AWAITING_RATING: past the last step, waiting for a rating or a skip
- COMPLETED: progression awarded, session record cleared
- EXITED: left mid-recipe; start() with the same recipe resumes

Only the step index survives an exit. Timers, the ingredient checklist
and the serving multiplier reset on resume.

The step timer counts down once per second via tick(). When an event
loop is running, start_timer() also schedules a background task that
calls tick(); every path that changes step, resets or exits cancels it.
"""

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from pydantic import BaseModel

from hearthstone.errors import PreconditionError
from hearthstone.models import MealPlan, Recipe, RecipeIngredient, RecipeStep
from hearthstone.stores import MealPlanStore, ProgressLedger, cooking_xp
from hearthstone.stores.base import Clock

logger = logging.getLogger(__name__)

MIN_MULTIPLIER = 0.5
MAX_MULTIPLIER = 4.0
MULTIPLIER_STEP = 0.5
FRACTION_TOLERANCE = 0.05

# Ordered so the first match within tolerance wins
FRACTIONS: list[tuple[float, str]] = [
    (0.25, "1/4"),
    (1 / 3, "1/3"),
    (0.5, "1/2"),
    (2 / 3, "2/3"),
    (0.75, "3/4"),
]


class SessionState(Enum):
    """Cooking session lifecycle states."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    AWAITING_RATING = "awaiting_rating"
    COMPLETED = "completed"
    EXITED = "exited"


class CompletionResult(BaseModel):
    """What a finished session awarded."""

    plan_id: str
    recipe_id: str
    rating: int | None = None
    xp_awarded: int
    levels_gained: int
    streak: int


def format_amount(value: float) -> str:
    """
    Display an ingredient amount.

    Whole numbers print as integers, common fractions as "1 1/2",
    anything else with one decimal.
    """
    if float(value).is_integer():
        return str(int(value))

    whole = int(value // 1)
    decimal = value - whole
    for target, label in FRACTIONS:
        if abs(decimal - target) < FRACTION_TOLERANCE:
            return f"{whole} {label}" if whole > 0 else label
    return f"{value:.1f}"


def scale_amount(amount: float, multiplier: float) -> str:
    return format_amount(amount * multiplier)


def clamp_multiplier(value: float) -> float:
    """Clamp to [0.5, 4.0] and snap to 0.5 steps."""
    snapped = round(value / MULTIPLIER_STEP) * MULTIPLIER_STEP
    return max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, snapped))


class CookingSession:
    """
    One guided cooking run.

    Creates the meal-plan entry on start and, on completion, marks it
    cooked, grants XP and extends the streak before clearing the
    persisted session record.
    """

    def __init__(
        self,
        meal_plans: MealPlanStore,
        progress: ProgressLedger,
        clock: Clock | None = None,
        on_timer_complete: Callable[[int], None] | None = None,
    ):
        self.meal_plans = meal_plans
        self.progress = progress
        self._clock = clock or datetime.now
        self.on_timer_complete = on_timer_complete

        self.state = SessionState.NOT_STARTED
        self.recipe: Recipe | None = None
        self.plan_id: str | None = None
        self.step_index = 0
        self.checked_ingredients: set[int] = set()
        self.completed_steps: set[int] = set()
        self.serving_multiplier = 1.0
        self.timer_remaining: int | None = None
        self.timer_running = False
        self._timer_task: asyncio.Task | None = None

    # =========================================================================
    # Derived views
    # =========================================================================

    @property
    def current_step(self) -> RecipeStep | None:
        if self.recipe is None or not self.recipe.steps:
            return None
        return self.recipe.steps[self.step_index]

    @property
    def is_first_step(self) -> bool:
        return self.step_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.recipe is not None and self.step_index >= len(self.recipe.steps) - 1

    @property
    def scaled_servings(self) -> float:
        return self.recipe.servings * self.serving_multiplier if self.recipe else 0

    def scaled_ingredients(self) -> list[tuple[RecipeIngredient, str]]:
        """Each ingredient with its amount formatted for the current multiplier."""
        if self.recipe is None:
            return []
        return [
            (ing, scale_amount(ing.amount, self.serving_multiplier))
            for ing in self.recipe.ingredients
        ]

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, recipe: Recipe) -> MealPlan:
        """
        Bind a recipe and begin at step 0.

        If the persisted session record points at this recipe and its plan
        is still open, the saved step index and plan are reused instead.
        """
        self._cancel_timer()
        self.recipe = recipe
        self.checked_ingredients = set()
        self.completed_steps = set()
        self.serving_multiplier = 1.0
        self.timer_remaining = None
        self.timer_running = False

        plan = self._resumable_plan(recipe)
        if plan is not None:
            record = self.meal_plans.active_session
            self.step_index = min(record.current_step, max(len(recipe.steps) - 1, 0))
            logger.info(f"Resuming {recipe.name} at step {self.step_index + 1}")
        else:
            rec = self.meal_plans.today_recommendation
            notes = rec.reasoning if rec and rec.recipe.id == recipe.id else ""
            plan = self.meal_plans.add(recipe, date=self._clock(), meal_type="dinner", notes=notes)
            self.meal_plans.start_cooking_session(plan.id, recipe.id)
            self.step_index = 0
            logger.info(f"Started cooking {recipe.name}")

        self.plan_id = plan.id
        self.state = SessionState.IN_PROGRESS
        return plan

    def _resumable_plan(self, recipe: Recipe) -> MealPlan | None:
        record = self.meal_plans.active_session
        if record is None or record.recipe_id != recipe.id:
            return None
        plan = self.meal_plans.get(record.plan_id)
        if plan is None or plan.completed:
            return None
        return plan

    def exit(self) -> None:
        """Leave mid-recipe. The step index stays persisted for resume."""
        self._require(SessionState.IN_PROGRESS)
        self._cancel_timer()
        self.timer_remaining = None
        self.timer_running = False
        self.meal_plans.update_cooking_progress(self.step_index)
        self.state = SessionState.EXITED

    # =========================================================================
    # Checklist and servings
    # =========================================================================

    def toggle_ingredient(self, index: int) -> bool:
        """Flip an ingredient's checked flag. Returns the new flag."""
        if self.recipe is None:
            raise PreconditionError("No recipe bound to the cooking session")
        if not 0 <= index < len(self.recipe.ingredients):
            return False
        if index in self.checked_ingredients:
            self.checked_ingredients.discard(index)
            return False
        self.checked_ingredients.add(index)
        return True

    def set_serving_multiplier(self, delta: float) -> float:
        """Adjust the multiplier by delta, clamped to [0.5, 4.0]."""
        self.serving_multiplier = clamp_multiplier(self.serving_multiplier + delta)
        return self.serving_multiplier

    def reset_servings(self) -> None:
        self.serving_multiplier = 1.0

    # =========================================================================
    # Navigation
    # =========================================================================

    def next_step(self) -> SessionState:
        """Complete the current step; past the last one, wait for a rating."""
        self._require(SessionState.IN_PROGRESS)
        self.completed_steps.add(self.step_index)
        self._clear_timer()

        if self.is_last_step:
            self.state = SessionState.AWAITING_RATING
        else:
            self.step_index += 1
            self.meal_plans.update_cooking_progress(self.step_index)
        return self.state

    def prev_step(self) -> int:
        """Go back one step. Completed steps stay completed."""
        self._require(SessionState.IN_PROGRESS)
        if self.step_index == 0:
            return 0
        self._clear_timer()
        self.step_index -= 1
        self.meal_plans.update_cooking_progress(self.step_index)
        return self.step_index

    # =========================================================================
    # Timer
    # =========================================================================

    def start_timer(self) -> bool:
        """
        Start (or resume) the current step's timer.

        Returns:
            False when the step has no duration
        """
        self._require(SessionState.IN_PROGRESS)
        step = self.current_step
        if step is None or not step.duration:
            return False

        if not self.timer_remaining:
            self.timer_remaining = step.duration * 60
        self.timer_running = True
        self._schedule_timer()
        return True

    def pause_timer(self) -> None:
        self._cancel_timer()
        self.timer_running = False

    def reset_timer(self) -> None:
        """Stop and restore the full step duration."""
        self._cancel_timer()
        self.timer_running = False
        step = self.current_step
        self.timer_remaining = step.duration * 60 if step and step.duration else None

    def tick(self) -> bool:
        """
        Advance the timer by one second.

        Returns:
            True when this tick finished the timer
        """
        if not self.timer_running or not self.timer_remaining:
            return False

        self.timer_remaining -= 1
        if self.timer_remaining > 0:
            return False

        self.timer_running = False
        logger.info(f"Step {self.step_index + 1} timer finished")
        if self.on_timer_complete is not None:
            self.on_timer_complete(self.step_index)
        return True

    def _schedule_timer(self) -> None:
        self._cancel_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._timer_task = loop.create_task(self._run_timer())

    async def _run_timer(self) -> None:
        while self.timer_running:
            await asyncio.sleep(1)
            if self.tick():
                break

    def _cancel_timer(self) -> None:
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

    def _clear_timer(self) -> None:
        self._cancel_timer()
        self.timer_remaining = None
        self.timer_running = False

    # =========================================================================
    # Completion
    # =========================================================================

    def submit_rating(self, rating: int, notes: str | None = None) -> CompletionResult:
        """Finish with a 1-5 rating (out-of-range values are clamped)."""
        self._require(SessionState.AWAITING_RATING)
        return self._complete(max(1, min(5, int(rating))), notes)

    def skip_rating(self) -> CompletionResult:
        """Finish without a rating; only base XP is granted."""
        self._require(SessionState.AWAITING_RATING)
        return self._complete(None, None)

    def _complete(self, rating: int | None, notes: str | None) -> CompletionResult:
        recipe = self.recipe
        self.state = SessionState.COMPLETED

        self.meal_plans.mark_completed(self.plan_id, rating=rating, notes=notes)
        xp = cooking_xp(recipe.difficulty, rating)
        levels = self.progress.add_xp(xp)
        streak = self.progress.update_streak(True)

        self.meal_plans.end_cooking_session()
        self.meal_plans.set_today_recommendation(None)
        logger.info(f"Completed {recipe.name}: +{xp} XP, streak {streak}")

        return CompletionResult(
            plan_id=self.plan_id,
            recipe_id=recipe.id,
            rating=rating,
            xp_awarded=xp,
            levels_gained=levels,
            streak=streak,
        )

    def _require(self, state: SessionState) -> None:
        if self.recipe is None:
            raise PreconditionError("No recipe bound to the cooking session")
        if self.state is not state:
            raise PreconditionError(
                f"Cooking session is {self.state.value}, expected {state.value}"
            )
