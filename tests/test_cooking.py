"""
Tests for CookingSession - the step/timer/rating state machine and amount formatting.
"""

import asyncio

import pytest

from hearthstone.engine.cooking import (
    CookingSession,
    SessionState,
    clamp_multiplier,
    format_amount,
    scale_amount,
)
from hearthstone.errors import PreconditionError
from hearthstone.stores import MealPlanStore, ProgressLedger

from conftest import make_recipe


@pytest.fixture
def meal_plans(clock):
    return MealPlanStore(clock=clock)


@pytest.fixture
def ledger(clock):
    return ProgressLedger(clock=clock)


@pytest.fixture
def session(meal_plans, ledger, clock):
    return CookingSession(meal_plans, ledger, clock=clock)


def _walk_to_rating(session):
    while session.state is SessionState.IN_PROGRESS:
        session.next_step()


class TestFormatAmount:
    """Test human-friendly amount display."""

    def test_whole_numbers(self):
        assert format_amount(2) == "2"
        assert format_amount(3.0) == "3"

    def test_common_fractions(self):
        assert format_amount(0.5) == "1/2"
        assert format_amount(1.5) == "1 1/2"
        assert format_amount(0.25) == "1/4"
        assert format_amount(2.75) == "2 3/4"
        assert format_amount(1 / 3) == "1/3"
        assert format_amount(2 / 3) == "2/3"

    def test_other_decimals(self):
        assert format_amount(1.1) == "1.1"
        assert format_amount(0.9) == "0.9"

    def test_scale_amount(self):
        assert scale_amount(1, 1.5) == "1 1/2"
        assert scale_amount(0.5, 2) == "1"

    def test_formatting_is_stable(self):
        for value in (0.5, 1.25, 2, 1.1):
            assert format_amount(value) == format_amount(value)


class TestLifecycle:
    """Test start/next/prev/exit transitions."""

    def test_start_creates_plan_and_record(self, session, meal_plans, recipe, now):
        plan = session.start(recipe)

        assert session.state is SessionState.IN_PROGRESS
        assert session.step_index == 0
        assert plan.recipe == recipe
        assert plan.date == now
        assert plan.meal_type == "dinner"
        assert meal_plans.active_session.plan_id == plan.id

    def test_last_step_waits_for_rating(self, session, recipe):
        session.start(recipe)
        session.next_step()
        session.next_step()
        assert session.is_last_step

        assert session.next_step() is SessionState.AWAITING_RATING
        assert session.state is not SessionState.COMPLETED

    def test_only_rating_completes(self, session, recipe):
        session.start(recipe)
        _walk_to_rating(session)

        with pytest.raises(PreconditionError):
            session.next_step()
        session.submit_rating(4)
        assert session.state is SessionState.COMPLETED

    def test_prev_step_at_start_is_noop(self, session, recipe):
        session.start(recipe)
        assert session.prev_step() == 0
        assert session.is_first_step

    def test_prev_keeps_completed_steps(self, session, recipe):
        session.start(recipe)
        session.next_step()
        session.prev_step()
        assert session.step_index == 0
        assert 0 in session.completed_steps

    def test_navigation_updates_record(self, session, meal_plans, recipe):
        session.start(recipe)
        session.next_step()
        assert meal_plans.active_session.current_step == 1

    def test_calls_without_recipe_raise(self, session):
        with pytest.raises(PreconditionError):
            session.next_step()
        with pytest.raises(PreconditionError):
            session.toggle_ingredient(0)
        with pytest.raises(PreconditionError):
            session.submit_rating(5)

    def test_exit_then_resume(self, session, meal_plans, recipe):
        plan = session.start(recipe)
        session.next_step()
        session.toggle_ingredient(0)
        session.set_serving_multiplier(1)
        session.exit()
        assert session.state is SessionState.EXITED

        resumed = session.start(recipe)

        assert resumed.id == plan.id
        assert session.step_index == 1
        assert session.checked_ingredients == set()
        assert session.serving_multiplier == 1.0
        assert len(meal_plans.plans) == 1

    def test_other_recipe_starts_fresh(self, session, meal_plans, recipe):
        session.start(recipe)
        session.next_step()
        session.exit()

        session.start(make_recipe(id="other"))
        assert session.step_index == 0
        assert len(meal_plans.plans) == 2

    def test_exit_requires_in_progress(self, session, recipe):
        session.start(recipe)
        _walk_to_rating(session)
        with pytest.raises(PreconditionError):
            session.exit()

    def test_recipe_without_steps(self, session):
        session.start(make_recipe(steps=[]))
        assert session.current_step is None
        assert session.next_step() is SessionState.AWAITING_RATING


class TestChecklistAndServings:
    """Test ingredient toggles and the serving multiplier."""

    def test_toggle_ingredient(self, session, recipe):
        session.start(recipe)
        assert session.toggle_ingredient(1) is True
        assert session.toggle_ingredient(1) is False
        assert session.checked_ingredients == set()

    def test_toggle_out_of_range_is_ignored(self, session, recipe):
        session.start(recipe)
        assert session.toggle_ingredient(99) is False
        assert session.checked_ingredients == set()

    def test_multiplier_clamps_at_four(self, session, recipe):
        session.start(recipe)
        for _ in range(8):
            session.set_serving_multiplier(0.5)
        assert session.serving_multiplier == 4.0

        session.set_serving_multiplier(0.5)
        assert session.serving_multiplier == 4.0

    def test_multiplier_clamps_at_half(self, session, recipe):
        session.start(recipe)
        session.set_serving_multiplier(-5)
        assert session.serving_multiplier == 0.5

    def test_scaled_views(self, session, recipe):
        session.start(recipe)
        session.set_serving_multiplier(0.5)
        assert session.scaled_servings == 3
        assert [amount for _, amount in session.scaled_ingredients()] == ["1 1/2", "1 1/2"]

        session.reset_servings()
        assert session.serving_multiplier == 1.0

    def test_clamp_multiplier_snaps(self):
        assert clamp_multiplier(1.3) == 1.5
        assert clamp_multiplier(10) == 4.0
        assert clamp_multiplier(0) == 0.5


class TestTimer:
    """Test the countdown timer driven by tick()."""

    def test_start_uses_step_duration(self, session, recipe):
        session.start(recipe)
        assert session.start_timer() is True
        assert session.timer_remaining == 5 * 60
        assert session.timer_running

    def test_untimed_step_has_no_timer(self, session, recipe):
        session.start(recipe)
        session.next_step()
        session.next_step()
        assert session.start_timer() is False
        assert session.timer_remaining is None

    def test_tick_counts_down_and_fires_callback(self, meal_plans, ledger, clock):
        fired = []
        session = CookingSession(meal_plans, ledger, clock=clock, on_timer_complete=fired.append)
        session.start(make_recipe(steps=[("Rest", 1)]))
        session.start_timer()

        results = [session.tick() for _ in range(60)]

        assert results[-1] is True
        assert not any(results[:-1])
        assert fired == [0]
        assert not session.timer_running
        assert session.tick() is False

    def test_pause_and_resume_keeps_remaining(self, session, recipe):
        session.start(recipe)
        session.start_timer()
        for _ in range(10):
            session.tick()
        session.pause_timer()
        assert session.tick() is False
        assert session.timer_remaining == 290

        session.start_timer()
        assert session.timer_remaining == 290

    def test_reset_restores_duration(self, session, recipe):
        session.start(recipe)
        session.start_timer()
        session.tick()
        session.reset_timer()
        assert session.timer_remaining == 300
        assert not session.timer_running

    def test_step_change_clears_timer(self, session, recipe):
        session.start(recipe)
        session.start_timer()
        session.next_step()
        assert session.timer_remaining is None
        assert not session.timer_running

    def test_background_task_is_cancelled_on_exit(self, session, recipe):
        async def run():
            session.start(recipe)
            session.start_timer()
            task = session._timer_task
            assert task is not None
            session.exit()
            await asyncio.sleep(0)
            return task

        task = asyncio.run(run())
        assert task.cancelled()


class TestCompletion:
    """Test rating, XP and streak on completion."""

    def test_submit_rating_awards_xp(self, session, meal_plans, ledger, recipe):
        session.start(recipe)
        _walk_to_rating(session)
        result = session.submit_rating(5, notes="great")

        assert result.xp_awarded == 150
        assert result.streak == 1
        assert ledger.progress.current_xp == 150
        plan = meal_plans.get(result.plan_id)
        assert plan.completed
        assert plan.rating == 5
        assert plan.notes == "great"
        assert meal_plans.active_session is None

    def test_rating_is_clamped(self, session, recipe):
        session.start(recipe)
        _walk_to_rating(session)
        assert session.submit_rating(9).rating == 5

    def test_skip_rating_grants_base_xp(self, session, meal_plans, recipe):
        session.start(recipe)
        _walk_to_rating(session)
        result = session.skip_rating()

        assert result.rating is None
        assert result.xp_awarded == 100
        assert meal_plans.get(result.plan_id).rating is None

    def test_completion_clears_recommendation(self, session, meal_plans, recipe):
        from hearthstone.models import MealRecommendation

        meal_plans.set_today_recommendation(
            MealRecommendation(recipe=recipe, score=0.8, reasoning="Ready in 30 minutes")
        )
        plan = session.start(recipe)
        assert plan.notes == "Ready in 30 minutes"

        _walk_to_rating(session)
        session.skip_rating()
        assert meal_plans.today_recommendation is None

    def test_cannot_complete_twice(self, session, recipe):
        session.start(recipe)
        _walk_to_rating(session)
        session.skip_rating()
        with pytest.raises(PreconditionError):
            session.skip_rating()
