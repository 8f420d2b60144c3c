"""
Tests for MealPlanStore and UserStore.
"""

import asyncio
from datetime import timedelta

import pytest

from hearthstone.models import MealRecommendation, User, UserPreferences
from hearthstone.stores import MealPlanStore, UserStore

from conftest import make_recipe


@pytest.fixture
def meal_plans(clock):
    return MealPlanStore(clock=clock)


@pytest.fixture
def users(clock):
    return UserStore(clock=clock)


class TestMealPlans:
    """Test plan CRUD and date queries."""

    def test_add_defaults(self, meal_plans, recipe, now):
        plan = meal_plans.add(recipe)
        assert plan.id.startswith("plan_")
        assert plan.date == now
        assert plan.meal_type == "dinner"
        assert not plan.completed

    def test_mark_completed(self, meal_plans, recipe):
        plan = meal_plans.add(recipe, notes="first try")
        done = meal_plans.mark_completed(plan.id, rating=4)

        assert done.completed
        assert done.rating == 4
        assert done.notes == "first try"

    def test_mark_completed_without_rating_clears_it(self, meal_plans, recipe):
        plan = meal_plans.add(recipe)
        meal_plans.update(plan.id, rating=3)
        assert meal_plans.mark_completed(plan.id).rating is None

    def test_mark_completed_unknown(self, meal_plans):
        assert meal_plans.mark_completed("plan_missing") is None

    def test_remove(self, meal_plans, recipe):
        plan = meal_plans.add(recipe)
        meal_plans.remove(plan.id)
        assert meal_plans.get(plan.id) is None

    def test_date_queries(self, meal_plans, recipe, now):
        today = meal_plans.add(recipe, date=now)
        later = meal_plans.add(recipe, date=now + timedelta(days=6, hours=5))
        meal_plans.add(recipe, date=now + timedelta(days=7))

        assert meal_plans.plans_for_date(now) == [today]
        assert meal_plans.plans_for_week(now) == [today, later]

    def test_completed_plans(self, meal_plans, recipe):
        a = meal_plans.add(recipe)
        meal_plans.add(recipe)
        meal_plans.mark_completed(a.id)
        assert [p.id for p in meal_plans.completed_plans()] == [a.id]


class TestSessionRecord:
    """Test the persisted cooking-session slice."""

    def test_start_update_end(self, meal_plans, now):
        record = meal_plans.start_cooking_session("plan_1", "recipe-1")
        assert record.started_at == now
        assert record.current_step == 0

        meal_plans.update_cooking_progress(3)
        assert meal_plans.active_session.current_step == 3

        meal_plans.end_cooking_session()
        assert meal_plans.active_session is None
        meal_plans.update_cooking_progress(4)
        assert meal_plans.active_session is None

    def test_round_trip(self, meal_plans, clock, kv, recipe):
        plan = meal_plans.add(recipe)
        meal_plans.start_cooking_session(plan.id, recipe.id)
        meal_plans.set_today_recommendation(
            MealRecommendation(recipe=recipe, score=0.9, reasoning="Ready in 30 minutes")
        )
        asyncio.run(meal_plans.save(kv))

        restored = MealPlanStore(clock=clock)
        asyncio.run(restored.load(kv))

        assert restored.plans == meal_plans.plans
        assert restored.active_session == meal_plans.active_session
        assert restored.today_recommendation.recipe.id == recipe.id


class TestUserStore:
    """Test profile, preferences and stats."""

    def test_defaults_without_user(self, users):
        assert not users.is_authenticated
        assert users.preferences == UserPreferences()
        assert users.update_preferences(chef_mode=True) is None

    def test_complete_onboarding(self, users):
        user = users.complete_onboarding("  Sam ", cooking_skill_level="beginner")

        assert users.onboarding_complete
        assert users.is_authenticated
        assert user.name == "Sam"
        assert user.preferences.cooking_skill_level == "beginner"
        assert user.id.startswith("user_")

    def test_blank_name_gets_default(self, users):
        assert users.complete_onboarding("   ").name == "Chef"

    def test_preferences_are_normalized(self, users):
        users.complete_onboarding("Sam")
        prefs = users.update_preferences(weeknight_max_time=0, weekend_max_time=-5)

        assert prefs.weeknight_max_time == 45
        assert prefs.weekend_max_time == 90

    def test_partner_sets_partner_id(self, users):
        users.complete_onboarding("Sam")
        users.set_partner(User(id="user_alex", name="Alex"))
        assert users.user.partner_id == "user_alex"

        users.set_partner(None)
        assert users.user.partner_id is None

    def test_stats_updates(self, users):
        users.update_monthly_stats(meals_cooked=3, cuisines_explored=["Thai"])
        users.update_weekly_stats(meals_planned=5)

        assert users.monthly_stats.meals_cooked == 3
        assert users.weekly_stats.meals_planned == 5

    def test_logout(self, users):
        users.complete_onboarding("Sam")
        users.update_monthly_stats(meals_cooked=3)
        users.logout()

        assert users.user is None
        assert not users.onboarding_complete
        assert users.monthly_stats.meals_cooked == 0

    def test_round_trip(self, users, clock, kv):
        users.complete_onboarding("Sam", favorite_cuisines=["Thai"])
        users.set_partner(User(id="user_alex", name="Alex"))
        asyncio.run(users.save(kv))

        restored = UserStore(clock=clock)
        asyncio.run(restored.load(kv))

        assert restored.user == users.user
        assert restored.partner == users.partner
        assert restored.onboarding_complete
