"""
Tests for RecommendationScorer - budget filtering, no-repeat sampling and reasoning.
"""

import random
from datetime import timedelta

import pytest

from hearthstone.engine.recommend import (
    GENERIC_REASON,
    RecommendationScorer,
    build_reasoning,
    names_match,
    time_budget,
)
from hearthstone.errors import PreconditionError
from hearthstone.models import UserPreferences
from hearthstone.stores import InventoryLedger, RecipeCatalog

from conftest import make_recipe


@pytest.fixture
def inventory(clock):
    return InventoryLedger(clock=clock)


class TestNameMatching:
    """Test the loose ingredient name match."""

    def test_substring_either_direction(self):
        assert names_match("Chicken Breast", "chicken")
        assert names_match("chicken", "boneless chicken breast")

    def test_no_match(self):
        assert not names_match("beef", "chicken")
        assert not names_match("", "chicken")


class TestTimeBudget:
    """Test weeknight/weekend budget selection."""

    def test_weeknight(self, now):
        assert time_budget(UserPreferences(), now) == 45

    def test_weekend(self, weekend_now):
        assert time_budget(UserPreferences(), weekend_now) == 90

    def test_non_positive_budget_uses_default(self, now):
        prefs = UserPreferences(weeknight_max_time=0)
        assert time_budget(prefs, now) == 45


class TestRecommend:
    """Test recommend() end to end."""

    def test_expiring_chicken_is_matched(self, inventory, now, rng):
        item = inventory.add("Chicken Breast", expiry_date=now + timedelta(days=1))
        catalog = RecipeCatalog([
            make_recipe(id="curry", ingredients=["chicken breast", "onion"], prep_time=10, cook_time=20),
        ])

        rec = RecommendationScorer(rng=rng).recommend(inventory, catalog, UserPreferences(), now)

        assert rec.expiring_ingredients == [item]
        assert "expires" in rec.reasoning
        assert "Chicken Breast" in rec.reasoning
        assert rec.estimated_savings == 3

    def test_missing_only_checks_expiring_items(self, inventory, now, rng):
        # Onion is in stock but not expiring, so it still counts as missing
        inventory.add("onion")
        inventory.add("Chicken Breast", expiry_date=now + timedelta(days=1))
        catalog = RecipeCatalog([make_recipe(id="curry", ingredients=["chicken breast", "onion"])])

        rec = RecommendationScorer(rng=rng).recommend(inventory, catalog, UserPreferences(), now)

        assert rec.missing_ingredients == ["onion"]

    def test_missing_is_capped_and_skips_optional(self, inventory, now, rng):
        catalog = RecipeCatalog([
            make_recipe(ingredients=["a", "b", "c", "d", "e"], optional=["a"]),
        ])
        rec = RecommendationScorer(rng=rng).recommend(inventory, catalog, UserPreferences(), now)

        assert rec.missing_ingredients == ["b", "c", "d"]

    def test_items_outside_window_do_not_match(self, inventory, now, rng):
        inventory.add("chicken", expiry_date=now + timedelta(days=10))
        catalog = RecipeCatalog([make_recipe(ingredients=["chicken"])])

        rec = RecommendationScorer(rng=rng).recommend(inventory, catalog, UserPreferences(), now)

        assert rec.expiring_ingredients == []
        assert rec.estimated_savings == 0

    def test_score_range(self, inventory, small_catalog, now, rng):
        scorer = RecommendationScorer(rng=rng)
        for _ in range(20):
            rec = scorer.recommend(inventory, small_catalog, UserPreferences(), now)
            assert 0.75 <= rec.score <= 0.95

    def test_budget_excludes_long_recipes(self, inventory, small_catalog, now, rng):
        scorer = RecommendationScorer(rng=rng)
        picks = {scorer.recommend(inventory, small_catalog, UserPreferences(), now).recipe.id
                 for _ in range(30)}
        assert "r-long" not in picks
        assert picks == {"r-quick", "r-mid"}

    def test_falls_back_to_whole_catalog(self, inventory, now, rng):
        catalog = RecipeCatalog([make_recipe(id="slow", prep_time=60, cook_time=120)])
        rec = RecommendationScorer(rng=rng).recommend(inventory, catalog, UserPreferences(), now)
        assert rec.recipe.id == "slow"

    def test_weekend_allows_longer_recipes(self, inventory, now, weekend_now, rng):
        catalog = RecipeCatalog([make_recipe(id="sixty", prep_time=20, cook_time=40)])
        scorer = RecommendationScorer(rng=rng)
        assert scorer.recommend(inventory, catalog, UserPreferences(), weekend_now).recipe.id == "sixty"

    def test_empty_catalog_raises(self, inventory, now, rng):
        with pytest.raises(PreconditionError):
            RecommendationScorer(rng=rng).recommend(inventory, RecipeCatalog([]), UserPreferences(), now)


class TestNoRepeat:
    """Test the exclude-previous-pick sampling."""

    def test_consecutive_picks_differ(self, inventory, small_catalog, now, rng):
        scorer = RecommendationScorer(rng=rng)
        previous = None
        for _ in range(25):
            rec = scorer.recommend(inventory, small_catalog, UserPreferences(), now)
            assert rec.recipe.id != previous
            previous = rec.recipe.id

    def test_single_candidate_can_repeat(self, inventory, now, rng):
        catalog = RecipeCatalog([make_recipe(id="only")])
        scorer = RecommendationScorer(rng=rng)
        first = scorer.recommend(inventory, catalog, UserPreferences(), now)
        second = scorer.reject_and_get_next(inventory, catalog, UserPreferences(), now, reason="meh")
        assert first.recipe.id == second.recipe.id == "only"

    def test_reject_returns_different_recipe(self, inventory, small_catalog, now, rng):
        scorer = RecommendationScorer(rng=rng)
        first = scorer.recommend(inventory, small_catalog, UserPreferences(), now)
        second = scorer.reject_and_get_next(
            inventory, small_catalog, UserPreferences(), now, reason="too spicy"
        )
        assert second.recipe.id != first.recipe.id

    def test_last_recipe_id_is_restorable(self, inventory, small_catalog, now):
        scorer = RecommendationScorer(rng=random.Random(1))
        scorer.last_recipe_id = "r-quick"
        rec = scorer.recommend(inventory, small_catalog, UserPreferences(), now)
        assert rec.recipe.id == "r-mid"

    def test_seeded_scorers_agree(self, inventory, small_catalog, now):
        a = RecommendationScorer(rng=random.Random(99))
        b = RecommendationScorer(rng=random.Random(99))
        for _ in range(5):
            ra = a.recommend(inventory, small_catalog, UserPreferences(), now)
            rb = b.recommend(inventory, small_catalog, UserPreferences(), now)
            assert ra.recipe.id == rb.recipe.id
            assert ra.score == rb.score


class TestReasoning:
    """Test reason selection and joining."""

    def test_easy_and_quick(self, now):
        recipe = make_recipe(difficulty="easy", prep_time=5, cook_time=10)
        assert build_reasoning(recipe, [], now) == "Quick and easy to make + Ready in 15 minutes"

    def test_hard_on_weekend(self, weekend_now):
        recipe = make_recipe(difficulty="hard", prep_time=30, cook_time=180, cuisine="French")
        assert build_reasoning(recipe, [], weekend_now) == (
            "A fun weekend challenge + A chance to explore French cuisine"
        )

    def test_expiry_reason_comes_first(self, inventory, now):
        milk = inventory.add("milk", expiry_date=now + timedelta(days=1))
        recipe = make_recipe(ingredients=["milk"], difficulty="easy")
        assert build_reasoning(recipe, [milk], now) == (
            "Uses milk before it expires + Quick and easy to make"
        )

    def test_at_most_two_reasons(self, now):
        recipe = make_recipe(difficulty="easy", prep_time=5, cook_time=5, cuisine="Thai")
        assert build_reasoning(recipe, [], now).count(" + ") == 1

    def test_generic_reason(self, now):
        recipe = make_recipe(difficulty="medium", prep_time=30, cook_time=30, cuisine="")
        assert build_reasoning(recipe, [], now) == GENERIC_REASON
