"""
Tests for ProgressLedger - XP curve, streaks, achievements, badges and challenges.
"""

import asyncio
from datetime import datetime, timedelta

import pytest

from hearthstone.models import Badge, Challenge, ChallengeReward
from hearthstone.stores import (
    ProgressLedger,
    cooking_xp,
    find_all_newly_unlocked,
    find_newly_unlocked,
    xp_for_level,
)
from hearthstone.stores.progress import challenge_expiry


@pytest.fixture
def ledger(clock):
    return ProgressLedger(clock=clock)


def _challenge(id="c1", target=3, expires_at=None, **kwargs):
    return Challenge(
        id=id,
        title=kwargs.pop("title", "Test Challenge"),
        target=target,
        reward=ChallengeReward(xp=kwargs.pop("xp", 50)),
        expires_at=expires_at or datetime(2026, 12, 31),
        **kwargs,
    )


class TestXpCurve:
    """Test level thresholds and XP awards."""

    def test_xp_for_level(self):
        assert xp_for_level(1) == 1000
        assert xp_for_level(2) == 1200
        assert xp_for_level(3) == 1440

    def test_cooking_xp(self):
        assert cooking_xp("easy") == 50
        assert cooking_xp("medium") == 100
        assert cooking_xp("hard") == 150
        assert cooking_xp("hard", rating=4) == 190

    def test_multi_level_grant(self, ledger):
        gained = ledger.add_xp(2500)
        p = ledger.progress

        assert gained == 2
        assert p.level == 3
        assert p.current_xp == 300
        assert p.next_level_xp == 1440

    def test_exact_threshold_levels_up(self, ledger):
        assert ledger.add_xp(1000) == 1
        assert ledger.progress.current_xp == 0
        assert ledger.progress.next_level_xp == 1200

    def test_xp_invariant_holds_after_many_grants(self, ledger):
        for amount in (10, 999, 1, 5000, 0, 333, 12000):
            ledger.add_xp(amount)
            p = ledger.progress
            assert 0 <= p.current_xp < p.next_level_xp
            assert p.next_level_xp == xp_for_level(p.level)

    def test_negative_xp_is_ignored(self, ledger):
        ledger.add_xp(200)
        assert ledger.add_xp(-500) == 0
        assert ledger.progress.current_xp == 200


class TestStreak:
    """Test streak bookkeeping."""

    def test_extend_and_reset(self, ledger):
        assert ledger.update_streak(True) == 1
        assert ledger.update_streak(True) == 2
        assert ledger.update_streak(False) == 0
        assert ledger.progress.longest_streak == 2

    def test_longest_never_below_current(self, ledger):
        for cooked in (True, True, True, False, True, True, True, True):
            ledger.update_streak(cooked)
            assert ledger.progress.longest_streak >= ledger.progress.streak
        assert ledger.progress.longest_streak == 4

    def test_two_completions_same_day_count_twice(self, ledger):
        # No calendar check: each completion extends the streak
        ledger.update_streak(True)
        ledger.update_streak(True)
        assert ledger.progress.streak == 2


class TestAchievements:
    """Test achievement progress and unlocks."""

    def test_initial_achievements(self, ledger):
        achievements = ledger.progress.achievements
        assert len(achievements) == 17
        assert all(a.progress == 0 and not a.is_unlocked for a in achievements)

    def test_reaching_target_unlocks(self, ledger, now):
        a = ledger.set_achievement_progress("consistent_cook", 3)
        assert a.progress == 3
        assert a.unlocked_at == now

    def test_progress_is_clamped(self, ledger):
        assert ledger.set_achievement_progress("home_cook", 40).progress == 10
        assert ledger.set_achievement_progress("seasoned_chef", -3).progress == 0

    def test_unlock_is_permanent(self, ledger, now):
        ledger.unlock_achievement("first_meal")
        again = ledger.set_achievement_progress("first_meal", 0)

        assert again.progress == again.target
        assert again.unlocked_at == now

    def test_unlock_keeps_original_time(self, now):
        times = iter([now, now + timedelta(days=3)])
        ledger = ProgressLedger(clock=lambda: next(times))
        first = ledger.unlock_achievement("first_meal").unlocked_at
        assert ledger.unlock_achievement("first_meal").unlocked_at == first

    def test_increment(self, ledger):
        ledger.increment_achievement("couple_cooking")
        ledger.increment_achievement("couple_cooking", by=2)
        assert ledger.get_achievement("couple_cooking").progress == 3

    def test_unknown_achievement(self, ledger):
        assert ledger.unlock_achievement("not_real") is None
        assert ledger.increment_achievement("not_real") is None
        assert ledger.set_achievement_progress("not_real", 1) is None

    def test_find_newly_unlocked(self, ledger):
        before = list(ledger.progress.achievements)
        ledger.unlock_achievement("partner_up")
        found = find_newly_unlocked(before, ledger.progress.achievements)
        assert found.id == "partner_up"
        assert find_newly_unlocked(ledger.progress.achievements, ledger.progress.achievements) is None

    def test_find_all_newly_unlocked_keeps_definition_order(self, ledger):
        ledger.unlock_achievement("first_meal")
        before = list(ledger.progress.achievements)
        ledger.unlock_achievement("five_star_meal")
        ledger.unlock_achievement("partner_up")

        found = find_all_newly_unlocked(before, ledger.progress.achievements)

        assert [a.id for a in found] == ["partner_up", "five_star_meal"]
        assert find_newly_unlocked(before, ledger.progress.achievements).id == "partner_up"

    def test_unlocked_achievements(self, ledger):
        ledger.unlock_achievement("five_star_meal")
        assert [a.id for a in ledger.unlocked_achievements()] == ["five_star_meal"]


class TestBadges:
    """Test badge awards."""

    def test_award_is_deduplicated(self, ledger, now):
        badge = Badge(id="dice", name="Dicer", earned_at=now)
        ledger.award_badge(badge)
        ledger.award_badge(badge)
        assert len(ledger.progress.badges) == 1


class TestChallenges:
    """Test challenge creation, progress and expiry."""

    def test_expiry_rules(self, now):
        # now is Wednesday 2026-10-14
        assert challenge_expiry("daily", now).date() == now.date()
        assert challenge_expiry("daily", now).hour == 23
        assert challenge_expiry("weekly", now).date() == datetime(2026, 10, 18).date()
        assert challenge_expiry("special", now).date() == datetime(2026, 10, 31).date()

    def test_weekly_from_sunday_rolls_a_week(self):
        sunday = datetime(2026, 10, 18, 9, 0)
        assert challenge_expiry("weekly", sunday).date() == datetime(2026, 10, 25).date()

    def test_special_in_december(self):
        assert challenge_expiry("special", datetime(2026, 12, 5)).date() == datetime(2026, 12, 31).date()

    def test_beginner_set(self, ledger):
        challenges = ledger.initialize_challenges("beginner")
        titles = [c.title for c in challenges]
        assert titles[:4] == ["Your First Meal", "Learn to Dice", "Breakfast Champion", "Kitchen Apprentice"]
        assert len(titles) == 7

    def test_initialize_runs_once(self, ledger):
        first = ledger.initialize_challenges("intermediate")
        assert len(first) == 3
        assert ledger.initialize_challenges("beginner") == first

    def test_progress_is_clamped_and_monotonic(self, ledger):
        ledger.add_challenge(_challenge(target=3))
        assert ledger.update_challenge_progress("c1", 2).progress == 2
        assert ledger.update_challenge_progress("c1", -1).progress == 2
        assert ledger.update_challenge_progress("c1", 5).progress == 3
        assert ledger.update_challenge_progress("missing", 1) is None

    def test_active_hides_expired(self, ledger, now):
        ledger.add_challenge(_challenge(id="old", expires_at=now - timedelta(minutes=1)))
        ledger.add_challenge(_challenge(id="new", expires_at=now + timedelta(days=1)))

        assert [c.id for c in ledger.active_challenges()] == ["new"]
        assert len(ledger.challenges) == 2

    def test_remove_challenge(self, ledger):
        ledger.add_challenge(_challenge())
        ledger.remove_challenge("c1")
        assert ledger.challenges == []


class TestResetAndPersistence:
    """Test reset() and save/load."""

    def test_reset(self, ledger):
        ledger.add_xp(5000)
        ledger.update_streak(True)
        ledger.initialize_challenges("beginner")
        ledger.reset()

        assert ledger.progress.level == 1
        assert ledger.progress.streak == 0
        assert ledger.challenges == []
        assert not ledger.challenges_initialized
        assert len(ledger.progress.achievements) == 17

    def test_round_trip(self, ledger, clock, kv):
        ledger.add_xp(1500)
        ledger.unlock_achievement("first_meal")
        ledger.initialize_challenges("beginner")
        asyncio.run(ledger.save(kv))

        restored = ProgressLedger(clock=clock)
        asyncio.run(restored.load(kv))

        assert restored.progress == ledger.progress
        assert restored.challenges == ledger.challenges
        assert restored.challenges_initialized
