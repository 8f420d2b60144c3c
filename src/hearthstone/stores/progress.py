"""
Progression Ledger.

Converts cooking into XP, levels, streaks, achievements, badges and
challenge progress.

Invariants kept by every mutation:
- 0 <= current_xp < next_level_xp after each XP grant
- longest_streak >= streak
- an achievement's unlocked_at is never cleared and its progress never
  drops below target once unlocked

The ledger does not scan definitions on its own; AchievementTracker
decides which achievement an event moves.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Any

from hearthstone.data import (
    BEGINNER_CHALLENGES,
    STANDARD_CHALLENGES,
    ChallengeTemplate,
    initialize_achievements,
)
from hearthstone.ids import generate_id
from hearthstone.models import (
    Achievement,
    Badge,
    Challenge,
    ChallengeReward,
    Difficulty,
    SkillLevel,
    UserProgress,
)
from hearthstone.storage import PROGRESS_KEY
from hearthstone.stores.base import Clock, PersistentStore

logger = logging.getLogger(__name__)

BASE_XP: dict[str, int] = {"easy": 50, "medium": 100, "hard": 150}
RATING_XP = 10


def xp_for_level(level: int) -> int:
    """XP needed to clear a level: floor(1000 * 1.2^(level-1))."""
    return math.floor(1000 * 1.2 ** (level - 1))


def cooking_xp(difficulty: Difficulty, rating: int | None = None) -> int:
    """XP for completing a recipe, with a bonus of rating * 10 when rated."""
    xp = BASE_XP.get(difficulty, BASE_XP["medium"])
    if rating is not None:
        xp += rating * RATING_XP
    return xp


def find_all_newly_unlocked(
    before: list[Achievement],
    after: list[Achievement],
) -> list[Achievement]:
    """Achievements unlocked in `after` that were still locked in `before`, in `after` order."""
    was_unlocked = {a.id for a in before if a.is_unlocked}
    return [a for a in after if a.is_unlocked and a.id not in was_unlocked]


def find_newly_unlocked(
    before: list[Achievement],
    after: list[Achievement],
) -> Achievement | None:
    """First achievement unlocked in `after` that was still locked in `before`."""
    return next(iter(find_all_newly_unlocked(before, after)), None)


def _end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999000)


def challenge_expiry(kind: str, now: datetime) -> datetime:
    """
    Expiry for a new challenge.

    daily: end of today. weekly: end of the next Sunday.
    special: end of the current month.
    """
    if kind == "daily":
        return _end_of_day(now)
    if kind == "weekly":
        # Sunday rolls over to the following Sunday
        return _end_of_day(now + timedelta(days=7 - (now.weekday() + 1) % 7))
    first_of_next = (now.replace(day=28) + timedelta(days=4)).replace(day=1)
    return _end_of_day(first_of_next - timedelta(days=1))


class ProgressLedger(PersistentStore):
    """Owning store for UserProgress and challenges."""

    STORAGE_KEY = PROGRESS_KEY

    def __init__(self, progress: UserProgress | None = None, clock: Clock | None = None):
        super().__init__(clock)
        self.progress = progress or self._initial_progress()
        self.challenges: list[Challenge] = []
        self.challenges_initialized = False

    @staticmethod
    def _initial_progress() -> UserProgress:
        return UserProgress(achievements=initialize_achievements())

    # =========================================================================
    # XP and levels
    # =========================================================================

    def add_xp(self, amount: int) -> int:
        """
        Grant XP, levelling up as many times as the amount covers.

        Returns:
            Number of levels gained
        """
        p = self.progress
        current_xp = p.current_xp + max(0, int(amount))
        level = p.level
        next_level_xp = p.next_level_xp
        gained = 0

        while current_xp >= next_level_xp:
            current_xp -= next_level_xp
            level += 1
            gained += 1
            next_level_xp = xp_for_level(level)

        self.progress = p.model_copy(
            update={"level": level, "current_xp": current_xp, "next_level_xp": next_level_xp}
        )
        if gained:
            logger.info(f"Level up: {p.level} -> {level}")
        return gained

    # =========================================================================
    # Streak
    # =========================================================================

    def update_streak(self, cooked_today: bool) -> int:
        """
        Extend the streak by one, or reset it to 0.

        Called once per cooking completion. The caller decides whether
        "today" had a cooking event; no calendar tracking happens here.
        """
        streak = self.progress.streak + 1 if cooked_today else 0
        longest = max(streak, self.progress.longest_streak)
        self.progress = self.progress.model_copy(
            update={"streak": streak, "longest_streak": longest}
        )
        return streak

    # =========================================================================
    # Achievements
    # =========================================================================

    def get_achievement(self, achievement_id: str) -> Achievement | None:
        return next((a for a in self.progress.achievements if a.id == achievement_id), None)

    def unlock_achievement(self, achievement_id: str) -> Achievement | None:
        """Force an achievement to its target. An existing unlock time is kept."""
        achievement = self.get_achievement(achievement_id)
        if achievement is None:
            logger.warning(f"Unknown achievement: {achievement_id}")
            return None
        return self.set_achievement_progress(achievement_id, achievement.target)

    def increment_achievement(self, achievement_id: str, by: int = 1) -> Achievement | None:
        achievement = self.get_achievement(achievement_id)
        if achievement is None:
            logger.warning(f"Unknown achievement: {achievement_id}")
            return None
        return self.set_achievement_progress(achievement_id, achievement.progress + by)

    def set_achievement_progress(self, achievement_id: str, value: int) -> Achievement | None:
        """Set progress, clamped to [0, target]; unlocks when target is reached."""
        achievements = list(self.progress.achievements)
        for i, a in enumerate(achievements):
            if a.id != achievement_id:
                continue
            progress = max(0, min(int(value), a.target))
            unlocked_at = a.unlocked_at
            if unlocked_at is not None:
                progress = a.target
            elif progress >= a.target:
                unlocked_at = self.now()
                logger.info(f"Achievement unlocked: {a.name}")
            achievements[i] = a.model_copy(update={"progress": progress, "unlocked_at": unlocked_at})
            self.progress = self.progress.model_copy(update={"achievements": achievements})
            return achievements[i]
        logger.warning(f"Unknown achievement: {achievement_id}")
        return None

    def unlocked_achievements(self) -> list[Achievement]:
        return [a for a in self.progress.achievements if a.is_unlocked]

    # =========================================================================
    # Badges
    # =========================================================================

    def award_badge(self, badge: Badge) -> None:
        """Add a badge unless one with the same id is already held."""
        if any(b.id == badge.id for b in self.progress.badges):
            return
        self.progress = self.progress.model_copy(
            update={"badges": [*self.progress.badges, badge]}
        )

    # =========================================================================
    # Challenges
    # =========================================================================

    def initialize_challenges(self, skill_level: SkillLevel) -> list[Challenge]:
        """
        Create the starting challenge set once.

        Beginners get the beginner templates first; everyone gets the
        standard templates. Later calls are no-ops.
        """
        if self.challenges_initialized:
            return self.challenges

        now = self.now()
        templates: list[ChallengeTemplate] = []
        if skill_level == "beginner":
            templates.extend(BEGINNER_CHALLENGES)
        templates.extend(STANDARD_CHALLENGES)

        self.challenges = [
            Challenge(
                id=generate_id("challenge"),
                title=t.title,
                description=t.description,
                emoji=t.emoji,
                type=t.type,
                target=t.target,
                reward=ChallengeReward(xp=t.xp),
                expires_at=challenge_expiry(t.type, now),
            )
            for t in templates
        ]
        self.challenges_initialized = True
        return self.challenges

    def add_challenge(self, challenge: Challenge) -> None:
        self.challenges.append(challenge)

    def remove_challenge(self, challenge_id: str) -> None:
        self.challenges = [c for c in self.challenges if c.id != challenge_id]

    def update_challenge_progress(self, challenge_id: str, delta: int) -> Challenge | None:
        """Advance a challenge by delta, clamped to its target. Progress never decreases."""
        for i, c in enumerate(self.challenges):
            if c.id == challenge_id:
                progress = min(c.progress + max(0, delta), c.target)
                self.challenges[i] = c.model_copy(update={"progress": progress})
                return self.challenges[i]
        return None

    def active_challenges(self, now: datetime | None = None) -> list[Challenge]:
        """Stored challenges that have not expired yet."""
        now = now or self.now()
        return [c for c in self.challenges if not c.is_expired(now)]

    # =========================================================================
    # Reset and persistence
    # =========================================================================

    def reset(self) -> None:
        self.progress = self._initial_progress()
        self.challenges = []
        self.challenges_initialized = False
        logger.info("Progress reset")

    def to_state(self) -> dict[str, Any]:
        return {
            "progress": self.progress.model_dump(),
            "challenges": [c.model_dump() for c in self.challenges],
            "challenges_initialized": self.challenges_initialized,
        }

    def load_state(self, state: dict[str, Any]) -> None:
        self.progress = UserProgress.model_validate(state.get("progress", {}))
        if not self.progress.achievements:
            self.progress = self.progress.model_copy(
                update={"achievements": initialize_achievements()}
            )
        self.challenges = [Challenge.model_validate(raw) for raw in state.get("challenges", [])]
        self.challenges_initialized = bool(state.get("challenges_initialized", False))
