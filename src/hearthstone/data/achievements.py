"""
Achievement definitions and challenge templates.

Achievements are checked by AchievementTracker when a relevant event
happens (meal completed, streak updated, partner linked).
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from hearthstone.models import Achievement, Tier

AchievementCategory = Literal["cooking", "streak", "exploration", "social", "mastery"]


class AchievementDefinition(BaseModel):
    """Static metadata for one unlockable achievement."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    emoji: str
    tier: Tier
    target: int
    category: AchievementCategory


class ChallengeTemplate(BaseModel):
    """A challenge without its id and expiry (assigned at initialisation)."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    emoji: str
    type: Literal["daily", "weekly", "special"]
    target: int
    xp: int


def _define(id, name, description, emoji, tier, target, category) -> AchievementDefinition:
    return AchievementDefinition(
        id=id,
        name=name,
        description=description,
        emoji=emoji,
        tier=tier,
        target=target,
        category=category,
    )


ACHIEVEMENT_DEFINITIONS: list[AchievementDefinition] = [
    # Cooking
    _define("first_meal", "First Bite", "Complete your first meal", "🍽️", "bronze", 1, "cooking"),
    _define("home_cook", "Home Cook", "Complete 10 meals", "👨‍🍳", "silver", 10, "cooking"),
    _define("seasoned_chef", "Seasoned Chef", "Complete 50 meals", "🔥", "gold", 50, "cooking"),
    _define("master_chef", "Master Chef", "Complete 100 meals", "⭐", "platinum", 100, "cooking"),
    # Streak
    _define("consistent_cook", "Consistent Cook", "Maintain a 3-day cooking streak", "🔥", "bronze", 3, "streak"),
    _define("week_warrior", "Week Warrior", "Maintain a 7-day cooking streak", "💪", "silver", 7, "streak"),
    _define("streak_master", "Streak Master", "Maintain a 30-day cooking streak", "🏆", "gold", 30, "streak"),
    # Exploration
    _define("cuisine_curious", "Cuisine Curious", "Try 3 different cuisines", "🌍", "bronze", 3, "exploration"),
    _define("world_traveler", "World Traveler", "Try 8 different cuisines", "✈️", "silver", 8, "exploration"),
    _define("culinary_explorer", "Culinary Explorer", "Try 15 different cuisines", "🧭", "gold", 15, "exploration"),
    # Social
    _define("partner_up", "Partner Up", "Connect with a cooking partner", "💑", "bronze", 1, "social"),
    _define("couple_cooking", "Couple Cooking", "Complete 10 meals with your partner", "❤️", "silver", 10, "social"),
    _define("kitchen_duo", "Kitchen Duo", "Complete 50 meals with your partner", "👨‍❤️‍👨", "gold", 50, "social"),
    # Mastery
    _define("five_star_meal", "Five Star Meal", "Rate a meal 5 stars", "⭐", "bronze", 1, "mastery"),
    _define("perfectionist", "Perfectionist", "Rate 10 meals 5 stars", "💯", "silver", 10, "mastery"),
    _define("level_10", "Rising Chef", "Reach level 10", "📈", "silver", 10, "mastery"),
    _define("level_25", "Expert Chef", "Reach level 25", "🎓", "gold", 25, "mastery"),
]

_BY_ID = {d.id: d for d in ACHIEVEMENT_DEFINITIONS}


def create_achievement(
    definition: AchievementDefinition,
    progress: int = 0,
    now: datetime | None = None,
) -> Achievement:
    """Build an Achievement record from a definition."""
    unlocked_at = None
    if progress >= definition.target:
        unlocked_at = now or datetime.now()
    return Achievement(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        emoji=definition.emoji,
        tier=definition.tier,
        progress=min(progress, definition.target),
        target=definition.target,
        unlocked_at=unlocked_at,
    )


def initialize_achievements() -> list[Achievement]:
    """Every defined achievement at zero progress."""
    return [create_achievement(d, 0) for d in ACHIEVEMENT_DEFINITIONS]


def get_achievement_definition(achievement_id: str) -> AchievementDefinition | None:
    return _BY_ID.get(achievement_id)


def get_achievements_by_category(category: AchievementCategory) -> list[AchievementDefinition]:
    return [d for d in ACHIEVEMENT_DEFINITIONS if d.category == category]


# =============================================================================
# Challenge templates
# =============================================================================

BEGINNER_CHALLENGES: list[ChallengeTemplate] = [
    ChallengeTemplate(
        title="Your First Meal",
        description="Complete your first recipe from start to finish",
        emoji="🌟",
        type="special",
        target=1,
        xp=100,
    ),
    ChallengeTemplate(
        title="Learn to Dice",
        description="Complete a recipe that requires dicing vegetables",
        emoji="🔪",
        type="special",
        target=1,
        xp=75,
    ),
    ChallengeTemplate(
        title="Breakfast Champion",
        description="Cook breakfast 3 times this week",
        emoji="🍳",
        type="weekly",
        target=3,
        xp=150,
    ),
    ChallengeTemplate(
        title="Kitchen Apprentice",
        description="Complete 5 easy recipes",
        emoji="👨‍🍳",
        type="special",
        target=5,
        xp=200,
    ),
]

STANDARD_CHALLENGES: list[ChallengeTemplate] = [
    ChallengeTemplate(
        title="Daily Cook",
        description="Cook at least one meal today",
        emoji="🔥",
        type="daily",
        target=1,
        xp=50,
    ),
    ChallengeTemplate(
        title="Weekend Chef",
        description="Cook 3 meals this weekend",
        emoji="🍽️",
        type="weekly",
        target=3,
        xp=100,
    ),
    ChallengeTemplate(
        title="World Traveler",
        description="Try recipes from 3 different cuisines",
        emoji="🌍",
        type="weekly",
        target=3,
        xp=125,
    ),
]
