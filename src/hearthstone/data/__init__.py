"""
Hearthstone - Bundled data.

Sample recipe catalog, achievement definitions and challenge templates.
"""

from hearthstone.data.achievements import (
    ACHIEVEMENT_DEFINITIONS,
    BEGINNER_CHALLENGES,
    STANDARD_CHALLENGES,
    AchievementDefinition,
    ChallengeTemplate,
    create_achievement,
    get_achievement_definition,
    get_achievements_by_category,
    initialize_achievements,
)
from hearthstone.data.sample_recipes import SAMPLE_RECIPES

__all__ = [
    "ACHIEVEMENT_DEFINITIONS",
    "BEGINNER_CHALLENGES",
    "STANDARD_CHALLENGES",
    "AchievementDefinition",
    "ChallengeTemplate",
    "create_achievement",
    "get_achievement_definition",
    "get_achievements_by_category",
    "initialize_achievements",
    "SAMPLE_RECIPES",
]
