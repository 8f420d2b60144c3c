"""
Hearthstone - Models.

Re-exports entity models so callers can `from hearthstone.models import Recipe`.
"""

from hearthstone.models.entities import (
    Achievement,
    Badge,
    Challenge,
    ChallengeReward,
    ChallengeType,
    CookingSessionRecord,
    Difficulty,
    FoodCategory,
    InventoryItem,
    InventoryUnit,
    MealPlan,
    MealRecommendation,
    MealType,
    MonthlyStats,
    PrepTask,
    PrepType,
    Recipe,
    RecipeIngredient,
    RecipeStep,
    SkillLevel,
    StorageLocation,
    Tier,
    User,
    UserPreferences,
    UserProgress,
    WeeklyStats,
)

__all__ = [
    "Achievement",
    "Badge",
    "Challenge",
    "ChallengeReward",
    "ChallengeType",
    "CookingSessionRecord",
    "Difficulty",
    "FoodCategory",
    "InventoryItem",
    "InventoryUnit",
    "MealPlan",
    "MealRecommendation",
    "MealType",
    "MonthlyStats",
    "PrepTask",
    "PrepType",
    "Recipe",
    "RecipeIngredient",
    "RecipeStep",
    "SkillLevel",
    "StorageLocation",
    "Tier",
    "User",
    "UserPreferences",
    "UserProgress",
    "WeeklyStats",
]
