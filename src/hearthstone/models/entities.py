"""
Hearthstone - Entity Models.

These models are shared by the stores, the engine and the sync layer.
They are used for:
- Type-safe store state (dumped to the key-value store as JSON)
- Row conversion for the Supabase profile store
- Validation defaults on user input
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


FoodCategory = Literal[
    "protein",
    "dairy",
    "produce",
    "grains",
    "canned",
    "condiments",
    "frozen",
    "snacks",
    "beverages",
    "other",
]
StorageLocation = Literal["fridge", "freezer", "pantry"]
InventoryUnit = Literal["count", "g", "kg", "ml", "l", "oz", "lb"]
Difficulty = Literal["easy", "medium", "hard"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
Tier = Literal["bronze", "silver", "gold", "platinum"]
ChallengeType = Literal["daily", "weekly", "special"]
PrepType = Literal["chop", "cook", "marinate", "wash", "measure", "other"]
SkillLevel = Literal["beginner", "intermediate", "advanced"]


# =============================================================================
# Inventory
# =============================================================================


class InventoryItem(BaseModel):
    """
    Item in the household fridge/freezer/pantry.

    expiry_date is optional - shelf-stable items are never "expiring".
    """

    id: str
    name: str
    emoji: str = "📦"
    quantity: float = Field(default=1, ge=0)
    unit: InventoryUnit = "count"
    location: StorageLocation = "fridge"
    expiry_date: datetime | None = None
    added_date: datetime
    category: FoodCategory = "other"


# =============================================================================
# Recipes
# =============================================================================


class RecipeIngredient(BaseModel):
    """One line of a recipe's ingredient list."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: float
    unit: str = ""
    optional: bool = False


class RecipeStep(BaseModel):
    """One ordered instruction. duration is minutes, None when untimed."""

    model_config = ConfigDict(frozen=True)

    order: int
    instruction: str
    duration: int | None = None
    tip: str | None = None


class Recipe(BaseModel):
    """
    A catalog recipe. Immutable once defined.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    image_url: str | None = None
    prep_time: int = 0  # minutes
    cook_time: int = 0  # minutes
    servings: int = 2
    difficulty: Difficulty = "medium"
    cuisine: str = ""
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    steps: list[RecipeStep] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    estimated_cost: float = 0

    @property
    def total_time(self) -> int:
        return self.prep_time + self.cook_time

    @property
    def required_ingredients(self) -> list[RecipeIngredient]:
        return [ing for ing in self.ingredients if not ing.optional]


# =============================================================================
# Meal Planning
# =============================================================================


class MealPlan(BaseModel):
    """
    A planned (or cooked) meal for a specific date.
    """

    id: str
    date: datetime
    meal_type: MealType = "dinner"
    recipe: Recipe | None = None
    notes: str = ""
    completed: bool = False
    rating: int | None = None


class MealRecommendation(BaseModel):
    """
    Tonight's pick. Created fresh by the scorer, never merged.
    """

    recipe: Recipe
    score: float = Field(ge=0, le=1)
    reasoning: str
    expiring_ingredients: list[InventoryItem] = Field(default_factory=list)
    missing_ingredients: list[str] = Field(default_factory=list)
    estimated_savings: float = 0


class CookingSessionRecord(BaseModel):
    """
    The persisted slice of a cooking session.

    Only the step index survives a suspend; timers and checklists reset.
    """

    plan_id: str
    recipe_id: str
    current_step: int = 0
    started_at: datetime


# =============================================================================
# Users
# =============================================================================


class UserPreferences(BaseModel):
    """Household cooking preferences."""

    dietary_restrictions: list[str] = Field(default_factory=list)
    disliked_ingredients: list[str] = Field(default_factory=list)
    favorite_cuisines: list[str] = Field(default_factory=list)
    cooking_skill_level: SkillLevel = "intermediate"
    weeknight_max_time: int = 45  # minutes
    weekend_max_time: int = 90  # minutes
    chef_mode: bool = False


class User(BaseModel):
    """Local user profile. partner_id links a cooking partner."""

    id: str
    name: str
    email: str = ""
    avatar_url: str | None = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    partner_id: str | None = None


class MonthlyStats(BaseModel):
    meals_cooked: int = 0
    money_saved: float = 0
    items_saved_from_expiry: int = 0
    cuisines_explored: list[str] = Field(default_factory=list)
    couples_meals: int = 0
    total_meals: int = 0
    average_rating: float = 0


class WeeklyStats(BaseModel):
    hours_saved: float = 0
    prep_completed: bool = False
    meals_planned: int = 0
    meals_cooked: int = 0


# =============================================================================
# Progression
# =============================================================================


class Achievement(BaseModel):
    """
    Progress toward a count threshold.

    unlocked_at is set once progress reaches target and is never cleared.
    """

    id: str
    name: str
    description: str = ""
    emoji: str = ""
    tier: Tier = "bronze"
    progress: int = 0
    target: int = 1
    unlocked_at: datetime | None = None

    @property
    def is_unlocked(self) -> bool:
        return self.unlocked_at is not None


class Badge(BaseModel):
    id: str
    name: str
    emoji: str = ""
    tier: Tier = "bronze"
    earned_at: datetime


class ChallengeReward(BaseModel):
    xp: int
    badge: Badge | None = None
    recipe_unlock: str | None = None


class Challenge(BaseModel):
    """
    Time-boxed goal. Expired challenges stay stored until removed;
    ProgressLedger.active_challenges() hides them.
    """

    id: str
    title: str
    description: str = ""
    emoji: str = ""
    type: ChallengeType = "special"
    progress: int = 0
    target: int = 1
    reward: ChallengeReward
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now

    @property
    def is_complete(self) -> bool:
        return self.progress >= self.target


class UserProgress(BaseModel):
    """
    Level/XP/streak state.

    After every XP grant: 0 <= current_xp < next_level_xp.
    """

    level: int = 1
    current_xp: int = 0
    next_level_xp: int = 1000
    streak: int = 0
    longest_streak: int = 0
    achievements: list[Achievement] = Field(default_factory=list)
    badges: list[Badge] = Field(default_factory=list)


# =============================================================================
# Prep
# =============================================================================


class PrepTask(BaseModel):
    """
    A pre-cooking action aggregated across upcoming meals.

    used_in holds day abbreviations ("Mon", "Wed"), deduplicated.
    """

    id: str
    task: str
    emoji: str = ""
    time: int  # minutes
    used_in: list[str] = Field(default_factory=list)
    completed: bool = False
    ingredient_name: str | None = None
    prep_type: PrepType = "other"
