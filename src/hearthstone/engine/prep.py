"""
Prep Task Deriver.

Scans the ingredients of upcoming, unfinished meal plans against a fixed
list of name patterns and merges the hits into one prep list.

- First matching pattern wins per ingredient
- Tasks with the same label merge; their day sets are unioned
- Sort: wash, chop, marinate, measure, cook, other; longer tasks first
"""

import re
from dataclasses import dataclass
from datetime import datetime

from hearthstone.ids import generate_id
from hearthstone.models import MealPlan, PrepTask, PrepType, Recipe
from hearthstone.stores import PrepTaskStore

DAY_ORDER = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

PREP_TYPE_ORDER: dict[str, int] = {
    "wash": 0,
    "chop": 1,
    "marinate": 2,
    "measure": 3,
    "cook": 4,
    "other": 5,
}


@dataclass(frozen=True)
class PrepPattern:
    pattern: re.Pattern
    task: str
    emoji: str
    time: int  # minutes
    type: PrepType


def _p(regex: str, task: str, emoji: str, time: int, type: PrepType) -> PrepPattern:
    return PrepPattern(re.compile(regex, re.IGNORECASE), task, emoji, time, type)


PREP_PATTERNS: list[PrepPattern] = [
    _p(r"onion", "Dice onions", "🧅", 5, "chop"),
    _p(r"garlic", "Mince garlic", "🧄", 3, "chop"),
    _p(r"carrot", "Slice carrots", "🥕", 5, "chop"),
    _p(r"bell pepper|pepper", "Dice peppers", "🫑", 5, "chop"),
    _p(r"tomato", "Chop tomatoes", "🍅", 4, "chop"),
    _p(r"chicken", "Prep chicken", "🍗", 10, "other"),
    _p(r"beef|steak", "Prep beef", "🥩", 10, "other"),
    _p(r"rice", "Rinse rice", "🍚", 3, "wash"),
    _p(r"potato", "Peel & chop potatoes", "🥔", 8, "chop"),
    _p(r"lettuce|salad|greens", "Wash salad greens", "🥬", 4, "wash"),
    _p(r"mushroom", "Slice mushrooms", "🍄", 4, "chop"),
    _p(r"ginger", "Grate ginger", "🫚", 2, "chop"),
    _p(r"broccoli", "Cut broccoli florets", "🥦", 5, "chop"),
    _p(r"zucchini|courgette", "Slice zucchini", "🥒", 4, "chop"),
    _p(r"spinach", "Wash spinach", "🥬", 3, "wash"),
    _p(r"bean|legume", "Rinse beans", "🫘", 2, "wash"),
    _p(r"lemon|lime", "Juice citrus", "🍋", 3, "other"),
    _p(r"herb|cilantro|parsley|basil", "Chop fresh herbs", "🌿", 3, "chop"),
    _p(r"egg", "Prep eggs", "🥚", 2, "other"),
    _p(r"tofu", "Press & cube tofu", "🧈", 15, "other"),
]


def day_abbr(moment: datetime) -> str:
    return DAY_ORDER[moment.weekday()]


def match_pattern(ingredient_name: str) -> PrepPattern | None:
    return next((p for p in PREP_PATTERNS if p.pattern.search(ingredient_name)), None)


def upcoming_plans(plans: list[MealPlan], now: datetime) -> list[MealPlan]:
    """Plans dated today or later, not completed, with a recipe."""
    today = now.date()
    return [
        p for p in plans
        if p.recipe is not None and not p.completed and p.date.date() >= today
    ]


def derive_prep_tasks(plans: list[MealPlan], now: datetime) -> list[PrepTask]:
    """
    Build the merged, sorted prep list for the upcoming plans.

    Past, completed or recipe-less plans are ignored.
    """
    merged: dict[str, tuple[PrepPattern, str, set[str]]] = {}

    for plan in upcoming_plans(plans, now):
        day = day_abbr(plan.date)
        for pattern, ingredient_name in _recipe_matches(plan.recipe):
            if pattern.task in merged:
                merged[pattern.task][2].add(day)
            else:
                merged[pattern.task] = (pattern, ingredient_name, {day})

    tasks = [
        PrepTask(
            id=generate_id("prep"),
            task=pattern.task,
            emoji=pattern.emoji,
            time=pattern.time,
            used_in=sorted(days, key=DAY_ORDER.index),
            ingredient_name=ingredient_name,
            prep_type=pattern.type,
        )
        for pattern, ingredient_name, days in merged.values()
    ]
    tasks.sort(key=lambda t: (PREP_TYPE_ORDER[t.prep_type], -t.time))
    return tasks


def _recipe_matches(recipe: Recipe) -> list[tuple[PrepPattern, str]]:
    matches = []
    for ingredient in recipe.ingredients:
        pattern = match_pattern(ingredient.name)
        if pattern is not None:
            matches.append((pattern, ingredient.name))
    return matches


def regenerate_prep(store: PrepTaskStore, plans: list[MealPlan], now: datetime) -> bool:
    """
    Replace the store's tasks with a fresh derivation.

    With no upcoming plans the existing tasks are left untouched.

    Returns:
        True if the task list was replaced
    """
    if not upcoming_plans(plans, now):
        return False
    store.set_tasks(derive_prep_tasks(plans, now))
    return True
