"""
Hearthstone - Recommendation & Progression Engine.

Scorer, cooking session, prep derivation, achievement orchestration
and the Kitchen container that wires them to the stores.
"""

from hearthstone.engine.achievements import AchievementTracker
from hearthstone.engine.cooking import (
    CompletionResult,
    CookingSession,
    SessionState,
    format_amount,
    scale_amount,
)
from hearthstone.engine.expiry import (
    ExpiryGroups,
    days_until_expiry,
    expiry_status,
    group_by_expiry,
)
from hearthstone.engine.kitchen import CookingOutcome, Kitchen
from hearthstone.engine.prep import derive_prep_tasks, regenerate_prep
from hearthstone.engine.recommend import RecommendationScorer
from hearthstone.engine.streaks import milestones, next_milestone, streak_message

__all__ = [
    "AchievementTracker",
    "CompletionResult",
    "CookingSession",
    "SessionState",
    "format_amount",
    "scale_amount",
    "ExpiryGroups",
    "days_until_expiry",
    "expiry_status",
    "group_by_expiry",
    "CookingOutcome",
    "Kitchen",
    "derive_prep_tasks",
    "regenerate_prep",
    "RecommendationScorer",
    "milestones",
    "next_milestone",
    "streak_message",
]
