"""
Streak milestones and encouragement messages.
"""

from pydantic import BaseModel


class StreakMilestone(BaseModel):
    days: int
    label: str
    emoji: str
    reached: bool = False


MILESTONES: list[tuple[int, str, str]] = [
    (3, "Getting started", "🌱"),
    (7, "One week warrior", "🔥"),
    (14, "Two week champion", "⭐"),
    (30, "Monthly master", "🏆"),
    (60, "Sixty day legend", "👑"),
    (90, "Quarter year hero", "💎"),
    (180, "Half year titan", "🌟"),
    (365, "Full year legend", "🎯"),
]


def milestones(streak: int) -> list[StreakMilestone]:
    return [
        StreakMilestone(days=days, label=label, emoji=emoji, reached=streak >= days)
        for days, label, emoji in MILESTONES
    ]


def next_milestone(streak: int) -> StreakMilestone | None:
    """The first milestone not yet reached, None past a full year."""
    return next((m for m in milestones(streak) if not m.reached), None)


def streak_message(streak: int, longest_streak: int) -> str:
    if streak == 0:
        return "Start your streak today!"
    if streak == 1:
        return "One day down! Keep it going!"
    if streak < 7:
        return f"{streak} days! You're building momentum!"
    if streak < 14:
        return f"{streak} days! You're on fire!"
    if streak < 30:
        return f"{streak} days! Incredible dedication!"
    if streak >= longest_streak:
        return f"{streak} days! Your longest streak yet!"
    return f"{streak}-day streak! You're unstoppable!"
