"""
Hearthstone - household meal planning with a kitchen progression system.

Components:
- Inventory: perishable items with expiry tracking
- Recommendations: nightly dinner pick from expiring ingredients
- Cooking: guided step-by-step sessions with timers and scaling
- Progression: XP, levels, streaks, achievements and challenges
- Prep: pre-cooking tasks derived from upcoming meal plans
"""

__version__ = "1.0.0"
