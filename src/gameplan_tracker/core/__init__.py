"""Temporal reset-and-history engine: calendar, ledger, reset decisions and streaks."""

from .calendar import game_day_of, game_week_days
from .ledger import toggle_completion
from .reset import reconcile_category, should_reset
from .streaks import daily_streak, weekly_streak

__all__ = [
    "daily_streak",
    "game_day_of",
    "game_week_days",
    "reconcile_category",
    "should_reset",
    "toggle_completion",
    "weekly_streak",
]
