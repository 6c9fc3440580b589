# src/gameplan_tracker/core/defaults.py

from __future__ import annotations

from .models import Category, ScheduleKind


def default_categories() -> dict[str, Category]:
    """Fixed category set used on first run and when persisted state is unusable."""
    return {
        "coffeeWeeklies": Category(
            title="Coffee Run Weeklies",
            description="Resets Mondays at 04:30 UTC-3",
            reset_type=ScheduleKind.WEEKLY,
        ),
        "coffeeDailies": Category(
            title="Coffee Run Dailies",
            description="Resets daily at 21:00 UTC-3",
            reset_type=ScheduleKind.DAILY,
        ),
        "gamingDailies": Category(
            title="Gaming Session Dailies",
            description="Resets daily at 21:00 UTC-3",
            reset_type=ScheduleKind.DAILY,
        ),
        "workingGoals": Category(
            title="Working Goals",
            description="No reset - permanent progress",
            reset_type=ScheduleKind.NONE,
        ),
    }
