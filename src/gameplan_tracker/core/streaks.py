# src/gameplan_tracker/core/streaks.py

from __future__ import annotations

"""
Streaks and habit grids.

Read-only views over a completion history: nothing here mutates its input.
"""

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from .calendar import (
    MIN_INSTANT,
    Instant,
    game_date_of,
    game_week_start,
    parse_instant,
    period_id,
)

DEFAULT_HISTORY_WEEKS = 8


@dataclass(frozen=True, slots=True)
class WeekCell:
    start: date
    period_id: str
    label: str
    completed: bool
    is_current: bool


@dataclass(frozen=True, slots=True)
class DayCell:
    day: date
    period_id: str
    completed: bool
    is_today: bool
    is_future: bool


@dataclass(frozen=True, slots=True)
class MonthGrid:
    # Empty cells before day 1 in a Monday-first week layout.
    leading_blanks: int
    days: tuple[DayCell, ...]


def daily_streak(history: Iterable[str], now: Instant, task_created_at: Instant) -> int:
    """
    Consecutive completed game-days ending today (or yesterday if today is not done yet).

    The walk never goes past the game-day the task was created on.
    """
    present = set(history)
    if not present:
        return 0

    today = game_date_of(now)
    first_day = game_date_of(task_created_at)

    day = today if period_id(today) in present else today - timedelta(days=1)
    streak = 0
    while day >= first_day and period_id(day) in present:
        streak += 1
        day -= timedelta(days=1)
    return streak


def weekly_streak(history: Collection[str], weeks: Sequence[WeekCell]) -> int:
    """
    Consecutive completed weeks counted back from the newest one.

    `weeks` is ordered oldest first with `completed` precomputed (see weeks_for_display).
    """
    if not history:
        return 0

    streak = 0
    for week in reversed(weeks):
        if not week.completed:
            break
        streak += 1
    return streak


def weeks_for_display(
    history: Iterable[str],
    now: Instant,
    count: int = DEFAULT_HISTORY_WEEKS,
) -> list[WeekCell]:
    """The most recent `count` game-weeks, oldest first, the last one being current."""
    present = set(history)
    now_dt = parse_instant(now)

    # No weeks before the earliest instant the calendar accepts.
    available = (now_dt - MIN_INSTANT) // timedelta(weeks=1) + 1

    cells: list[WeekCell] = []
    for i in range(max(1, min(count, available))):
        start = game_week_start(now_dt - timedelta(weeks=i))
        pid = period_id(start)
        cells.append(
            WeekCell(
                start=start,
                period_id=pid,
                label=f"{start:%b} week of Monday {start.day}",
                completed=pid in present,
                is_current=i == 0,
            )
        )
    cells.reverse()
    return cells


def month_grid(history: Iterable[str], now: Instant) -> MonthGrid:
    """
    Every day of the month containing today's game-day, flagged for a calendar-style view.

    From 21:00 on the last day of a month the grid already shows the next month, since
    that is the month the current game-day belongs to.
    """
    present = set(history)
    today = game_date_of(now)

    first = today.replace(day=1)
    last = first + relativedelta(months=1, days=-1)

    days: list[DayCell] = []
    day = first
    while day <= last:
        pid = period_id(day)
        days.append(
            DayCell(
                day=day,
                period_id=pid,
                completed=pid in present,
                is_today=day == today,
                is_future=day > today,
            )
        )
        day += timedelta(days=1)

    return MonthGrid(leading_blanks=first.weekday(), days=tuple(days))
