# src/gameplan_tracker/core/reset.py

from __future__ import annotations

"""
Reset engine.

Decides whether a category has entered a new period since its last reset and, if so,
re-derives every task's transient `completed` flag from its completion history.

Decisions compare absolute boundaries, never tick counts, so a process that was
suspended across several boundaries catches up in a single reconciliation.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timedelta

from .calendar import (
    Instant,
    daily_boundary_at_or_before,
    format_instant,
    game_day_of,
    parse_instant,
    weekly_boundary_at_or_before,
)
from .models import Category, ScheduleKind

logger = logging.getLogger(__name__)


def last_boundary(kind: ScheduleKind, now: Instant) -> datetime | None:
    """Most recent reset boundary at or before `now` (None for `none`)."""
    if kind == ScheduleKind.DAILY:
        return daily_boundary_at_or_before(now)
    if kind == ScheduleKind.WEEKLY:
        return weekly_boundary_at_or_before(now)
    return None


def next_reset(kind: ScheduleKind, now: Instant) -> datetime | None:
    """First reset boundary strictly after `now` (None for `none`)."""
    boundary = last_boundary(kind, now)
    if boundary is None:
        return None
    step = timedelta(days=1) if kind == ScheduleKind.DAILY else timedelta(weeks=1)
    return boundary + step


def time_until_reset(kind: ScheduleKind, now: Instant) -> str | None:
    """
    Countdown to the next reset, e.g. "3h 12m".

    Weekly countdowns of a day or more include days ("2d 5h 0m"); daily ones never do.
    None for categories that never reset.
    """
    target = next_reset(kind, now)
    if target is None:
        return None

    total_minutes = int((target - parse_instant(now)).total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)

    if kind == ScheduleKind.WEEKLY and hours >= 24:
        days, hours = divmod(hours, 24)
        return f"{days}d {hours}h {minutes}m"
    return f"{hours}h {minutes}m"


def should_reset(kind: ScheduleKind, last_reset_time: Instant | None, now: Instant) -> bool:
    """
    True iff a new period started since `last_reset_time`.

    A category that was never reset resets on its first check; `none` never resets.
    """
    boundary = last_boundary(kind, now)
    if boundary is None:
        return False
    if last_reset_time is None:
        return True
    return parse_instant(last_reset_time) < boundary


def reconcile_category(category: Category, now: Instant) -> Category:
    """
    Apply a due reset to one category.

    Not an unconditional clear: a task already completed for the new game-day
    (completed after the boundary but before this check) stays completed.
    Returns the same object when no reset is due.
    """
    if not should_reset(category.reset_type, category.last_reset_time, now):
        return category

    today = game_day_of(now)
    tasks = tuple(
        replace(task, completed=today in task.completion_history) for task in category.tasks
    )
    return replace(category, tasks=tasks, last_reset_time=format_instant(now))


def reconcile_all(categories: Mapping[str, Category], now: Instant) -> dict[str, Category]:
    out: dict[str, Category] = {}
    for key, category in categories.items():
        updated = reconcile_category(category, now)
        if updated is not category:
            logger.info(
                "Reset category=%s kind=%s previous=%s tasks=%d",
                key,
                category.reset_type.value,
                category.last_reset_time,
                len(updated.tasks),
            )
        out[key] = updated
    return out
