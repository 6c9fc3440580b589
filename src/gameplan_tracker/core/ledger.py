# src/gameplan_tracker/core/ledger.py

from __future__ import annotations

"""
Completion ledger.

A task's completion history is a tuple of period identifiers. Every operation here
is pure: it takes a history and returns a new one without touching the input.

Weekly tasks are completed as a unit: completing stores all 7 day identifiers of the
game-week, uncompleting removes all 7. This lets "is this day covered" and
"is this week covered" share one representation.
"""

from collections.abc import Iterable
from dataclasses import replace

from .calendar import Instant, format_instant, game_day_of, game_week_days, week_start_id
from .models import ScheduleKind, Task

History = tuple[str, ...]


def add_daily(history: Iterable[str], instant: Instant) -> History:
    """Append the instant's game-day. Does not check membership; use toggle_completion."""
    return (*history, game_day_of(instant))


def remove_daily(history: Iterable[str], instant: Instant) -> History:
    target = game_day_of(instant)
    return tuple(day for day in history if game_day_of(day) != target)


def add_weekly(history: Iterable[str], instant: Instant) -> History:
    out = list(dict.fromkeys(history))
    present = set(out)
    out.extend(day for day in game_week_days(instant) if day not in present)
    return tuple(out)


def remove_weekly(history: Iterable[str], instant: Instant) -> History:
    week = set(game_week_days(instant))
    return tuple(day for day in history if day not in week)


def toggle_completion(
    history: Iterable[str],
    instant: Instant,
    kind: ScheduleKind,
    is_completing: bool,
) -> History:
    """
    Add or remove the instant's period.

    `none` is handled daily-style. Completing a day that is already present
    returns the history unchanged (no duplicates).
    """
    history = tuple(history)

    if kind == ScheduleKind.WEEKLY:
        if is_completing:
            return add_weekly(history, instant)
        return remove_weekly(history, instant)

    if is_completing:
        if is_day_completed(history, instant):
            return history
        return add_daily(history, instant)
    return remove_daily(history, instant)


def is_day_completed(history: Iterable[str], instant: Instant) -> bool:
    return game_day_of(instant) in set(history)


def is_week_completed(history: Iterable[str], instant: Instant) -> bool:
    return week_start_id(instant) in set(history)


def toggle_task(task: Task, kind: ScheduleKind, now: Instant) -> Task:
    """
    Flip a task's completion at `now` and record it in the ledger.

    Tasks in `none` categories keep only `last_completed`; their history is not retained.
    """
    now_iso = format_instant(now)
    is_completing = not task.completed

    history = task.completion_history
    if kind != ScheduleKind.NONE:
        history = toggle_completion(history, now_iso, kind, is_completing)

    return replace(
        task,
        completed=is_completing,
        last_completed=now_iso if is_completing else task.last_completed,
        completion_history=history,
    )
