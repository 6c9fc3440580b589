# tests/test_ledger.py

from __future__ import annotations

import pytest

from gameplan_tracker.core.ledger import (
    add_daily,
    is_day_completed,
    is_week_completed,
    remove_daily,
    toggle_completion,
    toggle_task,
)
from gameplan_tracker.core.models import ScheduleKind, Task

WED = "2024-01-03T12:00:00-03:00"
OLD_DAY = "2023-12-20T03:00:00.000Z"


@pytest.mark.parametrize("kind", [ScheduleKind.DAILY, ScheduleKind.WEEKLY])
def test_toggle_on_then_off_restores_history(kind: ScheduleKind) -> None:
    history = (OLD_DAY,)
    done = toggle_completion(history, WED, kind, True)
    undone = toggle_completion(done, WED, kind, False)

    assert set(undone) == set(history)
    assert history == (OLD_DAY,)


def test_daily_toggle_does_not_duplicate() -> None:
    once = toggle_completion((), WED, ScheduleKind.DAILY, True)
    twice = toggle_completion(once, "2024-01-03T18:00:00-03:00", ScheduleKind.DAILY, True)

    assert once == ("2024-01-03T03:00:00.000Z",)
    assert twice == once


def test_raw_add_daily_may_duplicate() -> None:
    assert len(add_daily(add_daily((), WED), WED)) == 2


def test_remove_daily_matches_non_normalized_entries() -> None:
    # 15:00Z is 12:00 local on the same game-day.
    history = ("2024-01-03T15:00:00.000Z", OLD_DAY)
    assert remove_daily(history, WED) == (OLD_DAY,)


def test_weekly_completion_covers_whole_week() -> None:
    history = toggle_completion([OLD_DAY], "2024-01-02T10:00:00-03:00", ScheduleKind.WEEKLY, True)

    assert len(history) == 8
    assert is_week_completed(history, "2024-01-07T20:00:00-03:00")
    for day in range(1, 8):
        assert is_day_completed(history, f"2024-01-0{day}T12:00:00-03:00")
    assert not is_week_completed(history, "2024-01-08T04:30:00-03:00")


def test_weekly_uncomplete_removes_all_seven_days() -> None:
    history = toggle_completion((OLD_DAY,), "2024-01-02T10:00:00-03:00", ScheduleKind.WEEKLY, True)
    # Uncompleting from a different day of the same game-week.
    history = toggle_completion(history, "2024-01-06T10:00:00-03:00", ScheduleKind.WEEKLY, False)
    assert history == (OLD_DAY,)


def test_weekly_complete_is_idempotent() -> None:
    once = toggle_completion((), WED, ScheduleKind.WEEKLY, True)
    twice = toggle_completion(once, WED, ScheduleKind.WEEKLY, True)
    assert twice == once


def test_none_kind_is_daily_style() -> None:
    assert toggle_completion((), WED, ScheduleKind.NONE, True) == ("2024-01-03T03:00:00.000Z",)


def test_toggle_does_not_mutate_input() -> None:
    history = [OLD_DAY]
    toggle_completion(history, WED, ScheduleKind.WEEKLY, True)
    toggle_completion(history, WED, ScheduleKind.DAILY, True)
    assert history == [OLD_DAY]


def test_toggle_task_updates_flags_and_history() -> None:
    task = Task(id=1, text="Dailies", created_at="2024-01-01T13:00:00.000Z")

    done = toggle_task(task, ScheduleKind.DAILY, WED)
    assert done.completed is True
    assert done.last_completed == "2024-01-03T15:00:00.000Z"
    assert done.completion_history == ("2024-01-03T03:00:00.000Z",)

    undone = toggle_task(done, ScheduleKind.DAILY, "2024-01-03T13:00:00-03:00")
    assert undone.completed is False
    assert undone.last_completed == done.last_completed
    assert undone.completion_history == ()

    assert task.completed is False


def test_toggle_task_keeps_no_history_for_permanent_tasks() -> None:
    task = Task(id=1, text="Legendary", created_at="2024-01-01T13:00:00.000Z")
    done = toggle_task(task, ScheduleKind.NONE, WED)
    assert done.completed is True
    assert done.last_completed is not None
    assert done.completion_history == ()
