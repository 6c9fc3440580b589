# tests/test_reset.py

from __future__ import annotations

import pytest

from gameplan_tracker.core.models import Category, ScheduleKind, Task
from gameplan_tracker.core.reset import reconcile_all, reconcile_category, should_reset

JAN_2 = "2024-01-02T03:00:00.000Z"
JAN_4 = "2024-01-04T03:00:00.000Z"


def _task(task_id: int, *, completed: bool, history: tuple[str, ...]) -> Task:
    return Task(
        id=task_id,
        text=f"task {task_id}",
        created_at="2024-01-01T13:00:00.000Z",
        completed=completed,
        completion_history=history,
    )


@pytest.mark.parametrize("kind", [ScheduleKind.DAILY, ScheduleKind.WEEKLY])
@pytest.mark.parametrize("now", ["2024-01-01T00:00:00Z", "2024-06-15T21:00:00-03:00"])
def test_never_reset_category_resets_on_first_check(kind: ScheduleKind, now: str) -> None:
    assert should_reset(kind, None, now) is True


def test_none_kind_never_resets() -> None:
    assert should_reset(ScheduleKind.NONE, None, "2024-01-03T12:00:00-03:00") is False
    assert should_reset(ScheduleKind.NONE, "2020-01-01T00:00:00Z", "2024-01-03T12:00:00-03:00") is False


def test_daily_before_todays_boundary_compares_with_yesterdays() -> None:
    now = "2024-01-03T20:00:00-03:00"
    assert should_reset(ScheduleKind.DAILY, "2024-01-02T21:30:00-03:00", now) is False
    assert should_reset(ScheduleKind.DAILY, "2024-01-02T20:59:00-03:00", now) is True


def test_daily_boundary_is_strict() -> None:
    now = "2024-01-03T21:00:00-03:00"
    assert should_reset(ScheduleKind.DAILY, "2024-01-03T20:59:59-03:00", now) is True
    assert should_reset(ScheduleKind.DAILY, "2024-01-03T21:00:00-03:00", now) is False


def test_weekly_uses_most_recent_monday_0430() -> None:
    now = "2024-01-10T12:00:00-03:00"
    assert should_reset(ScheduleKind.WEEKLY, "2024-01-08T04:29:59-03:00", now) is True
    assert should_reset(ScheduleKind.WEEKLY, "2024-01-08T04:30:00-03:00", now) is False
    # Monday before 04:30 still belongs to the previous week.
    assert should_reset(ScheduleKind.WEEKLY, "2024-01-02T10:00:00-03:00", "2024-01-08T04:00:00-03:00") is False


def test_offline_catch_up_in_one_pass() -> None:
    category = Category(
        title="Dailies",
        description="",
        reset_type=ScheduleKind.DAILY,
        last_reset_time="2024-01-02T00:05:00.000Z",  # 2024-01-01 21:05 local
        tasks=(
            # Completed right after tonight's boundary, before any poll saw it.
            _task(1, completed=True, history=(JAN_2, JAN_4)),
            # Stale check mark from two days ago.
            _task(2, completed=True, history=(JAN_2,)),
            _task(3, completed=False, history=(JAN_4,)),
        ),
    )
    now = "2024-01-03T21:10:00-03:00"

    updated = reconcile_category(category, now)

    assert updated.last_reset_time == "2024-01-04T00:10:00.000Z"
    assert [t.completed for t in updated.tasks] == [True, False, True]
    assert [t.completion_history for t in updated.tasks] == [t.completion_history for t in category.tasks]
    assert category.tasks[1].completed is True


def test_reconcile_is_idempotent() -> None:
    category = Category(
        title="Weeklies",
        description="",
        reset_type=ScheduleKind.WEEKLY,
        tasks=(_task(1, completed=True, history=()),),
    )
    now = "2024-01-10T12:00:00-03:00"

    first = reconcile_category(category, now)
    assert first is not category
    assert first.tasks[0].completed is False

    assert reconcile_category(first, now) is first
    assert reconcile_category(first, "2024-01-14T23:59:00-03:00") is first


def test_reconcile_all_leaves_permanent_categories_alone() -> None:
    permanent = Category(
        title="Goals",
        description="",
        reset_type=ScheduleKind.NONE,
        tasks=(_task(1, completed=True, history=()),),
    )
    daily = Category(title="Dailies", description="", reset_type=ScheduleKind.DAILY)

    out = reconcile_all({"goals": permanent, "daily": daily}, "2024-01-03T12:00:00-03:00")

    assert out["goals"] is permanent
    assert out["daily"].last_reset_time == "2024-01-03T15:00:00.000Z"
