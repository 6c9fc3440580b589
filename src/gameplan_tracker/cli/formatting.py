# src/gameplan_tracker/cli/formatting.py

from __future__ import annotations

from datetime import datetime

from ..core.calendar import Instant, parse_instant, to_local
from ..core.models import Category, ScheduleKind, Task
from ..core.reset import time_until_reset
from ..core.streaks import daily_streak, month_grid, weekly_streak, weeks_for_display

WEEKDAY_HEADER = "Mo  Tu  We  Th  Fr  Sa  Su"


def format_local(instant: Instant) -> str:
    """e.g. "Jan 2, 10:30 AM" in game-local time."""
    dt = to_local(instant)
    return f"{dt:%b} {dt.day}, {dt:%I:%M %p}"


def format_timestamp(instant: Instant, now: Instant) -> str:
    """Relative + absolute, e.g. "5m ago (Jan 2, 10:30 AM)"."""
    diff_s = (parse_instant(now) - parse_instant(instant)).total_seconds()
    mins = int(diff_s // 60)
    hours = int(diff_s // 3600)
    days = int(diff_s // 86400)

    if mins < 1:
        relative = "just now"
    elif mins < 60:
        relative = f"{mins}m ago"
    elif hours < 24:
        relative = f"{hours}h ago"
    else:
        relative = f"{days}d ago"

    return f"{relative} ({format_local(instant)})"


def task_streak(task: Task, kind: ScheduleKind, now: datetime, history_weeks: int) -> int:
    if kind == ScheduleKind.WEEKLY:
        weeks = weeks_for_display(task.completion_history, now, history_weeks)
        return weekly_streak(task.completion_history, weeks)
    if kind == ScheduleKind.DAILY:
        return daily_streak(task.completion_history, now, task.created_at)
    return 0


def render_category(key: str, category: Category, now: datetime, history_weeks: int) -> str:
    countdown = time_until_reset(category.reset_type, now)
    header = f"{category.title} [{key}] ({category.reset_type.value})"
    if countdown is not None:
        header += f" - resets in {countdown}"

    lines = [header]
    if category.description:
        lines.append(f"  {category.description}")
    if not category.tasks:
        lines.append("  (no tasks)")

    for i, task in enumerate(category.tasks, start=1):
        mark = "x" if task.completed else " "
        line = f"  {i}. [{mark}] #{task.id} {task.text}"

        streak = task_streak(task, category.reset_type, now, history_weeks)
        if streak > 0:
            unit = "week" if category.reset_type == ScheduleKind.WEEKLY else "day"
            line += f"  streak {streak} {unit}{'' if streak == 1 else 's'}"
        if task.last_completed:
            line += f"  last: {format_timestamp(task.last_completed, now)}"
        lines.append(line)

    return "\n".join(lines)


def render_history(task: Task, kind: ScheduleKind, now: datetime, history_weeks: int) -> str:
    if kind == ScheduleKind.NONE:
        return f"#{task.id} {task.text}: no history for tasks that never reset."

    streak = task_streak(task, kind, now, history_weeks)
    lines = [f"#{task.id} {task.text} - current streak: {streak}"]

    if kind == ScheduleKind.WEEKLY:
        for week in weeks_for_display(task.completion_history, now, history_weeks):
            mark = "x" if week.completed else " "
            suffix = " (current)" if week.is_current else ""
            lines.append(f"  [{mark}] {week.label}{suffix}")
        return "\n".join(lines)

    grid = month_grid(task.completion_history, now)
    lines.append(f"  {grid.days[0].day:%B %Y}")
    lines.append(f"  {WEEKDAY_HEADER}")

    cells = ["    "] * grid.leading_blanks
    for day in grid.days:
        if day.completed:
            marker = "*"
        elif day.is_today:
            marker = "<"
        elif day.is_future:
            marker = " "
        else:
            marker = "."
        cells.append(f"{day.day.day:2d}{marker} ")

    for start in range(0, len(cells), 7):
        lines.append("  " + "".join(cells[start:start + 7]).rstrip())
    lines.append("  (* done, . missed, < today)")
    return "\n".join(lines)
