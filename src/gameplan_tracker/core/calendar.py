# src/gameplan_tracker/core/calendar.py

from __future__ import annotations

"""
Game calendar.

Pure mapping of instants to game periods at a fixed UTC-3 offset:
- a game-day rolls over at 21:00 local (21:00-23:59 already counts toward tomorrow),
- a game-week starts Monday 04:30 local (closed on the start side, open on the end side).

Period identifiers are a game-day's local midnight serialized as a UTC ISO string
with milliseconds, e.g. "2024-01-01T03:00:00.000Z".

Nothing here reads the system clock: callers pass instants explicitly.
"""

from datetime import UTC, date, datetime, time, timedelta, timezone

from dateutil.parser import isoparse
from dateutil.relativedelta import MO, relativedelta

from .errors import InvalidInstant

UTC_OFFSET_MINUTES = -180
GAME_TZ = timezone(timedelta(minutes=UTC_OFFSET_MINUTES), "UTC-03:00")

DAILY_RESET_TIME = time(21, 0)
WEEKLY_RESET_TIME = time(4, 30)

Instant = str | datetime
PeriodId = str


# Keeps every derived value (local time, next game-day, week start and its 7 days)
# inside datetime's representable range.
_RANGE_MARGIN = timedelta(days=14)
MIN_INSTANT = datetime.min.replace(tzinfo=UTC) + _RANGE_MARGIN
MAX_INSTANT = datetime.max.replace(tzinfo=UTC) - _RANGE_MARGIN


def parse_instant(value: Instant) -> datetime:
    """
    Normalize an ISO string or datetime to an aware UTC datetime.

    Naive inputs are interpreted as UTC. Anything else, including instants too close
    to the ends of the datetime range to be mapped onto game periods, raises
    InvalidInstant.
    """
    if not isinstance(value, (str, datetime)):
        raise InvalidInstant(value)

    try:
        dt = value if isinstance(value, datetime) else isoparse(value.strip())
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        dt = dt.astimezone(UTC)
    except (ValueError, OverflowError) as e:
        raise InvalidInstant(value) from e

    if not MIN_INSTANT <= dt <= MAX_INSTANT:
        raise InvalidInstant(value)
    return dt


def _format_utc(dt: datetime) -> str:
    dt = dt.astimezone(UTC)
    return f"{dt.year:04d}-{dt:%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"


def format_instant(value: Instant) -> str:
    """Serialize an instant as "YYYY-MM-DDTHH:MM:SS.mmmZ"."""
    return _format_utc(parse_instant(value))


def to_local(value: Instant) -> datetime:
    return parse_instant(value).astimezone(GAME_TZ)


def local_midnight(day: date) -> datetime:
    return datetime.combine(day, time(0), tzinfo=GAME_TZ)


def period_id(day: date) -> PeriodId:
    """Identifier of the game-day that falls on local calendar date `day`."""
    return _format_utc(local_midnight(day))


def game_date_of(instant: Instant) -> date:
    """Local calendar date of the game-day an instant counts toward."""
    local = to_local(instant)
    day = local.date()
    if local.time() >= DAILY_RESET_TIME:
        day += timedelta(days=1)
    return day


def game_day_of(instant: Instant) -> PeriodId:
    return period_id(game_date_of(instant))


def daily_boundary_at_or_before(instant: Instant) -> datetime:
    """Most recent 21:00 local at or before the instant."""
    local = to_local(instant)
    boundary = datetime.combine(local.date(), DAILY_RESET_TIME, tzinfo=GAME_TZ)
    if local < boundary:
        boundary -= timedelta(days=1)
    return boundary


def weekly_boundary_at_or_before(instant: Instant) -> datetime:
    """
    Most recent Monday 04:30 local at or before the instant.

    Monday before 04:30 belongs to the previous week; exactly 04:30:00.000 starts a new one.
    """
    local = to_local(instant)
    boundary = local + relativedelta(
        weekday=MO(-1),
        hour=WEEKLY_RESET_TIME.hour,
        minute=WEEKLY_RESET_TIME.minute,
        second=0,
        microsecond=0,
    )
    if boundary > local:
        boundary -= relativedelta(weeks=1)
    return boundary


def game_week_start(instant: Instant) -> date:
    """Local Monday that opens the game-week containing the instant."""
    return weekly_boundary_at_or_before(instant).date()


def week_start_id(instant: Instant) -> PeriodId:
    """Monday identifier used as the sentinel for "this week is represented"."""
    return period_id(game_week_start(instant))


def game_week_days(instant: Instant) -> list[PeriodId]:
    start = game_week_start(instant)
    return [period_id(start + timedelta(days=i)) for i in range(7)]
