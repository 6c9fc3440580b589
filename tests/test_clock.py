# tests/test_clock.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from gameplan_tracker.core.clock import Clock, ClockOverride
from gameplan_tracker.core.errors import InvalidInstant, StateFormatError


def test_wall_clock_when_override_disabled() -> None:
    fixed = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    clock = Clock(ClockOverride(use_override=False, override_instant="2020-01-01T00:00:00Z"), wall=lambda: fixed)

    assert clock.now() == fixed
    assert not clock.is_virtual


def test_override_takes_precedence() -> None:
    clock = Clock(wall=lambda: datetime(2024, 5, 1, tzinfo=UTC))
    clock.set_override(ClockOverride(use_override=True, override_instant="2024-01-08T04:30:00-03:00"))

    assert clock.is_virtual
    assert clock.now_iso() == "2024-01-08T07:30:00.000Z"


def test_enabled_override_needs_valid_instant() -> None:
    with pytest.raises(InvalidInstant):
        ClockOverride(use_override=True)
    with pytest.raises(InvalidInstant):
        ClockOverride(use_override=True, override_instant="later")


def test_override_from_dict() -> None:
    raw = {"useOverride": True, "overrideInstant": "2024-01-08T07:30:00.000Z"}
    assert ClockOverride.from_dict(raw).to_dict() == raw
    with pytest.raises(StateFormatError):
        ClockOverride.from_dict({"useOverride": "yes"})
