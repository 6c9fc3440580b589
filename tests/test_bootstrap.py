# tests/test_bootstrap.py

from __future__ import annotations

import json

from gameplan_tracker.cli.bootstrap import create_initial_state, save_state
from gameplan_tracker.core.clock import ClockOverride

from .conftest import NOW
from .fakes import FakeStateRepo


def test_startup_reconciles_and_persists(state, repo: FakeStateRepo) -> None:
    daily = state.tracker.category("coffeeDailies")
    assert daily.last_reset_time == "2024-01-03T15:00:00.000Z"
    assert repo.saved, "Startup reset should be persisted through on_change"
    assert state.load_warnings == []


def test_load_warning_is_reported_not_raised(settings) -> None:
    repo = FakeStateRepo(warning="Failed to load saved state: boom")
    state = create_initial_state(settings=settings, store=repo)

    assert state.load_warnings == ["Failed to load saved state: boom"]
    assert set(state.tracker.categories) == {"coffeeWeeklies", "coffeeDailies", "gamingDailies", "workingGoals"}


def test_real_store_survives_corrupted_file(settings) -> None:
    settings.state_path.write_text("{broken", "utf-8")
    settings.clock_path.write_text(
        json.dumps(ClockOverride(use_override=True, override_instant=NOW).to_dict()), "utf-8"
    )

    state = create_initial_state(settings=settings)

    assert len(state.load_warnings) == 1
    assert state.tracker.clock.is_virtual

    # The first reset after fallback overwrites the corrupted file with valid state.
    blob = json.loads(settings.state_path.read_text("utf-8"))
    assert blob["coffeeDailies"]["lastResetTime"] == "2024-01-03T15:00:00.000Z"

    save_state(state)
    assert json.loads(settings.clock_path.read_text("utf-8"))["useOverride"] is True
