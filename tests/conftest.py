# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from gameplan_tracker.cli.bootstrap import create_initial_state
from gameplan_tracker.core.clock import Clock, ClockOverride
from gameplan_tracker.core.state import AppState

from .fakes import FakeStateRepo

# Wednesday 2024-01-03 12:00 local (UTC-3).
NOW = "2024-01-03T12:00:00-03:00"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="gameplan-test",
        log_level="DEBUG",
        console_enabled=False,
        # Paths (tmp per test run)
        data_dir=tmp_path,
        state_path=tmp_path / "gameplan_data.json",
        clock_path=tmp_path / "clock_override.json",
        reset_interval_seconds=0.01,
        history_weeks=8,
    )


@pytest.fixture()
def virtual_clock() -> Clock:
    return Clock(ClockOverride(use_override=True, override_instant=NOW))


@pytest.fixture()
def repo() -> FakeStateRepo:
    return FakeStateRepo(override=ClockOverride(use_override=True, override_instant=NOW))


@pytest.fixture()
def state(settings: SimpleNamespace, repo: FakeStateRepo) -> AppState:
    """
    AppState wired with the in-memory repo and a virtual clock pinned at NOW.

    NOTE: startup reconciliation has already run (default categories are reset).
    """
    return create_initial_state(settings=settings, store=repo)
