# src/gameplan_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the state store, clock and tracker into AppState,
- runs the startup reconciliation against persisted state.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import Clock
from ..core.ports import StateRepo
from ..core.state import AppState
from ..core.tracker import Tracker
from ..storage.state_store import StateStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.state_path.parent.mkdir(parents=True, exist_ok=True)
    settings.clock_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, store: StateRepo | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store) injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        _ensure_local_dirs(settings)
        store = StateStore(settings.state_path, settings.clock_path)

    loaded = store.load_categories()
    clock = Clock(store.load_clock_override())
    tracker = Tracker(loaded.categories, clock, on_change=store.save_categories)

    state = AppState(settings=settings, tracker=tracker, store=store)
    if loaded.warning:
        state.load_warnings.append(loaded.warning)

    reset_keys = tracker.reconcile()
    logger.info(
        "Tracker ready: %d categories, startup reset=%s",
        len(tracker.categories),
        ", ".join(reset_keys) or "none",
    )
    return state


def save_state(state: AppState) -> None:
    state.store.save_categories(state.tracker.categories)
    state.store.save_clock_override(state.tracker.clock.override)
