# src/gameplan_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .ports import StateRepo
from .tracker import Tracker


@dataclass
class AppState:
    # Settings object (real Settings or a SimpleNamespace in tests).
    settings: Any

    tracker: Tracker
    store: StateRepo

    # Non-fatal problems found while loading (e.g. corrupted state file).
    load_warnings: list[str] = field(default_factory=list)
