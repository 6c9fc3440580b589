# src/gameplan_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps persistence swappable and makes testing easier.
"""

from collections.abc import Mapping
from typing import Protocol

from .clock import ClockOverride
from .models import Category


class LoadResult(Protocol):
    categories: dict[str, Category]
    warning: str | None


class StateRepo(Protocol):
    """
    Where the category map and the clock override live between runs.

    Only the shape is fixed (see models.Category.to_dict); how bytes reach disk is up to
    the implementation. Loading never raises on bad content: it falls back to defaults
    and reports a warning instead.
    """

    def load_categories(self) -> LoadResult: ...
    def save_categories(self, categories: Mapping[str, Category]) -> None: ...

    def load_clock_override(self) -> ClockOverride: ...
    def save_clock_override(self, override: ClockOverride) -> None: ...
