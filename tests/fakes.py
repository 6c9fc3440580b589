# tests/fakes.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from gameplan_tracker.core.clock import ClockOverride
from gameplan_tracker.core.defaults import default_categories
from gameplan_tracker.core.models import Category
from gameplan_tracker.storage.state_store import LoadResult


@dataclass
class FakeStateRepo:
    """
    In-memory StateRepo used by tracker/command tests.

    - Serves a fixed category map (defaults unless given)
    - Captures every save for assertions
    """

    categories: dict[str, Category] = field(default_factory=default_categories)
    warning: str | None = None
    override: ClockOverride = field(default_factory=ClockOverride)

    saved: list[dict[str, Category]] = field(default_factory=list)
    saved_overrides: list[ClockOverride] = field(default_factory=list)

    def load_categories(self) -> LoadResult:
        return LoadResult(categories=dict(self.categories), warning=self.warning)

    def save_categories(self, categories: Mapping[str, Category]) -> None:
        self.saved.append(dict(categories))

    def load_clock_override(self) -> ClockOverride:
        return self.override

    def save_clock_override(self, override: ClockOverride) -> None:
        self.saved_overrides.append(override)
