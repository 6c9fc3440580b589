# src/gameplan_tracker/storage/state_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.clock import ClockOverride
from ..core.defaults import default_categories
from ..core.models import Category, categories_from_dict, categories_to_dict

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoadResult:
    categories: dict[str, Category]
    warning: str | None = None


class StateStore:
    """
    JSON file store for the category map and the clock override.

    - missing file -> absent state (defaults, no warning)
    - unreadable / malformed file -> defaults + warning; no partial recovery
    - writes go to a .tmp sibling first, then os.replace
    """

    def __init__(self, state_path: str | Path, clock_path: str | Path) -> None:
        self._state_path = Path(state_path)
        self._clock_path = Path(clock_path)

    @property
    def state_path(self) -> Path:
        return self._state_path

    # ---- categories ----

    def load_categories(self) -> LoadResult:
        path = self._state_path
        if not path.exists():
            logger.info("No saved state at %s; using default categories.", path)
            return LoadResult(categories=default_categories())

        try:
            categories = categories_from_dict(json.loads(path.read_text("utf-8")))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and StateFormatError are both ValueErrors.
            warning = f"Failed to load saved state from {path}: {e}"
            logger.warning("%s; falling back to default categories.", warning)
            return LoadResult(categories=default_categories(), warning=warning)

        logger.info(
            "Loaded state: %d categories, %d tasks from %s",
            len(categories),
            sum(len(c.tasks) for c in categories.values()),
            path,
        )
        return LoadResult(categories=categories)

    def save_categories(self, categories: Mapping[str, Category]) -> None:
        try:
            self._write_json(self._state_path, categories_to_dict(categories))
            logger.debug("Saved state: %d categories to %s", len(categories), self._state_path)
        except Exception:
            logger.exception("Failed to save state to %s", self._state_path)

    # ---- clock override ----

    def load_clock_override(self) -> ClockOverride:
        path = self._clock_path
        if not path.exists():
            return ClockOverride()
        try:
            override = ClockOverride.from_dict(json.loads(path.read_text("utf-8")))
        except (OSError, ValueError) as e:
            logger.warning("Failed to load clock override from %s: %s; using wall clock.", path, e)
            return ClockOverride()
        if override.use_override:
            logger.info("Virtual clock active: %s", override.override_instant)
        return override

    def save_clock_override(self, override: ClockOverride) -> None:
        try:
            self._write_json(self._clock_path, override.to_dict())
        except Exception:
            logger.exception("Failed to save clock override to %s", self._clock_path)

    # ---- helpers ----

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
