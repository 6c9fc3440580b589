# src/gameplan_tracker/core/tracker.py

from __future__ import annotations

"""
Tracker controller.

Owns the one shared mutable resource: the category map. Every operation reads the
current map, computes a new one and swaps it in with a single assignment, so readers
never see a half-applied update. Execution is single-threaded (one event loop), which
keeps toggles and scheduled reconciliations strictly ordered without locks.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from types import MappingProxyType

from .clock import Clock, ClockOverride
from .errors import UnknownCategory, UnknownTask
from .ledger import toggle_task as _toggle_task
from .models import Category, Task
from .reset import reconcile_all

logger = logging.getLogger(__name__)

ChangeHook = Callable[[Mapping[str, Category]], None]


class Tracker:
    def __init__(
        self,
        categories: Mapping[str, Category],
        clock: Clock,
        *,
        on_change: ChangeHook | None = None,
    ) -> None:
        self._categories: dict[str, Category] = dict(categories)
        self._clock = clock
        self._on_change = on_change

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def categories(self) -> Mapping[str, Category]:
        return MappingProxyType(self._categories)

    def category(self, key: str) -> Category:
        try:
            return self._categories[key]
        except KeyError:
            raise UnknownCategory(key) from None

    def task(self, key: str, task_id: int) -> Task:
        task = self.category(key).find_task(task_id)
        if task is None:
            raise UnknownTask(key, task_id)
        return task

    # ---- reset ----

    def reconcile(self) -> list[str]:
        """Run one reconciliation pass at clock-now. Returns the keys that were reset."""
        now = self._clock.now()
        updated = reconcile_all(self._categories, now)
        reset_keys = [k for k, cat in updated.items() if cat is not self._categories.get(k)]
        if reset_keys:
            self._commit(updated)
        return reset_keys

    def set_clock_override(self, override: ClockOverride) -> list[str]:
        """Change the virtual clock and reconcile before anyone reads state again."""
        self._clock.set_override(override)
        logger.info(
            "Clock override changed use_override=%s instant=%s",
            override.use_override,
            override.override_instant,
        )
        return self.reconcile()

    # ---- task mutations ----

    def add_task(self, key: str, text: str) -> Task | None:
        text = text.strip()
        if not text:
            return None

        category = self.category(key)
        now = self._clock.now()

        task_id = int(now.timestamp() * 1000)
        existing = {t.id for t in category.tasks}
        while task_id in existing:
            task_id += 1

        task = Task(id=task_id, text=text, created_at=self._clock.now_iso())
        self._replace_category(key, replace(category, tasks=(*category.tasks, task)))
        logger.debug("Added task id=%s category=%s", task_id, key)
        return task

    def toggle_task(self, key: str, task_id: int) -> Task:
        category = self.category(key)
        updated = _toggle_task(self.task(key, task_id), category.reset_type, self._clock.now())
        self._replace_task(key, updated)
        logger.debug("Toggled task id=%s category=%s completed=%s", task_id, key, updated.completed)
        return updated

    def edit_task(self, key: str, task_id: int, text: str) -> Task | None:
        text = text.strip()
        if not text:
            return None
        updated = replace(self.task(key, task_id), text=text)
        self._replace_task(key, updated)
        return updated

    def delete_task(self, key: str, task_id: int) -> None:
        category = self.category(key)
        self.task(key, task_id)
        tasks = tuple(t for t in category.tasks if t.id != task_id)
        self._replace_category(key, replace(category, tasks=tasks))

    def reorder_tasks(self, key: str, from_index: int, to_index: int) -> None:
        category = self.category(key)
        tasks = list(category.tasks)
        if not (0 <= from_index < len(tasks)) or not (0 <= to_index < len(tasks)):
            raise IndexError(f"Reorder indices out of range: {from_index} -> {to_index}")
        moved = tasks.pop(from_index)
        tasks.insert(to_index, moved)
        self._replace_category(key, replace(category, tasks=tuple(tasks)))

    def clear_completion_history(self) -> None:
        """Forget every completion in every category (flags, last_completed, history)."""
        updated = {
            key: replace(
                cat,
                tasks=tuple(
                    replace(t, completed=False, last_completed=None, completion_history=())
                    for t in cat.tasks
                ),
            )
            for key, cat in self._categories.items()
        }
        self._commit(updated)
        logger.info("Cleared completion history for %d categories", len(updated))

    # ---- internals ----

    def _replace_task(self, key: str, task: Task) -> None:
        category = self.category(key)
        tasks = tuple(task if t.id == task.id else t for t in category.tasks)
        self._replace_category(key, replace(category, tasks=tasks))

    def _replace_category(self, key: str, category: Category) -> None:
        updated = dict(self._categories)
        updated[key] = category
        self._commit(updated)

    def _commit(self, categories: dict[str, Category]) -> None:
        self._categories = categories
        if self._on_change is not None:
            self._on_change(self.categories)
