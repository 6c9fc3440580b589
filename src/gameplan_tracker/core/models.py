# src/gameplan_tracker/core/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .calendar import parse_instant
from .errors import InvalidInstant, StateFormatError


class ScheduleKind(StrEnum):
    """How a category's tasks reset. Serialized as the persisted `resetType`."""

    DAILY = "daily"
    WEEKLY = "weekly"
    NONE = "none"

    @classmethod
    def from_raw(cls, raw: Any) -> ScheduleKind:
        try:
            return cls(raw)
        except ValueError as e:
            raise StateFormatError(f"Unknown resetType: {raw!r}") from e


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    text: str
    created_at: str

    # Transient: only meaningful until the next reset of the owning category.
    completed: bool = False
    last_completed: str | None = None

    # Period identifiers (game-day midnights), unique, order-irrelevant.
    completion_history: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
            "lastCompleted": self.last_completed,
            "completionHistory": list(self.completion_history),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        if not isinstance(raw, Mapping):
            raise StateFormatError(f"Task must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise StateFormatError(f"Task id must be an integer, got {task_id!r}")

        text = raw.get("text")
        if not isinstance(text, str):
            raise StateFormatError(f"Task {task_id} text must be a string")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise StateFormatError(f"Task {task_id} completed must be a boolean")

        history_raw = raw.get("completionHistory") or []
        if not isinstance(history_raw, list):
            raise StateFormatError(f"Task {task_id} completionHistory must be a list")

        return cls(
            id=task_id,
            text=text,
            created_at=_required_instant(raw.get("createdAt"), f"task {task_id} createdAt"),
            completed=completed,
            last_completed=_optional_instant(raw.get("lastCompleted"), f"task {task_id} lastCompleted"),
            # Older saves may list a period twice; keep the first occurrence.
            completion_history=tuple(
                dict.fromkeys(
                    _required_instant(item, f"task {task_id} completionHistory") for item in history_raw
                )
            ),
        )


@dataclass(frozen=True, slots=True)
class Category:
    title: str
    description: str
    reset_type: ScheduleKind
    tasks: tuple[Task, ...] = ()

    # None means "never reset"; the first reconciliation always resets.
    last_reset_time: str | None = None

    def find_task(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "resetType": self.reset_type.value,
            "lastResetTime": self.last_reset_time,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Category:
        if not isinstance(raw, Mapping):
            raise StateFormatError(f"Category must be an object, got {type(raw).__name__}")

        title = raw.get("title")
        description = raw.get("description", "")
        if not isinstance(title, str) or not isinstance(description, str):
            raise StateFormatError("Category title/description must be strings")

        tasks_raw = raw.get("tasks", [])
        if not isinstance(tasks_raw, list):
            raise StateFormatError(f"Category {title!r} tasks must be a list")

        return cls(
            title=title,
            description=description,
            reset_type=ScheduleKind.from_raw(raw.get("resetType")),
            tasks=tuple(Task.from_dict(t) for t in tasks_raw),
            last_reset_time=_optional_instant(raw.get("lastResetTime"), f"{title!r} lastResetTime"),
        )


def categories_from_dict(blob: Any) -> dict[str, Category]:
    """Parse the whole persisted blob. Any structural problem raises StateFormatError."""
    if not isinstance(blob, Mapping):
        raise StateFormatError(f"State must be an object, got {type(blob).__name__}")
    if not blob:
        raise StateFormatError("State has no categories")

    out: dict[str, Category] = {}
    for key, raw in blob.items():
        if not isinstance(key, str) or not key:
            raise StateFormatError(f"Invalid category key: {key!r}")
        out[key] = Category.from_dict(raw)
    return out


def categories_to_dict(categories: Mapping[str, Category]) -> dict[str, Any]:
    return {key: cat.to_dict() for key, cat in categories.items()}


def _required_instant(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise StateFormatError(f"{what} must be an ISO-8601 string, got {value!r}")
    try:
        parse_instant(value)
    except InvalidInstant as e:
        raise StateFormatError(f"{what} is not a valid instant: {value!r}") from e
    return value


def _optional_instant(value: Any, what: str) -> str | None:
    if value is None:
        return None
    return _required_instant(value, what)
