# src/gameplan_tracker/core/errors.py

from __future__ import annotations


class GameplanError(Exception):
    """Base class for tracker errors."""


class InvalidInstant(GameplanError, ValueError):
    """An instant could not be parsed or is not a datetime/ISO string."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid instant: {value!r}")
        self.value = value


class StateFormatError(GameplanError, ValueError):
    """Persisted state blob is structurally invalid."""


class UnknownCategory(GameplanError, KeyError):
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown category: {self.key}"


class UnknownTask(GameplanError, KeyError):
    def __init__(self, category_key: str, task_id: int) -> None:
        super().__init__(task_id)
        self.category_key = category_key
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Unknown task {self.task_id} in category {self.category_key}"
