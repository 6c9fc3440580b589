# src/gameplan_tracker/core/clock.py

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .calendar import format_instant, parse_instant
from .errors import InvalidInstant, StateFormatError


def wall_clock() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ClockOverride:
    """Operator-supplied "now" (virtual clock) for previewing schedule behavior."""

    use_override: bool = False
    override_instant: str | None = None

    def __post_init__(self) -> None:
        if self.use_override and self.override_instant is None:
            raise InvalidInstant(None)
        if self.override_instant is not None:
            parse_instant(self.override_instant)

    def to_dict(self) -> dict[str, Any]:
        return {"useOverride": self.use_override, "overrideInstant": self.override_instant}

    @classmethod
    def from_dict(cls, raw: Any) -> ClockOverride:
        if not isinstance(raw, Mapping):
            raise StateFormatError("Clock override must be an object")
        use_override = raw.get("useOverride", False)
        if not isinstance(use_override, bool):
            raise StateFormatError("useOverride must be a boolean")
        instant = raw.get("overrideInstant")
        if instant is not None and not isinstance(instant, str):
            raise StateFormatError("overrideInstant must be an ISO-8601 string")
        try:
            return cls(use_override=use_override, override_instant=instant)
        except InvalidInstant as e:
            raise StateFormatError(str(e)) from e


class Clock:
    """
    Supplies "now" to every other component.

    This is the only place in the package that reads the system clock. Everything
    downstream takes explicit instants.
    """

    def __init__(
        self,
        override: ClockOverride | None = None,
        *,
        wall: Callable[[], datetime] = wall_clock,
    ) -> None:
        self._override = override or ClockOverride()
        self._wall = wall

    @property
    def override(self) -> ClockOverride:
        return self._override

    @property
    def is_virtual(self) -> bool:
        return self._override.use_override

    def set_override(self, override: ClockOverride) -> None:
        self._override = override

    def now(self) -> datetime:
        if self._override.use_override and self._override.override_instant is not None:
            return parse_instant(self._override.override_instant)
        return parse_instant(self._wall())

    def now_iso(self) -> str:
        return format_instant(self.now())
