# src/gameplan_tracker/tasks/reset_scheduler.py

from __future__ import annotations

"""
Reset scheduler.

A small polling loop that asks the tracker to reconcile every category on a fixed
cadence. Boundaries have minute granularity, so once per minute is enough.

Missed ticks (suspended process, slow loop) need no special handling: each pass
compares absolute boundaries, so one pass catches up every elapsed period.
"""

import asyncio
import logging
from collections.abc import Callable

from ..core.tracker import Tracker

logger = logging.getLogger(__name__)

ResetCallback = Callable[[list[str]], None]


def run_reset_tick(tracker: Tracker, on_reset: ResetCallback | None = None) -> list[str]:
    """One reconciliation pass. Failures are logged and reported as "nothing reset"."""
    try:
        reset_keys = tracker.reconcile()
    except Exception:
        logger.exception("reconcile failed")
        return []

    if reset_keys:
        logger.info("Reset categories: %s", ", ".join(reset_keys))
        if on_reset is not None:
            try:
                on_reset(reset_keys)
            except Exception:
                logger.exception("on_reset callback failed keys=%s", reset_keys)
    return reset_keys


async def run_reset_scheduler(
        tracker: Tracker,
        *,
        interval_seconds: float = 60.0,
        on_reset: ResetCallback | None = None,
) -> None:
    """
    Simple polling scheduler.

    Every interval_seconds:
    - reconcile all categories against clock-now
    - report which categories were reset (log + optional callback)

    To stop the scheduler, cancel the coroutine/task. Cancelling between ticks has
    no side effects: a tick only performs idempotent reconciliation.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        run_reset_tick(tracker, on_reset)
        await asyncio.sleep(sleep_s)
