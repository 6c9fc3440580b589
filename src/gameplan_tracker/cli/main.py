# src/gameplan_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (which reconciles once against persisted state),
then runs on a single event loop:
- the reset scheduler (periodic reconciliation),
- the console REPL (optional).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_initial_state, save_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import bind_clock, setup_logging
from ..tasks.reset_scheduler import run_reset_scheduler

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        save_state(state)
    except Exception:
        logger.exception("Failed to save state on shutdown.")


async def _run(state: AppState) -> None:
    settings = state.settings

    def _announce_reset(keys: list[str]) -> None:
        print(f"\n[RESET] New period for: {', '.join(keys)}", flush=True)

    scheduler = asyncio.create_task(
        run_reset_scheduler(
            state.tracker,
            interval_seconds=settings.reset_interval_seconds,
            on_reset=_announce_reset if settings.console_enabled else None,
        ),
        name="reset-scheduler",
    )

    try:
        if settings.console_enabled:
            await run_console_loop(state)
        else:
            logger.info("Console disabled. Running reset scheduler only. Press Ctrl+C to stop.")
            stop = asyncio.Event()
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                # Some platforms do not support signal handlers on the loop.
                with contextlib.suppress(NotImplementedError, RuntimeError):
                    loop.add_signal_handler(sig, stop.set)
            await stop.wait()
    finally:
        scheduler.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await scheduler


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    bind_clock(state.tracker.clock)
    for warning in state.load_warnings:
        logger.warning("Startup: %s", warning)

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
