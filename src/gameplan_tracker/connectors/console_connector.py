# src/gameplan_tracker/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading

from ..cli.commands import registry as command_registry
from ..cli.formatting import format_local
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local(state: AppState) -> str:
    # Clock-now, so a virtual clock is visible on every line.
    return format_local(state.tracker.clock.now())


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[str | None]) -> None:
    """
    Read stdin lines in a daemon thread and hand them to the event loop.

    The thread only enqueues text; every state mutation still runs on the loop thread.
    None is enqueued on EOF / Ctrl+C.
    """

    def _put(item: str | None) -> None:
        with contextlib.suppress(RuntimeError):
            # Loop already closed during shutdown.
            loop.call_soon_threadsafe(queue.put_nowait, item)

    def _reader() -> None:
        while True:
            try:
                line = input()
            except (EOFError, KeyboardInterrupt):
                _put(None)
                return
            _put(line)

    threading.Thread(target=_reader, name="console-stdin", daemon=True).start()


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    print(f"[{_ts_local(state)}] [CONSOLE] Use /help for commands, /list to see tasks, /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local(state)}] {text}", flush=True)

    queue: asyncio.Queue[str | None] = asyncio.Queue()
    _start_stdin_reader(asyncio.get_running_loop(), queue)

    while True:
        print(">>> ", end="", flush=True)
        raw = await queue.get()
        if raw is None:
            logger.info("Console EOF received, exiting.")
            print()
            break

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            cmd_response = "Commands start with '/'. Use /help to list them."

        print(f"[{_ts_local(state)}] {cmd_response}\n")

    logger.info("Console connector finished.")
