# src/gameplan_tracker/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.calendar import format_instant, parse_instant
from ..core.clock import ClockOverride
from ..core.errors import GameplanError, InvalidInstant
from ..core.state import AppState
from .formatting import format_local, render_category, render_history

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except GameplanError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_ref(args: list[str]) -> tuple[str, int] | None:
    if len(args) < 2:
        return None
    try:
        return args[0], int(args[1])
    except ValueError:
        return None


def _history_weeks(state: AppState) -> int:
    return int(getattr(state.settings, "history_weeks", 8))


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    clock = state.tracker.clock
    now = clock.now()
    mode = "VIRTUAL" if clock.is_virtual else "WALL"
    lines = [
        "Status:",
        f"  Clock: {mode} {format_instant(now)} (local {format_local(now)})",
        f"  Categories: {len(state.tracker.categories)}",
    ]
    store_path = getattr(state.store, "state_path", None)
    if store_path is not None:
        lines.append(f"  State file: {store_path}")
    for warning in state.load_warnings:
        lines.append(f"  Warning: {warning}")
    return "\n".join(lines)


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list        -> every category
    /list <key>  -> one category
    """
    tracker = state.tracker
    now = tracker.clock.now()
    weeks = _history_weeks(state)

    if args:
        key = args[0]
        return render_category(key, tracker.category(key), now, weeks)

    return "\n\n".join(
        render_category(key, cat, now, weeks) for key, cat in tracker.categories.items()
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /add <category> <text>"
    task = state.tracker.add_task(args[0], " ".join(args[1:]))
    if task is None:
        return "Task text is empty; nothing added."
    return f"Added #{task.id} to {args[0]}: {task.text}"


def cmd_done(state: AppState, args: list[str]) -> str:
    ref = _task_ref(args)
    if ref is None:
        return "Usage: /done <category> <task_id>"
    task = state.tracker.toggle_task(*ref)
    return f"#{task.id} {task.text}: {'done' if task.completed else 'not done'}."


def cmd_del(state: AppState, args: list[str]) -> str:
    ref = _task_ref(args)
    if ref is None:
        return "Usage: /del <category> <task_id>"
    state.tracker.delete_task(*ref)
    return f"Deleted #{ref[1]} from {ref[0]}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    ref = _task_ref(args)
    if ref is None or len(args) < 3:
        return "Usage: /edit <category> <task_id> <new text>"
    task = state.tracker.edit_task(*ref, " ".join(args[2:]))
    if task is None:
        return "Task text is empty; nothing changed."
    return f"#{task.id} is now: {task.text}"


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <category> <from> <to>  (1-based positions as shown by /list)"""
    if len(args) != 3:
        return "Usage: /move <category> <from> <to>"
    try:
        src, dst = int(args[1]) - 1, int(args[2]) - 1
    except ValueError:
        return "Positions must be numbers."
    try:
        state.tracker.reorder_tasks(args[0], src, dst)
    except IndexError as e:
        return str(e)
    return f"Moved task {args[1]} -> {args[2]} in {args[0]}."


def cmd_history(state: AppState, args: list[str]) -> str:
    ref = _task_ref(args)
    if ref is None:
        return "Usage: /history <category> <task_id>"
    key, task_id = ref
    category = state.tracker.category(key)
    task = state.tracker.task(key, task_id)
    return render_history(task, category.reset_type, state.tracker.clock.now(), _history_weeks(state))


def apply_clock_override(state: AppState, override: ClockOverride) -> list[str]:
    """Switch the virtual clock, reconcile immediately, and persist the override."""
    reset_keys = state.tracker.set_clock_override(override)
    state.store.save_clock_override(override)
    return reset_keys


def cmd_clock(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /clock              -> show clock mode
    /clock on           -> use the virtual clock (keeps the stored instant)
    /clock off          -> back to wall clock
    /clock set <iso>    -> set and enable the virtual clock
    """
    clock = state.tracker.clock
    current = clock.override

    if not args:
        if clock.is_virtual:
            return f"Virtual clock ON at {current.override_instant}. Use /clock off to return to wall time."
        return "Wall clock in use. Use /clock set <iso> to preview another time."

    sub = args[0].lower()
    if sub == "on":
        instant = current.override_instant or clock.now_iso()
        override = ClockOverride(use_override=True, override_instant=instant)
    elif sub == "off":
        override = ClockOverride(use_override=False, override_instant=current.override_instant)
    elif sub == "set" and len(args) >= 2:
        raw = " ".join(args[1:])
        try:
            instant = format_instant(parse_instant(raw))
        except InvalidInstant:
            return f"Not a valid ISO-8601 instant: {raw}"
        override = ClockOverride(use_override=True, override_instant=instant)
    else:
        return "Usage: /clock on | /clock off | /clock set <iso>"

    logger.debug("Clock override requested: %s", override)
    reset_keys = apply_clock_override(state, override)

    if reset_keys and emit:
        with contextlib.suppress(Exception):
            emit(f"[RESET] {', '.join(reset_keys)}")

    now = clock.now()
    mode = "Virtual" if clock.is_virtual else "Wall"
    return f"{mode} clock now {format_instant(now)} (local {format_local(now)})."


def cmd_clear(state: AppState, args: list[str]) -> str:
    """/clear confirm -> wipe completion flags, last-completed and history everywhere"""
    if not args or args[0].lower() != "confirm":
        return "This clears all completion history. Type /clear confirm to proceed."
    state.tracker.clear_completion_history()
    return "Completion history cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show clock mode and state file.")
registry.register("list", cmd_list, help_text="List tasks: /list [category].", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <category> <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <category> <id>.", aliases=["toggle"])
registry.register("del", cmd_del, help_text="Delete a task: /del <category> <id>.", aliases=["rm"])
registry.register("edit", cmd_edit, help_text="Edit text: /edit <category> <id> <text>.")
registry.register("move", cmd_move, help_text="Reorder: /move <category> <from> <to>.")
registry.register("history", cmd_history, help_text="Habit history: /history <category> <id>.")
registry.register("clock", cmd_clock, help_text="Virtual clock: /clock on | off | set <iso>.")
registry.register("clear", cmd_clear, help_text="Clear all completion history: /clear confirm.")
