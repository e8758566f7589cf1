# src/taskminder/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import timedelta
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import create_task_from_form, resolve_task_id
from ..tasks.task_models import InvalidInput

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

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
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _looks_like_int(text: str) -> bool:
    return text.lstrip("-").isdigit()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    engine = state.engine
    return (
        "Status:\n"
        f"  Engine: {engine.state.value} (every {engine.interval_seconds:g}s)\n"
        f"  Tasks: {len(state.task_store)}\n"
        f"  Notifications: {len(state.notifier.history())}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add YYYY-MM-DD HH:MM [lead_minutes] title [| description]

    The lead defaults to settings.default_lead_minutes when the third token is
    not a number.
    """
    if len(args) < 3:
        return "Usage: /add YYYY-MM-DD HH:MM [lead_minutes] title [| description]"

    due_text = f"{args[0]} {args[1]}"
    rest = args[2:]
    lead_text = str(getattr(state.settings, "default_lead_minutes", 30))
    if rest and _looks_like_int(rest[0]):
        lead_text, rest = rest[0], rest[1:]

    title, _, description = " ".join(rest).partition("|")

    try:
        task = create_task_from_form(
            state.task_store,
            title=title,
            description=description,
            due_text=due_text,
            lead_text=lead_text,
            now=state.clock.now(),
        )
    except InvalidInput as e:
        return str(e)

    return f"Task created with ID: {task.id}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.all_sorted_by_due()
    if not tasks:
        return "No tasks available."
    return "\n\n".join(t.describe() for t in tasks)


def cmd_done(state: AppState, args: list[str]) -> str:
    try:
        task_id = resolve_task_id(args[0] if args else None)
    except InvalidInput as e:
        return str(e)
    task = state.task_store.mark_complete(task_id)
    return "Task marked complete." if task is not None else "Task ID not found."


def cmd_remove(state: AppState, args: list[str]) -> str:
    try:
        task_id = resolve_task_id(args[0] if args else None)
    except InvalidInput as e:
        return str(e)
    removed = state.task_store.remove(task_id)
    return "Task removed." if removed else "Task ID not found."


def cmd_upcoming(state: AppState, args: list[str]) -> str:
    """
    /upcoming            -> reminders due in the default window (60 minutes)
    /upcoming <minutes>  -> custom window
    """
    minutes = int(getattr(state.settings, "upcoming_window_minutes", 60))
    if args:
        if not args[0].isdigit():
            return "Usage: /upcoming [minutes]"
        minutes = int(args[0])

    try:
        window = timedelta(minutes=minutes)
    except OverflowError:
        window = timedelta.max
    upcoming = state.task_store.due_within(window, now=state.clock.now())
    if not upcoming:
        if minutes == 60:
            return "No reminders due in the next hour."
        return f"No reminders due in the next {minutes} minutes."

    lines = [f"Reminders within {minutes} minutes:"]
    for task in upcoming:
        lines.append(f" - {task.summary_line()}")
    return "\n".join(lines)


def cmd_notifications(state: AppState, args: list[str]) -> str:
    history = state.notifier.history()
    if not history:
        return "No notifications yet."
    return "\n".join(history)


def cmd_clear(state: AppState, args: list[str]) -> str:
    state.notifier.clear()
    return "Notifications cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show engine state and task count.")
registry.register(
    "add",
    cmd_add,
    help_text="Create a task: /add YYYY-MM-DD HH:MM [lead_minutes] title [| description].",
    aliases=["new"],
)
registry.register("list", cmd_list, help_text="List all tasks by due date.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Mark a task complete: /done <id>.")
registry.register("remove", cmd_remove, help_text="Remove a task: /remove <id>.", aliases=["rm"])
registry.register(
    "upcoming", cmd_upcoming, help_text="Reminders due soon: /upcoming [minutes] (default 60)."
)
registry.register("notifications", cmd_notifications, help_text="Show notification history.")
registry.register("clear", cmd_clear, help_text="Clear notification history.")
