# src/taskminder/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_api import default_due_text

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str, emit: Callable[[str], None] | None = None) -> str:
    """Route one input line to the command registry; plain text gets a usage hint."""
    try:
        with state.lock:
            reply = command_registry.handle(state, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if reply is None:
        return "Commands start with '/'. Use /help to list available commands."
    return reply


def run_console_loop(state: AppState, read: Callable[[str], str] = input) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "taskminder"))
    example_due = default_due_text(state.clock.now())
    _print_ts(
        f"[{app_name}] Type /help for commands, /exit to quit.\n"
        f"  e.g. /add {example_due} 30 Pay rent | transfer before noon\n"
    )

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        _print_ts(handle_line(state, user_input, emit=_print_ts))

    logger.info("Console connector finished.")
