# src/taskminder/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the clock, store, notifier and reminder engine into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_notifier import ConsoleNotifier
from ..core.clock import SystemClock
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_scheduler import ReminderEngine
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    clock = clock or SystemClock()
    store = TaskStore(clock=clock)
    notifier = ConsoleNotifier(
        bell=settings.console_bell,
        history_size=settings.notification_history,
        now=clock.now,
    )
    engine = ReminderEngine(
        store,
        notifier,
        interval_seconds=settings.scan_interval_seconds,
        initial_delay_seconds=settings.initial_delay_seconds,
        clock=clock,
        stop_timeout_seconds=settings.stop_timeout_seconds,
    )

    logger.debug("AppState wired (data_dir=%s)", settings.data_dir)
    return AppState(
        settings=settings,
        clock=clock,
        task_store=store,
        notifier=notifier,
        engine=engine,
    )
