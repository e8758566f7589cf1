# src/taskminder/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..connectors.console_notifier import ConsoleNotifier
    from ..tasks.task_scheduler import ReminderEngine
    from ..tasks.task_store import TaskStore
    from .ports import Clock


@dataclass
class AppState:
    # Settings object (config.Settings or a test stand-in with the same fields).
    settings: Any

    clock: Clock
    task_store: TaskStore
    notifier: ConsoleNotifier
    engine: ReminderEngine

    # Serializes command handling between connectors.
    lock: threading.Lock = field(default_factory=threading.Lock)
