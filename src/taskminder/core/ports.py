# src/taskminder/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the reminder core.

The store and scanner depend on Protocols instead of concrete implementations,
so the presentation layer can plug in its own clock and notification target.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class Clock(Protocol):
    """Current local time. Must never go backwards within a process run."""

    def now(self) -> datetime: ...


class Notifier(Protocol):
    """
    Presentation-side port: how the scanner reports a reminder or deadline.

    Called from the scanning thread. Implementations should hand the event off
    (queue, UI work list, ...) and return quickly; a slow notifier delays the
    rest of the scan.
    """

    def notify(self, task: Task, message: str) -> None: ...
