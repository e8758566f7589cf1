# tests/fakes.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from taskminder.core.ports import Notifier
from taskminder.tasks.task_models import Task


class FakeClock:
    """Manually advanced clock for deterministic scans and queries."""

    def __init__(self, start: datetime) -> None:
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> datetime:
        self._now += delta
        return self._now


@dataclass(slots=True)
class Notification:
    task_id: int
    message: str


@dataclass(slots=True)
class FakeNotifier(Notifier):
    """
    Fake Notifier used by scanner/engine tests.

    - records every call
    - optionally raises for selected task ids
    - sets `called` so threaded tests can wait for the first notification
    """

    sent: list[Notification] = field(default_factory=list)
    fail_for: set[int] = field(default_factory=set)
    called: threading.Event = field(default_factory=threading.Event)

    def notify(self, task: Task, message: str) -> None:
        self.sent.append(Notification(task_id=task.id, message=message))
        self.called.set()
        if task.id in self.fail_for:
            raise RuntimeError(f"notifier down for task {task.id}")

    def messages_for(self, task_id: int) -> list[str]:
        return [n.message for n in self.sent if n.task_id == task_id]
