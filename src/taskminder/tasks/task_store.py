# src/taskminder/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta

from ..core.clock import SystemClock
from ..core.ports import Clock
from .task_models import InvalidInput, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store.

    Thread-safety:
    - one lock guards the id -> task mapping and the id counter
    - queries copy task references under the lock and filter/sort outside it
    - per-task flags are guarded by each Task's own lock

    Ids start at 1, grow monotonically and are never reused, even after removal.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        logger.info("TaskStore ready")

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- mutations ----

    def add(
        self,
        title: str,
        description: str | None,
        due_at: datetime,
        reminder_lead: timedelta,
    ) -> Task:
        if not isinstance(reminder_lead, timedelta):
            raise InvalidInput("Reminder lead must be a duration.")
        if reminder_lead < timedelta(0):
            raise InvalidInput("Reminder lead time cannot be negative.")

        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description or "",
                due_at=due_at,
                reminder_lead=reminder_lead,
            )
            # Counter only advances once the Task was constructed successfully.
            self._next_id += 1
            self._tasks[task.id] = task

        logger.debug(
            "Task added id=%s due_at=%s reminder_at=%s",
            task.id,
            task.due_at,
            task.reminder_at(),
        )
        return task

    def mark_complete(self, task_id: int) -> Task | None:
        task = self.get(task_id)
        if task is None:
            return None
        task.mark_complete()
        logger.info("Task %s -> completed", task_id)
        return task

    def remove(self, task_id: int) -> bool:
        with self._lock:
            removed = self._tasks.pop(task_id, None) is not None
        if removed:
            logger.info("Task %s removed", task_id)
        return removed

    # ---- queries ----

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def all_active(self) -> list[Task]:
        """Point-in-time copy of every stored task, in id order (scanner snapshot)."""
        with self._lock:
            return list(self._tasks.values())

    def all_sorted_by_due(self) -> list[Task]:
        tasks = self.all_active()
        tasks.sort(key=lambda t: (t.due_at, t.id))
        return tasks

    def due_within(
        self,
        window: timedelta,
        *,
        now: datetime | None = None,
        include_open: bool = False,
    ) -> list[Task]:
        """
        Tasks whose reminder point falls in [now, now + window].

        Only tasks that are not completed and not past due are considered.
        A task whose reminder point is already behind `now` is excluded unless
        include_open=True, in which case every open reminder window up to
        now + window qualifies.

        Ordered by reminder time, then id.
        """
        if window < timedelta(0):
            raise InvalidInput("Window cannot be negative.")
        if now is None:
            now = self._clock.now()
        try:
            threshold = now + window
        except OverflowError:
            # Window reaches past the representable calendar: every future reminder is in.
            threshold = datetime.max.replace(tzinfo=now.tzinfo)

        out: list[Task] = []
        for task in self.all_active():
            if task.completed or task.is_past_due(now):
                continue
            reminder = task.reminder_at()
            if reminder > threshold:
                continue
            if reminder < now and not include_open:
                continue
            out.append(task)

        out.sort(key=lambda t: (t.reminder_at(), t.id))
        return out
