# src/taskminder/tasks/task_models.py

from __future__ import annotations

import threading
from datetime import datetime, timedelta
from enum import StrEnum

DEFAULT_TITLE = "Untitled Task"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


class InvalidInput(ValueError):
    """Raised synchronously when a task cannot be created from the given values."""


class AlertState(StrEnum):
    """
    One-shot alert latch.

    CLAIMED marks an alert a scanner decided to fire but has not reported yet;
    it keeps two concurrent scans from both dispatching the same event.
    """

    PENDING = "pending"
    CLAIMED = "claimed"
    FIRED = "fired"


class Task:
    """
    A single reminder-bearing task.

    Identity and schedule are fixed at construction and exposed read-only;
    only the completion flag and the two alert latches change afterwards.
    """

    __slots__ = (
        "_id",
        "_title",
        "_description",
        "_due_at",
        "_reminder_lead",
        "_completed",
        "_reminder",
        "_deadline",
        "_lock",
    )

    def __init__(
        self,
        id: int,
        title: str,
        description: str | None,
        due_at: datetime,
        reminder_lead: timedelta,
    ) -> None:
        if not isinstance(due_at, datetime):
            raise InvalidInput(f"due_at must be a datetime, got {type(due_at).__name__}")
        if not isinstance(reminder_lead, timedelta):
            raise InvalidInput(
                f"reminder_lead must be a timedelta, got {type(reminder_lead).__name__}"
            )
        self._id = id
        self._title = (title or "").strip() or DEFAULT_TITLE
        self._description = description or ""
        self._due_at = due_at
        self._reminder_lead = reminder_lead

        self._completed = False
        self._reminder = AlertState.PENDING
        self._deadline = AlertState.PENDING
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"Task(id={self._id!r}, title={self._title!r}, due_at={self._due_at!r}, "
            f"reminder_lead={self._reminder_lead!r})"
        )

    # ---- identity and schedule ----

    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def due_at(self) -> datetime:
        return self._due_at

    @property
    def reminder_lead(self) -> timedelta:
        return self._reminder_lead

    # ---- completion and latches ----

    @property
    def completed(self) -> bool:
        with self._lock:
            return self._completed

    @property
    def reminder_fired(self) -> bool:
        with self._lock:
            return self._reminder is AlertState.FIRED

    @property
    def deadline_fired(self) -> bool:
        with self._lock:
            return self._deadline is AlertState.FIRED

    def reminder_at(self) -> datetime:
        reminder = self.due_at - self.reminder_lead
        return self.due_at if reminder > self.due_at else reminder

    def is_past_due(self, now: datetime) -> bool:
        return now > self.due_at

    # ---- trigger checks ----

    def should_trigger_reminder(self, now: datetime) -> bool:
        with self._lock:
            return self._reminder_due(now)

    def should_trigger_deadline_alert(self, now: datetime) -> bool:
        with self._lock:
            return self._deadline_due(now)

    def _reminder_due(self, now: datetime) -> bool:
        return (
            not self._completed
            and self._reminder is AlertState.PENDING
            and now >= self.reminder_at()
        )

    def _deadline_due(self, now: datetime) -> bool:
        return not self._completed and self._deadline is AlertState.PENDING and now >= self.due_at

    def try_claim_reminder(self, now: datetime) -> bool:
        """Atomically check should_trigger_reminder and claim the event for the caller."""
        with self._lock:
            if not self._reminder_due(now):
                return False
            self._reminder = AlertState.CLAIMED
            return True

    def try_claim_deadline(self, now: datetime) -> bool:
        with self._lock:
            if not self._deadline_due(now):
                return False
            self._deadline = AlertState.CLAIMED
            return True

    # ---- one-way latches ----

    def mark_complete(self) -> None:
        with self._lock:
            self._completed = True

    def mark_reminder_fired(self) -> None:
        with self._lock:
            self._reminder = AlertState.FIRED

    def mark_deadline_fired(self) -> None:
        with self._lock:
            self._deadline = AlertState.FIRED

    # ---- text rendering ----

    def summary_line(self) -> str:
        return f"[{self.id}] {self.title} (due {self.due_at.strftime(DISPLAY_FORMAT)})"

    def describe(self) -> str:
        head = f"[{self.id}] {self.title}"
        if self.description.strip():
            head += f" - {self.description}"
        status = "Completed" if self.completed else "Active"
        return (
            f"{head}\n"
            f"   Due: {self.due_at.strftime(DISPLAY_FORMAT)}"
            f" | Reminder: {self.reminder_at().strftime(DISPLAY_FORMAT)}"
            f" | Status: {status}"
        )
