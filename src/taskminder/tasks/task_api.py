# src/taskminder/tasks/task_api.py

"""
Form-level helpers for the presentation layer.

The store only validates what it owns (a negative lead). Parsing raw text and
the "due date must be in the future" rule live here, next to the user-facing
messages.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from .task_models import DISPLAY_FORMAT, InvalidInput, Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def parse_due(text: str) -> datetime:
    try:
        return datetime.strptime(text.strip(), DISPLAY_FORMAT)
    except ValueError:
        raise InvalidInput("Invalid date format. Use yyyy-MM-dd HH:mm.") from None


def parse_lead_minutes(text: str) -> timedelta:
    try:
        minutes = int(text.strip())
    except ValueError:
        raise InvalidInput("Invalid number for reminder lead time.") from None
    if minutes < 0:
        raise InvalidInput("Reminder lead time cannot be negative.")
    return timedelta(minutes=minutes)


def resolve_task_id(text: str | None) -> int:
    raw = (text or "").strip()
    if not raw:
        raise InvalidInput("Enter task ID first.")
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput("Invalid task ID.") from None


def create_task_from_form(
    store: TaskStore,
    *,
    title: str,
    description: str,
    due_text: str,
    lead_text: str,
    now: datetime,
) -> Task:
    """
    Validate raw form values and add the task.

    Raises InvalidInput carrying the message to show to the user.
    """
    title = title.strip()
    if not title:
        raise InvalidInput("Title cannot be empty.")

    due_at = parse_due(due_text)
    if due_at < now:
        raise InvalidInput("Due date must be in the future.")

    lead = parse_lead_minutes(lead_text)
    task = store.add(title, description.strip(), due_at, lead)
    logger.info("Task created id=%s title=%r", task.id, task.title)
    return task


def default_due_text(now: datetime) -> str:
    """Pre-filled due value: one hour from now."""
    return (now + timedelta(hours=1)).strftime(DISPLAY_FORMAT)
