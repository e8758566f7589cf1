# tests/test_task_models.py

from __future__ import annotations

import threading
from datetime import datetime, timedelta

import pytest

from taskminder.tasks.task_models import DEFAULT_TITLE, InvalidInput, Task

DUE = datetime(2026, 10, 18, 15, 30)


def _task(lead: timedelta = timedelta(minutes=30), **kw) -> Task:
    return Task(
        id=kw.pop("id", 1),
        title=kw.pop("title", "Pay rent"),
        description=kw.pop("description", ""),
        due_at=kw.pop("due_at", DUE),
        reminder_lead=lead,
    )


def test_reminder_at_subtracts_lead_and_zero_lead_collapses_to_due() -> None:
    assert _task(timedelta(minutes=30)).reminder_at() == DUE - timedelta(minutes=30)
    assert _task(timedelta(0)).reminder_at() == DUE


def test_reminder_at_never_after_due() -> None:
    # A lead that would push the reminder past due is clamped.
    assert _task(timedelta(minutes=-5)).reminder_at() == DUE


def test_blank_title_falls_back_and_description_defaults() -> None:
    t = _task(title="   ", description=None)
    assert t.title == DEFAULT_TITLE
    assert t.description == ""


def test_invalid_types_are_rejected() -> None:
    with pytest.raises(InvalidInput):
        _task(due_at="2026-10-18 15:30")
    with pytest.raises(InvalidInput):
        Task(id=1, title="x", description="", due_at=DUE, reminder_lead=30)  # type: ignore[arg-type]


def test_trigger_checks_follow_clock() -> None:
    t = _task()
    before = DUE - timedelta(minutes=31)
    assert not t.should_trigger_reminder(before)
    assert t.should_trigger_reminder(DUE - timedelta(minutes=30))
    assert not t.should_trigger_deadline_alert(DUE - timedelta(seconds=1))
    assert t.should_trigger_deadline_alert(DUE)

    assert not t.is_past_due(DUE)
    assert t.is_past_due(DUE + timedelta(seconds=1))


def test_latches_are_one_way_and_idempotent() -> None:
    t = _task()
    t.mark_reminder_fired()
    t.mark_reminder_fired()
    t.mark_deadline_fired()
    t.mark_complete()
    t.mark_complete()

    assert t.reminder_fired and t.deadline_fired and t.completed
    assert not t.should_trigger_reminder(DUE)
    assert not t.should_trigger_deadline_alert(DUE)


def test_completed_task_never_triggers() -> None:
    t = _task()
    t.mark_complete()
    later = DUE + timedelta(days=1)
    assert not t.should_trigger_reminder(later)
    assert not t.should_trigger_deadline_alert(later)
    assert not t.try_claim_reminder(later)


def test_claim_is_granted_once_under_contention() -> None:
    t = _task()
    barrier = threading.Barrier(8)
    wins: list[bool] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        won = t.try_claim_deadline(DUE)
        with lock:
            wins.append(won)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert wins.count(True) == 1
    # Claimed but not yet reported: neither triggerable nor fired.
    assert not t.should_trigger_deadline_alert(DUE)
    assert not t.deadline_fired
    t.mark_deadline_fired()
    assert t.deadline_fired


def test_text_rendering() -> None:
    t = _task(id=7, title="Pay rent", description="before noon")
    assert t.summary_line() == "[7] Pay rent (due 2026-10-18 15:30)"
    assert t.describe() == (
        "[7] Pay rent - before noon\n"
        "   Due: 2026-10-18 15:30 | Reminder: 2026-10-18 15:00 | Status: Active"
    )
    t.mark_complete()
    assert t.describe().endswith("Status: Completed")


def test_describe_omits_blank_description() -> None:
    assert _task(id=2, title="Call mom").describe().startswith("[2] Call mom\n")


def test_identity_and_schedule_are_read_only() -> None:
    t = _task(id=3)
    with pytest.raises(AttributeError):
        t.id = 42  # type: ignore[misc]
    with pytest.raises(AttributeError):
        t.due_at = DUE - timedelta(days=1)  # type: ignore[misc]
    with pytest.raises(AttributeError):
        t.reminder_lead = timedelta(0)  # type: ignore[misc]
    with pytest.raises(AttributeError):
        t.title = "renamed"  # type: ignore[misc]
    # No instance dict to smuggle new attributes into.
    with pytest.raises(AttributeError):
        t.priority = "high"  # type: ignore[attr-defined]

    assert (t.id, t.title, t.due_at) == (3, "Pay rent", DUE)
    assert t.reminder_at() == DUE - timedelta(minutes=30)
