# src/taskminder/tasks/task_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small periodic scan that:
- snapshots every stored task,
- claims reminder/deadline events that became due (at most once per task),
- reports them through an injected Notifier port,
- latches the event as fired, whether or not the notifier succeeded.

Two drivers share the same scan:
- run_reminder_scanner(): asyncio coroutine, stop it by cancelling its task,
- ReminderEngine: background thread with explicit start()/stop().
"""

import asyncio
import logging
import threading
import time
from datetime import datetime
from enum import StrEnum

from ..core.clock import SystemClock
from ..core.ports import Clock, Notifier
from .task_models import Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)

REMINDER_MESSAGE = "Reminder window reached"
DEADLINE_MESSAGE = "Deadline reached"

MIN_INTERVAL_SECONDS = 5.0
DEFAULT_INTERVAL_SECONDS = 30.0
DEFAULT_INITIAL_DELAY_SECONDS = 5.0


def clamp_interval(interval_seconds: float) -> float:
    return max(MIN_INTERVAL_SECONDS, float(interval_seconds))


class ReminderScanner:
    """Runs one scan tick over a TaskStore snapshot."""

    def __init__(
        self,
        store: TaskStore,
        notifier: Notifier,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._clock: Clock = clock or SystemClock()
        self._scan_lock = threading.Lock()

    def scan_once(self, now: datetime | None = None) -> int:
        """
        Evaluate every task in snapshot order.

        Returns the number of notifications issued. Never raises because of a
        failing notifier; the failure is logged and the scan moves on.
        """
        with self._scan_lock:
            if now is None:
                now = self._clock.now()

            try:
                tasks = self._store.all_active()
            except Exception:
                logger.exception("all_active snapshot failed")
                return 0

            sent = 0
            for task in tasks:
                if task.try_claim_reminder(now):
                    self._dispatch(task, REMINDER_MESSAGE)
                    task.mark_reminder_fired()
                    sent += 1

                if task.try_claim_deadline(now):
                    self._dispatch(task, DEADLINE_MESSAGE)
                    task.mark_deadline_fired()
                    sent += 1

            if sent:
                logger.debug("Scan at %s issued %d notification(s)", now, sent)
            return sent

    def _dispatch(self, task: Task, message: str) -> None:
        # Fire-and-forget: a failed notification is not retried.
        try:
            self._notifier.notify(task, message)
            logger.info("Task %s: %s", task.id, message)
        except Exception:
            logger.exception("notify failed task_id=%s message=%r", task.id, message)


async def run_reminder_scanner(
        scanner: ReminderScanner,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS,
) -> None:
    """
    Cooperative periodic scanner.

    Waits initial_delay_seconds, then scans every interval_seconds (at least
    MIN_INTERVAL_SECONDS). The scan itself is synchronous and short.

    To stop the scanner, cancel the coroutine/task.
    """
    sleep_s = clamp_interval(interval_seconds)
    await asyncio.sleep(max(0.0, float(initial_delay_seconds)))

    while True:
        try:
            scanner.scan_once()
        except Exception:
            logger.exception("scan tick failed")
        await asyncio.sleep(sleep_s)


class EngineState(StrEnum):
    STOPPED = "stopped"
    RUNNING = "running"


class ReminderEngine:
    """
    Owns the scanner lifecycle.

    start() spawns a daemon thread that scans at a fixed rate; stop() signals
    it and waits for a tick in progress to finish. After stop() returns no new
    tick begins. Both calls are idempotent, and a stopped engine can be
    started again.
    """

    def __init__(
        self,
        store: TaskStore,
        notifier: Notifier,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS,
        clock: Clock | None = None,
        stop_timeout_seconds: float | None = 10.0,
    ) -> None:
        self.scanner = ReminderScanner(store, notifier, clock=clock)
        self.interval_seconds = clamp_interval(interval_seconds)
        self.initial_delay_seconds = max(0.0, float(initial_delay_seconds))
        self.stop_timeout_seconds = stop_timeout_seconds

        self._lock = threading.Lock()
        self._state = EngineState.STOPPED
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> EngineState:
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is EngineState.RUNNING

    def scan_now(self) -> int:
        return self.scanner.scan_once()

    def start(self) -> None:
        with self._lock:
            if self._state is EngineState.RUNNING:
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                name="reminder-engine",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            self._state = EngineState.RUNNING
            thread.start()

        logger.info(
            "Reminder engine started (interval=%ss, initial_delay=%ss)",
            self.interval_seconds,
            self.initial_delay_seconds,
        )

    def stop(self) -> None:
        with self._lock:
            if self._state is EngineState.STOPPED:
                return
            stop_event, thread = self._stop_event, self._thread
            self._stop_event = None
            self._thread = None
            self._state = EngineState.STOPPED

        if stop_event is not None:
            stop_event.set()

        # A notifier may call stop() from the scanning thread; never join ourselves.
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.stop_timeout_seconds)
            if thread.is_alive():
                logger.warning("Reminder engine thread still finishing a scan after stop().")

        logger.info("Reminder engine stopped")

    def _run(self, stop_event: threading.Event) -> None:
        next_tick = time.monotonic() + self.initial_delay_seconds

        while not stop_event.wait(max(0.0, next_tick - time.monotonic())):
            if stop_event.is_set():
                break
            try:
                self.scanner.scan_once()
            except Exception:
                logger.exception("scan tick failed")

            # Fixed rate; a late tick runs once right away, missed ticks are not replayed.
            next_tick += self.interval_seconds
            now = time.monotonic()
            if next_tick < now:
                next_tick = now
