# src/taskminder/connectors/console_notifier.py

from __future__ import annotations

import logging
import queue
import sys
import threading
from collections import deque
from collections.abc import Callable
from datetime import datetime

from ..tasks.task_models import DISPLAY_FORMAT, Task

logger = logging.getLogger(__name__)

_STOP = object()


def format_notification(task: Task, message: str, at: datetime) -> str:
    return f"[{at.strftime(DISPLAY_FORMAT)}] {message} -> {task.summary_line()}"


class ConsoleNotifier:
    """
    Notifier that hands events to a printer thread.

    notify() only formats and enqueues, so the scanner is never held up by the
    terminal. The printer writes each line (plus an optional bell) and keeps a
    bounded history for /notifications.
    """

    def __init__(
        self,
        *,
        bell: bool = True,
        history_size: int = 200,
        write: Callable[[str], None] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._bell = bell
        self._write = write or self._write_stdout
        self._now = now
        self._queue: queue.Queue[object] = queue.Queue()
        self._history: deque[str] = deque(maxlen=max(1, history_size))
        self._history_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    # ---- Notifier port ----

    def notify(self, task: Task, message: str) -> None:
        self._queue.put(format_notification(task, message, self._now()))

    # ---- lifecycle ----

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._pump, name="console-notifier", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """Flush pending lines and stop the printer thread."""
        thread = self._thread
        if thread is None:
            return
        self._queue.put(_STOP)
        thread.join(timeout=timeout)
        self._thread = None

    def drain(self) -> int:
        """Print everything queued so far on the calling thread (used when no pump runs)."""
        n = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return n
            if item is _STOP:
                continue
            self._emit(str(item))
            n += 1

    # ---- history ----

    def history(self) -> list[str]:
        with self._history_lock:
            return list(self._history)

    def clear(self) -> None:
        with self._history_lock:
            self._history.clear()

    # ---- internals ----

    def _pump(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            self._emit(str(item))

    def _emit(self, line: str) -> None:
        with self._history_lock:
            self._history.append(line)
        try:
            self._write(line + ("\a" if self._bell else ""))
        except Exception:
            logger.exception("Failed to print notification.")

    @staticmethod
    def _write_stdout(text: str) -> None:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
