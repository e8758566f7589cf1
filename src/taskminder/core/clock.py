# src/taskminder/core/clock.py

from __future__ import annotations

import threading
from datetime import datetime


class SystemClock:
    """Local wall clock that never goes backwards (guards against NTP steps)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: datetime | None = None

    def now(self) -> datetime:
        current = datetime.now()
        with self._lock:
            if self._last is not None and current < self._last:
                return self._last
            self._last = current
            return current
