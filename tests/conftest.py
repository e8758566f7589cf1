# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskminder.cli.bootstrap import create_initial_state
from taskminder.core.state import AppState
from taskminder.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeNotifier

NOW = datetime(2026, 10, 18, 12, 0)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskminder-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        scan_interval_seconds=30.0,
        initial_delay_seconds=5.0,
        stop_timeout_seconds=5.0,
        default_lead_minutes=30,
        upcoming_window_minutes=60,
        console_bell=False,
        notification_history=50,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """AppState wired by the real composition root, driven by a fake clock (engine not started)."""
    return create_initial_state(settings=settings, clock=clock)
