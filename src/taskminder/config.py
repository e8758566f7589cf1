# src/taskminder/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is required at import time; every value has a default.
- Malformed numbers fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKMINDER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Reminder engine ----
    scan_interval_seconds: float
    initial_delay_seconds: float
    stop_timeout_seconds: float

    # ---- Console front-end ----
    default_lead_minutes: int
    upcoming_window_minutes: int
    console_bell: bool
    notification_history: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskminder") or "taskminder"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskminder"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            scan_interval_seconds=_env_float(_k("SCAN_INTERVAL_SECONDS"), 30.0),
            initial_delay_seconds=_env_float(_k("INITIAL_DELAY_SECONDS"), 5.0),
            stop_timeout_seconds=_env_float(_k("STOP_TIMEOUT_SECONDS"), 10.0),
            default_lead_minutes=max(0, _env_int(_k("DEFAULT_LEAD_MINUTES"), 30)),
            upcoming_window_minutes=max(1, _env_int(_k("UPCOMING_WINDOW_MINUTES"), 60)),
            console_bell=_env_bool(_k("CONSOLE_BELL"), True),
            notification_history=max(1, _env_int(_k("NOTIFICATION_HISTORY"), 200)),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
