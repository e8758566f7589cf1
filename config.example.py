# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKMINDER_APP_NAME": "App display name (default: taskminder).",
    "TASKMINDER_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKMINDER_DATA_DIR": "Local data directory, holds taskminder.log (default: .local/taskminder).",
    # Reminder engine
    "TASKMINDER_SCAN_INTERVAL_SECONDS": "Seconds between scans (default: 30, minimum 5).",
    "TASKMINDER_INITIAL_DELAY_SECONDS": "Delay before the first scan (default: 5).",
    "TASKMINDER_STOP_TIMEOUT_SECONDS": "How long stop() waits for a running scan (default: 10).",
    # Console front-end
    "TASKMINDER_DEFAULT_LEAD_MINUTES": "Reminder lead used when /add omits it (default: 30).",
    "TASKMINDER_UPCOMING_WINDOW_MINUTES": "Default /upcoming window (default: 60).",
    "TASKMINDER_CONSOLE_BELL": "Ring the terminal bell on notifications (true/false).",
    "TASKMINDER_NOTIFICATION_HISTORY": "Notifications kept for /notifications (default: 200).",
}
