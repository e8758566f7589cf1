# src/taskminder/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then:
- starts the notification printer and the reminder engine in background threads,
- runs the console REPL in the main thread,
- stops the engine before exit so no scan runs during shutdown.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.engine.stop()
    except Exception:
        logger.exception("Failed to stop reminder engine.")

    try:
        state.notifier.stop()
    except Exception:
        logger.debug("Notifier stop failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    state.notifier.start()
    state.engine.start()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Not the main thread, or the platform lacks SIGTERM.
        logger.debug("SIGTERM handler not installed.", exc_info=True)

    try:
        run_console_loop(state)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
