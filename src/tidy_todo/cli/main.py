# src/tidy_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the task store loop in a
background thread (load + periodic cleanup), then runs the console REPL
in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_runner import start_store_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, notifier=ConsoleNotifier())

    runner = start_store_in_background(state)
    if runner is None:
        logger.error("Task store did not start; exiting.")
        raise SystemExit(1)

    try:
        run_console_loop(state, runner)
    finally:
        # Stops the cleanup scheduler before the loop (and the store) goes away.
        runner.stop()
        runner.join(timeout=10.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
