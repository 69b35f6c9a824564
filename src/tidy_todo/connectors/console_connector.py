# src/tidy_todo/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import add_from_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_runner import StoreBackgroundRunner

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleNotifier:
    """Notifier that prints alerts to the terminal (called from the store thread)."""

    def notify(self, title: str, message: str) -> None:
        _print_ts(f"[{title}] {message}")


async def _dispatch(state: AppState, line: str) -> str:
    reply = await command_registry.handle(state, line)
    if reply is not None:
        return reply
    # Plain text: add a task due today.
    return await add_from_text(state, line)


def run_console_loop(state: AppState, runner: StoreBackgroundRunner) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it for today. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = runner.submit(_dispatch(state, user_input))
        except TimeoutError:
            logger.warning("Command timed out: %s", user_input)
            reply = "Timed out waiting for the task store."
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(reply)
