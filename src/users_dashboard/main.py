"""
Main Entry Point

Interactive terminal dashboard:

1. Fetch the user list once
2. Read commands (search, sort, select) and apply them
3. Re-render the users and posts panels after each command

Logging goes to stderr and to the configured log file so it never mixes
with the rendered dashboard on stdout.
"""

import asyncio
import locale
import logging
import sys
import threading
from typing import Optional

from .api import FetchGateway
from .config import config
from .dashboard import Dashboard


HELP_TEXT = """Commands:
  search <text>        filter by name or email (no text clears the filter)
  sort name|company    sort the visible users
  select <id>          show the posts of a user
  show                 render the dashboard again
  help                 show this help
  quit                 exit"""

SORT_ALIASES = {
    "name": "name",
    "company": "company.name",
    "company.name": "company.name",
}


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Set up logging for the application."""
    log_level = (log_level or config.log.log_level).upper()

    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("users_dashboard")
    logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='w',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(config.log.log_format))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


async def run_command(dashboard: Dashboard, line: str) -> Optional[str]:
    """
    Apply one command line to the dashboard.

    Returns:
        Text to print, or None when the user asked to quit.
    """
    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in ("quit", "exit", "q"):
        return None

    if command == "help":
        return HELP_TEXT

    if command == "search":
        dashboard.search(argument)
    elif command == "sort":
        key = SORT_ALIASES.get(argument.lower())
        if key is None:
            return f"Unknown sort key: {argument!r} (use 'name' or 'company')"
        dashboard.sort(key)
    elif command == "select":
        try:
            user_id = int(argument)
        except ValueError:
            return f"Not a user id: {argument!r}"
        try:
            dashboard.select(user_id)
        except KeyError:
            return f"No user with id {user_id}"
        await dashboard.wait_for_posts()
    elif command in ("show", ""):
        pass
    else:
        return f"Unknown command: {command!r} (type 'help')"

    return dashboard.render()


async def _read_line(prompt: str) -> str:
    """
    Read one line from stdin without blocking the event loop.

    The read happens on a daemon thread so a pending ``input()`` never keeps
    the process alive after Ctrl-C.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def deliver(line, error):
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(line)

    def read():
        try:
            line = input(prompt)
        except Exception as e:
            line, error = None, e
        else:
            error = None
        if not loop.is_closed():
            loop.call_soon_threadsafe(deliver, line, error)

    threading.Thread(target=read, name="stdin-reader", daemon=True).start()
    return await future


async def run_dashboard() -> int:
    """
    Run the interactive dashboard until the user quits.

    Returns:
        Process exit code.
    """
    logger = logging.getLogger("users_dashboard.main")

    async with FetchGateway() as gateway:
        dashboard = Dashboard(gateway)
        loaded = await dashboard.start()
        print(dashboard.render())

        if not loaded:
            logger.error("User list unavailable; exiting")
            return 1

        print()
        print(HELP_TEXT)

        while True:
            try:
                line = await _read_line("\n> ")
            except EOFError:
                break

            output = await run_command(dashboard, line)
            if output is None:
                break
            print(output)

    return 0


def activate_locale(logger: logging.Logger) -> None:
    """Use the user's collation rules for sorting names."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not activate the system locale, using defaults: {e}")


def main():
    """Main entry point for the dashboard."""
    logger = setup_logging()
    activate_locale(logger)

    try:
        sys.exit(asyncio.run(run_dashboard()))

    except KeyboardInterrupt:
        logger.info("Dashboard interrupted by user")
        sys.exit(130)

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
