"""
Situation - Command Line Entry Point

Loads configuration, configures logging and runs the terminal session inside
``curses.wrapper``.
"""

import argparse
import asyncio
import curses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import Settings, configure_logging, load_settings
from .core.constants import APP_DESCRIPTION, APP_NAME
from .core.exceptions import ConfigurationError
from .models.enums import LogLevel
from .services.api_client import ServiceClient
from .ui.core.session_controller import SessionController
from .ui.terminal_app import CursesTerminal

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=APP_NAME.lower(), description=APP_DESCRIPTION)
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Dotenv file to read SI_API / JWT_TOKEN from (default: .env)"
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Override LOG_LEVEL"
    )
    return parser.parse_args(argv)


async def run_session(settings: Settings, terminal: CursesTerminal) -> None:
    """Open the service client for the lifetime of one session."""
    async with ServiceClient(settings.service) as client:
        await SessionController(settings, client, terminal).run()


def _curses_main(stdscr, settings: Settings) -> None:
    asyncio.run(run_session(settings, CursesTerminal(stdscr)))


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        settings.logging.level = LogLevel(args.log_level)
    configure_logging(settings.logging)

    try:
        curses.wrapper(_curses_main, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
