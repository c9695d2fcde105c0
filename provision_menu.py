#!/usr/bin/env python3
"""
Entry point for the interactive provisioning menu.

Shows a checklist of provisioning actions, lets the operator toggle entries
by number, and runs the chosen ones in menu order once 'done' is entered.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from common.core_utils import setup_logging
from installer.catalog import build_default_registry
from provision.config_loader import ConfigError, load_app_settings
from provision.config_models import LOG_PREFIX_DEFAULT
from provision.environment import reload_shell_environment
from provision.runner import ActionRunner, refresh_package_lists
from provision.selector import ChecklistSelector

EXIT_INTERRUPTED = 130


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Select and run server provisioning tasks interactively."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config-file",
        default="config.yaml",
        help="YAML configuration file (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also append the log to this file",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Do not clear the screen before redrawing the menu",
    )
    parser.add_argument(
        "--no-apt-update",
        action="store_true",
        help="Skip 'apt-get update' before running the selected tasks",
    )
    return parser.parse_args(args)


def main(
    args: Optional[List[str]] = None,
    input_func: Callable[[str], str] = input,
    output: Optional[TextIO] = None,
) -> int:
    """
    Main entry point for the provisioning menu.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.
        input_func: Line reader for the menu prompt.
        output: Stream for the menu and banners. Defaults to stdout.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parsed_args = parse_args(args)
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO
    setup_logging(
        log_level=log_level,
        log_file=parsed_args.log_file,
        log_prefix=LOG_PREFIX_DEFAULT,
    )
    logger = logging.getLogger("provision_menu")

    try:
        app_settings = load_app_settings(
            parsed_args, parsed_args.config_file, current_logger=logger
        )
    except ConfigError as e:
        logger.error(str(e))
        return 1

    setup_logging(
        log_level=log_level,
        log_file=parsed_args.log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    try:
        registry = build_default_registry(app_settings, logger)
        selector = ChecklistSelector(
            registry,
            app_settings,
            current_logger=logger,
            input_func=input_func,
            output=output,
        )
        try:
            selection = selector.run()
        except KeyboardInterrupt:
            print(file=output if output is not None else sys.stdout)
            logger.warning("Selection cancelled by user.")
            return EXIT_INTERRUPTED

        runner = ActionRunner(
            registry,
            app_settings,
            current_logger=logger,
            prepare=(
                refresh_package_lists
                if app_settings.refresh_package_lists
                else None
            ),
            reload_environment=(
                reload_shell_environment
                if app_settings.reload_environment
                else None
            ),
            output=output,
        )
        runner.run(selection)
        return 0

    except Exception as e:
        logger.exception(f"Error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
