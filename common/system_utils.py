# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level helpers: systemd service control and tool version probes.
"""

import logging
from typing import List, Optional

from common.command_utils import (
    get_symbols,
    log_message,
    run_command,
    run_elevated_command,
)
from provision.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def enable_and_start_service(
    service_name: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Enables `service_name` at boot and starts it now.

    Raises:
        subprocess.CalledProcessError: If systemctl fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_message(
        f"{symbols.get('gear', '⚙️')} Enabling and starting {service_name}...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_elevated_command(
        ["systemctl", "enable", service_name],
        app_settings,
        current_logger=logger_to_use,
    )
    run_elevated_command(
        ["systemctl", "start", service_name],
        app_settings,
        current_logger=logger_to_use,
    )


def service_status(
    service_name: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """Returns the output of 'systemctl is-active', or "unknown"."""
    try:
        result = run_command(
            ["systemctl", "is-active", service_name],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=current_logger,
        )
    except FileNotFoundError:
        return "unknown"
    return result.stdout.strip() or "unknown"


def get_command_version(
    command: List[str],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Runs a version command such as ["node", "-v"] and returns its output.

    Some tools (nginx, haproxy) print their version on stderr, so stderr is
    used when stdout is empty. Returns "N/A" when the command is missing or
    fails.
    """
    try:
        result = run_command(
            command,
            app_settings,
            check=False,
            capture_output=True,
            current_logger=current_logger,
        )
    except FileNotFoundError:
        return "N/A"
    if result.returncode != 0:
        return "N/A"
    output = (result.stdout or "").strip() or (result.stderr or "").strip()
    return output.splitlines()[0] if output else "N/A"
