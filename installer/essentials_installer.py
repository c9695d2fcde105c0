# installer/essentials_installer.py
# -*- coding: utf-8 -*-
"""
Installs the baseline command-line toolset (git, curl, build-essential, ...).
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_message
from common.debian.apt_manager import AptManager
from provision.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_linux_essentials(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    packages = app_settings.linux_essentials

    log_message(
        f"{symbols.get('package', '📦')} Installing linux essentials: {', '.join(packages)}",
        "info",
        logger_to_use,
        app_settings,
    )
    if not AptManager(logger=logger_to_use).install(packages, app_settings):
        log_message(
            f"{symbols.get('error', '❌')} Failed to install linux essentials.",
            "error",
            logger_to_use,
            app_settings,
        )
        return False

    log_message(
        f"{symbols.get('success', '✅')} Linux essentials installed.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True
