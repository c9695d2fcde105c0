# installer/web_server_installer.py
# -*- coding: utf-8 -*-
"""
Installs the web servers and proxies offered by the menu: Caddy (from its
upstream apt repository), NGINX and HAProxy (from the distribution).
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_message
from common.debian.apt_manager import AptManager
from common.system_utils import (
    enable_and_start_service,
    get_command_version,
    service_status,
)
from provision.config_models import AppSettings

module_logger = logging.getLogger(__name__)

CADDY_PREREQUISITES = [
    "debian-keyring",
    "debian-archive-keyring",
    "apt-transport-https",
    "curl",
]


def install_caddy(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    caddy = app_settings.caddy
    apt = AptManager(logger=logger_to_use)

    log_message(
        f"{symbols.get('step', '➡️')} Installing Caddy web server...",
        "info",
        logger_to_use,
        app_settings,
    )
    if not apt.install(CADDY_PREREQUISITES, app_settings):
        return False
    if not apt.add_gpg_key_from_url(
        caddy.gpg_key_url, caddy.keyring_path, app_settings
    ):
        return False
    if not apt.add_source_list(
        caddy.source_list_url, caddy.source_list_path, app_settings
    ):
        return False
    if not apt.install("caddy", app_settings):
        return False

    log_message(
        f"{symbols.get('success', '✅')} Caddy installed and running "
        f"(status: {service_status('caddy', app_settings, logger_to_use)}).",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def _install_distribution_service(
    package: str,
    version_command: list,
    app_settings: AppSettings,
    logger_to_use: logging.Logger,
) -> bool:
    symbols = get_symbols(app_settings)
    log_message(
        f"{symbols.get('step', '➡️')} Installing {package}...",
        "info",
        logger_to_use,
        app_settings,
    )
    if not AptManager(logger=logger_to_use).install(package, app_settings):
        return False
    enable_and_start_service(package, app_settings, logger_to_use)

    version = get_command_version(version_command, app_settings, logger_to_use)
    status = service_status(package, app_settings, logger_to_use)
    log_message(
        f"{symbols.get('success', '✅')} {package} installed. Version: {version}. Status: {status}",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def install_nginx(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    return _install_distribution_service(
        "nginx", ["nginx", "-v"], app_settings, logger_to_use
    )


def install_haproxy(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    return _install_distribution_service(
        "haproxy", ["haproxy", "-v"], app_settings, logger_to_use
    )
