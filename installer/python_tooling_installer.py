# installer/python_tooling_installer.py
# -*- coding: utf-8 -*-
"""
Installs uv, creates a virtual environment with it and installs Python
packages into that environment.

``setup_venv`` needs uv and ``install_python_packages_with_uv`` needs the
virtual environment. When a prerequisite is missing the step names the
menu option that provides it and returns False instead of raising.
"""

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_message, run_command
from common.debian.apt_manager import AptManager
from common.system_utils import get_command_version
from provision.config_models import AppSettings
from provision.environment import USER_BIN_DIRS, prepend_user_bin_dirs

module_logger = logging.getLogger(__name__)

UV_APT_PREREQUISITES = ["curl", "python3", "python3-pip"]

_REQUIREMENT_NAME_END = re.compile(r"[\s\[(<>=!~;@]")


def find_uv() -> Optional[str]:
    """Locate the uv executable on PATH or in the installer's target dirs."""
    found = shutil.which("uv")
    if found:
        return found
    for raw_dir in USER_BIN_DIRS:
        candidate = Path(raw_dir).expanduser() / "uv"
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return None


def get_venv_path(app_settings: AppSettings) -> Path:
    return Path(app_settings.python.venv_dir).expanduser().absolute()


def requirement_name(requirement: str) -> str:
    """Distribution name of a requirement such as "torch==2.3" or "uvicorn[standard]"."""
    return _REQUIREMENT_NAME_END.split(requirement.strip(), maxsplit=1)[0]


def _missing_prerequisite(
    message: str,
    app_settings: AppSettings,
    logger_to_use: logging.Logger,
) -> bool:
    log_message(
        f"{get_symbols(app_settings).get('error', '❌')} {message}",
        "error",
        logger_to_use,
        app_settings,
    )
    return False


def install_uv(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_message(
        f"{symbols.get('step', '➡️')} Installing uv (Python package manager)...",
        "info",
        logger_to_use,
        app_settings,
    )
    if not AptManager(logger=logger_to_use).install(
        UV_APT_PREREQUISITES, app_settings
    ):
        return False

    try:
        script_res = run_command(
            ["curl", "-LsSf", app_settings.python.uv_install_url],
            app_settings,
            capture_output=True,
            current_logger=logger_to_use,
        )
        run_command(
            ["sh"],
            app_settings,
            cmd_input=script_res.stdout,
            current_logger=logger_to_use,
        )
    except Exception as e:
        log_message(
            f"{symbols.get('error', '❌')} Failed to install uv: {e}",
            "error",
            logger_to_use,
            app_settings,
            exc_info=True,
        )
        raise

    prepend_user_bin_dirs()
    uv_path = find_uv()
    if uv_path is None:
        return _missing_prerequisite(
            "uv installer finished but the 'uv' command was not found.",
            app_settings,
            logger_to_use,
        )

    version = get_command_version([uv_path, "--version"], app_settings, logger_to_use)
    log_message(
        f"{symbols.get('success', '✅')} uv installed ({version}). Please restart your terminal "
        f"or run 'source {app_settings.shell_rc_path}' to use it.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def setup_venv(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    venv_path = get_venv_path(app_settings)

    log_message(
        f"{symbols.get('step', '➡️')} Setting up Python virtual environment in '{venv_path}'...",
        "info",
        logger_to_use,
        app_settings,
    )
    uv_path = find_uv()
    if uv_path is None:
        return _missing_prerequisite(
            "Error: 'uv' command not found. Please run the 'install_uv' option first.",
            app_settings,
            logger_to_use,
        )

    if venv_path.is_dir():
        log_message(
            f"{symbols.get('info', 'ℹ️')} Virtual environment '{venv_path}' already exists.",
            "info",
            logger_to_use,
            app_settings,
        )
        return True

    run_command(
        [uv_path, "venv", str(venv_path)],
        app_settings,
        current_logger=logger_to_use,
    )
    log_message(
        f"{symbols.get('success', '✅')} Virtual environment created.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def install_python_packages_with_uv(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    venv_path = get_venv_path(app_settings)
    packages = app_settings.python.packages

    if not venv_path.is_dir():
        return _missing_prerequisite(
            f"Error: Virtual environment '{venv_path}' not found. Please run 'setup_venv' first.",
            app_settings,
            logger_to_use,
        )
    uv_path = find_uv()
    if uv_path is None:
        return _missing_prerequisite(
            "Error: 'uv' command not found. Please run the 'install_uv' option first.",
            app_settings,
            logger_to_use,
        )
    if not packages:
        log_message(
            f"{symbols.get('info', 'ℹ️')} No Python packages configured; nothing to install.",
            "info",
            logger_to_use,
            app_settings,
        )
        return True

    # Equivalent of activating the venv for the uv child processes.
    venv_env = dict(os.environ)
    venv_env["VIRTUAL_ENV"] = str(venv_path)
    venv_env["PATH"] = os.pathsep.join(
        [str(venv_path / "bin"), venv_env.get("PATH", "")]
    )

    log_message(
        f"{symbols.get('package', '📦')} Installing Python packages: {', '.join(packages)}",
        "info",
        logger_to_use,
        app_settings,
    )
    run_command(
        [uv_path, "pip", "install"] + list(packages),
        app_settings,
        current_logger=logger_to_use,
        env=venv_env,
    )

    list_res = run_command(
        [uv_path, "pip", "list"],
        app_settings,
        check=False,
        capture_output=True,
        current_logger=logger_to_use,
        env=venv_env,
    )
    names = [name for name in map(requirement_name, packages) if name]
    wanted = re.compile(
        "|".join(re.escape(name) for name in names), re.IGNORECASE
    )
    installed_lines = [
        line
        for line in (list_res.stdout or "").splitlines()
        if wanted.search(line)
    ]
    log_message("Installed packages:", "info", logger_to_use, app_settings)
    for line in installed_lines:
        log_message(f"   {line}", "info", logger_to_use, app_settings)
    return True
