# installer/nodejs_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of nvm (Node Version Manager) and a Node.js release.

nvm is a shell function, not an executable, so every nvm call runs in a
bash child that first sources ``$NVM_DIR/nvm.sh``.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import List, Optional

from common.command_utils import get_symbols, log_message, run_command
from provision.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def get_nvm_dir() -> Path:
    return Path(os.environ.get("NVM_DIR", "~/.nvm")).expanduser()


def run_with_nvm(
    nvm_commands: List[str],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    capture_output: bool = False,
    check: bool = True,
):
    """Run shell commands in a bash child with nvm loaded."""
    nvm_dir = get_nvm_dir()
    script = (
        f"export NVM_DIR={shlex.quote(str(nvm_dir))}; "
        '. "$NVM_DIR/nvm.sh"; ' + " && ".join(nvm_commands)
    )
    return run_command(
        ["bash", "-c", script],
        app_settings,
        check=check,
        capture_output=capture_output,
        current_logger=current_logger,
    )


def install_node_nvm(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    node_settings = app_settings.node
    node_version = shlex.quote(node_settings.node_version)

    try:
        log_message(
            f"{symbols.get('step', '➡️')} Installing NVM {node_settings.nvm_version} from {node_settings.nvm_install_url}...",
            "info",
            logger_to_use,
            app_settings,
        )
        script_res = run_command(
            ["curl", "-fsSL", node_settings.nvm_install_url],
            app_settings,
            capture_output=True,
            current_logger=logger_to_use,
        )
        run_command(
            ["bash"],
            app_settings,
            cmd_input=script_res.stdout,
            current_logger=logger_to_use,
        )

        nvm_script = get_nvm_dir() / "nvm.sh"
        if not nvm_script.is_file():
            log_message(
                f"{symbols.get('error', '❌')} Error: nvm was not installed at '{nvm_script}'.",
                "error",
                logger_to_use,
                app_settings,
            )
            return False

        log_message(
            f"{symbols.get('package', '📦')} Installing Node.js v{node_settings.node_version}...",
            "info",
            logger_to_use,
            app_settings,
        )
        run_with_nvm(
            [
                f"nvm install {node_version}",
                f"nvm alias default {node_version}",
                f"nvm use {node_version}",
            ],
            app_settings,
            current_logger=logger_to_use,
        )

        version_res = run_with_nvm(
            ["node -v", "npm -v"],
            app_settings,
            current_logger=logger_to_use,
            capture_output=True,
            check=False,
        )
        versions = (
            version_res.stdout.split()
            if version_res.returncode == 0
            else []
        )
        node_ver = versions[0] if len(versions) > 0 else "N/A"
        npm_ver = versions[1] if len(versions) > 1 else "N/A"
        log_message(
            f"Node version: {node_ver}, NPM version: {npm_ver}",
            "info",
            logger_to_use,
            app_settings,
        )
        log_message(
            f"{symbols.get('success', '✅')} NVM and Node.js installed. Please restart your terminal "
            f"or run 'source {app_settings.shell_rc_path}' to use them.",
            "success",
            logger_to_use,
            app_settings,
        )
        return True
    except Exception as e:
        log_message(
            f"{symbols.get('error', '❌')} Failed to install NVM and Node.js: {e}",
            "error",
            logger_to_use,
            app_settings,
            exc_info=True,
        )
        raise
