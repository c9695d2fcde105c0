# provision/environment.py
# -*- coding: utf-8 -*-
"""
Best-effort refresh of the process environment after provisioning.

Tools such as uv and nvm add themselves to PATH by editing the operator's
shell rc file. A Python process cannot "source" that file, so the file is
sourced in a bash child and the resulting environment is copied back.
Many rc files return early when the shell is not interactive, in which case
the reload changes nothing; callers must not depend on it.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from common.command_utils import command_exists, get_symbols, log_message
from provision.config_models import AppSettings

module_logger = logging.getLogger(__name__)

USER_BIN_DIRS = ("~/.local/bin", "~/.cargo/bin")

# Shell bookkeeping variables that must not leak back into this process.
_IGNORED_VARIABLES = {"_", "SHLVL", "PWD", "OLDPWD", "BASH_EXECUTION_STRING"}


def prepend_user_bin_dirs(env: Optional[Dict[str, str]] = None) -> List[str]:
    """
    Put the per-user tool directories in front of PATH when they exist.

    Args:
        env: Mapping to update. Defaults to os.environ.

    Returns:
        The directories that were added.
    """
    target = os.environ if env is None else env
    path_entries = target.get("PATH", "").split(os.pathsep)
    added = []
    for raw_dir in USER_BIN_DIRS:
        bin_dir = str(Path(raw_dir).expanduser())
        if bin_dir not in path_entries and Path(bin_dir).is_dir():
            path_entries.insert(0, bin_dir)
            added.append(bin_dir)
    if added:
        target["PATH"] = os.pathsep.join(p for p in path_entries if p)
    return added


def parse_env_dump(raw: str) -> Dict[str, str]:
    """Parse the NUL-separated output of ``env -0``."""
    variables = {}
    for entry in raw.split("\0"):
        if not entry or "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        if key in _IGNORED_VARIABLES or key.startswith("BASH_FUNC_"):
            continue
        variables[key] = value
    return variables


def reload_shell_environment(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    """
    Source the configured shell rc file and merge its environment into
    os.environ.

    Never raises; every failure is logged as a warning.

    Returns:
        True if the rc file was sourced and its environment merged.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    for bin_dir in prepend_user_bin_dirs():
        log_message(
            f"Added {bin_dir} to PATH", "debug", logger_to_use, app_settings
        )

    rc_path = Path(app_settings.shell_rc_path).expanduser()
    if not rc_path.is_file():
        log_message(
            f"{symbols.get('warning', '!')} Shell configuration '{rc_path}' not found; environment not reloaded.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False
    if not command_exists("bash"):
        log_message(
            f"{symbols.get('warning', '!')} 'bash' not found; cannot source '{rc_path}'.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False

    log_message(
        f"{symbols.get('gear', '⚙️')} Sourcing {rc_path} to reload the environment...",
        "info",
        logger_to_use,
        app_settings,
    )
    # Not routed through run_command: the captured environment may hold secrets.
    try:
        result = subprocess.run(
            [
                "bash",
                "-c",
                'source "$1" >/dev/null 2>&1; env -0',
                "bash",
                str(rc_path),
            ],
            capture_output=True,
            text=True,
            # Matches os.environ's own decoding, so undecodable bytes round-trip.
            errors="surrogateescape",
            timeout=60,
            check=True,
        )
    except (subprocess.SubprocessError, OSError) as e:
        log_message(
            f"{symbols.get('warning', '!')} Could not reload environment from '{rc_path}': {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False

    changed = 0
    for key, value in parse_env_dump(result.stdout).items():
        if os.environ.get(key) != value:
            os.environ[key] = value
            changed += 1
    prepend_user_bin_dirs()

    log_message(
        f"Environment reloaded from {rc_path} ({changed} variable(s) changed).",
        "info",
        logger_to_use,
        app_settings,
    )
    return True

