import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from common.command_utils import (
    command_exists,
    get_symbols,
    log_message,
    run_command,
    run_elevated_command,
)
from provision.config_models import SYMBOLS_DEFAULT


@pytest.mark.parametrize(
    "level, method",
    [
        ("debug", "debug"),
        ("info", "info"),
        ("success", "info"),
        ("warning", "warning"),
        ("error", "error"),
        ("critical", "critical"),
    ],
)
def test_log_message_dispatches_on_level(mock_logger, level, method):
    log_message("hello", level, mock_logger)

    getattr(mock_logger, method).assert_called_once_with(
        "hello", exc_info=False
    )


def test_log_message_defaults_to_module_logger(mocker):
    module_logger = mocker.patch("common.command_utils.module_logger")

    log_message("fallback")

    module_logger.info.assert_called_once_with("fallback", exc_info=False)


def test_get_symbols_falls_back_to_defaults(app_settings):
    assert get_symbols(None) is SYMBOLS_DEFAULT
    assert get_symbols(app_settings)["warning"] == "!"


def test_run_command_success_logs_command(mocker, mock_logger, app_settings):
    mock_run = mocker.patch(
        "common.command_utils.subprocess.run",
        return_value=MagicMock(stdout="ok\n", returncode=0),
    )

    result = run_command(
        ["echo", "hi there"],
        app_settings,
        capture_output=True,
        current_logger=mock_logger,
    )

    assert result.stdout == "ok\n"
    mock_run.assert_called_once_with(
        ["echo", "hi there"],
        check=True,
        capture_output=True,
        text=True,
        input=None,
        env=None,
    )
    mock_logger.info.assert_called_once_with(
        '⚙️ Executing: echo "hi there"', exc_info=False
    )
    mock_logger.debug.assert_called_once_with("   stdout: ok", exc_info=False)


def test_run_command_passes_input_and_env(mocker, mock_logger, app_settings):
    mock_run = mocker.patch("common.command_utils.subprocess.run")

    run_command(
        ["sh"],
        app_settings,
        cmd_input="echo hi\n",
        current_logger=mock_logger,
        env={"PATH": "/usr/bin"},
    )

    assert mock_run.call_args.kwargs["input"] == "echo hi\n"
    assert mock_run.call_args.kwargs["env"] == {"PATH": "/usr/bin"}
    assert "shell" not in mock_run.call_args.kwargs


def test_run_command_failure_logs_and_reraises(
    mocker, mock_logger, app_settings
):
    mocker.patch(
        "common.command_utils.subprocess.run",
        side_effect=subprocess.CalledProcessError(
            2, ["false"], output="", stderr="boom\n"
        ),
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_command(["false"], app_settings, current_logger=mock_logger)

    mock_logger.error.assert_any_call(
        "❌ Command `false` failed (rc 2).", exc_info=False
    )
    mock_logger.error.assert_any_call("   stderr: boom", exc_info=False)


def test_run_command_missing_executable(mocker, mock_logger, app_settings):
    error = FileNotFoundError(2, "No such file", "nosuchtool")
    mocker.patch("common.command_utils.subprocess.run", side_effect=error)

    with pytest.raises(FileNotFoundError):
        run_command(["nosuchtool"], app_settings, current_logger=mock_logger)

    mock_logger.error.assert_called_once_with(
        "❌ Command not found: nosuchtool. Ensure it's installed and in PATH.",
        exc_info=False,
    )


@pytest.mark.parametrize("euid, prefix", [(0, []), (1000, ["sudo"])])
def test_run_elevated_command_prefix(mocker, app_settings, euid, prefix):
    mocker.patch("common.command_utils.os.geteuid", return_value=euid)
    mock_run_command = mocker.patch("common.command_utils.run_command")

    run_elevated_command(["apt-get", "update"], app_settings)

    assert mock_run_command.call_args.args[0] == prefix + [
        "apt-get",
        "update",
    ]


def test_command_exists(mocker):
    mocker.patch(
        "common.command_utils.shutil.which",
        side_effect=lambda name: "/usr/bin/git" if name == "git" else None,
    )

    assert command_exists("git") is True
    assert command_exists("nope") is False


def test_module_logger_name():
    from common import command_utils

    assert isinstance(command_utils.module_logger, logging.Logger)
    assert command_utils.module_logger.name == "common.command_utils"
