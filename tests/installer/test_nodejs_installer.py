# File: tests/installer/test_nodejs_installer.py
import shlex
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from installer.nodejs_installer import get_nvm_dir, install_node_nvm, run_with_nvm


@pytest.fixture
def nvm_dir(tmp_path, monkeypatch):
    """An NVM_DIR that already contains nvm.sh."""
    directory = tmp_path / ".nvm"
    directory.mkdir()
    (directory / "nvm.sh").write_text("# nvm\n")
    monkeypatch.setenv("NVM_DIR", str(directory))
    return directory


def test_get_nvm_dir_honours_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("NVM_DIR", str(tmp_path))
    assert get_nvm_dir() == tmp_path


@patch("installer.nodejs_installer.run_command")
def test_run_with_nvm_sources_nvm_first(mock_run_command, nvm_dir, app_settings):
    run_with_nvm(["nvm use 24", "node -v"], app_settings)

    command = mock_run_command.call_args.args[0]
    assert command[:2] == ["bash", "-c"]
    assert command[2] == (
        f"export NVM_DIR={shlex.quote(str(nvm_dir))}; "
        '. "$NVM_DIR/nvm.sh"; nvm use 24 && node -v'
    )


@patch("installer.nodejs_installer.run_command")
def test_install_node_nvm_success(
    mock_run_command, nvm_dir, app_settings, mock_logger
):
    """The install script is piped to bash, then node is installed and pinned."""
    mock_run_command.side_effect = [
        MagicMock(stdout="#!/usr/bin/env bash\n"),
        MagicMock(returncode=0),
        MagicMock(returncode=0),
        MagicMock(returncode=0, stdout="v24.1.0\n10.9.2\n"),
    ]

    assert install_node_nvm(app_settings, current_logger=mock_logger) is True

    calls = mock_run_command.call_args_list
    assert calls[0].args[0] == [
        "curl",
        "-fsSL",
        "https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.7/install.sh",
    ]
    assert calls[1].args[0] == ["bash"]
    assert calls[1].kwargs["cmd_input"] == "#!/usr/bin/env bash\n"
    install_script = calls[2].args[0][2]
    assert "nvm install 24 && nvm alias default 24 && nvm use 24" in install_script
    mock_logger.info.assert_any_call(
        "Node version: v24.1.0, NPM version: 10.9.2", exc_info=False
    )


@patch("installer.nodejs_installer.run_command")
def test_install_node_nvm_missing_nvm_script(
    mock_run_command, tmp_path, monkeypatch, app_settings, mock_logger
):
    monkeypatch.setenv("NVM_DIR", str(tmp_path / "absent"))
    mock_run_command.return_value = MagicMock(stdout="script")

    assert install_node_nvm(app_settings, current_logger=mock_logger) is False

    assert mock_run_command.call_count == 2
    mock_logger.error.assert_called_once()


@patch("installer.nodejs_installer.run_command")
def test_install_node_nvm_download_failure_is_raised(
    mock_run_command, nvm_dir, app_settings, mock_logger
):
    mock_run_command.side_effect = subprocess.CalledProcessError(22, "curl")

    with pytest.raises(subprocess.CalledProcessError):
        install_node_nvm(app_settings, current_logger=mock_logger)

    assert mock_logger.error.call_args.kwargs["exc_info"] is True


@patch("installer.nodejs_installer.run_command")
def test_install_node_nvm_version_probe_failure(
    mock_run_command, nvm_dir, app_settings, mock_logger
):
    mock_run_command.side_effect = [
        MagicMock(stdout="script"),
        MagicMock(returncode=0),
        MagicMock(returncode=0),
        MagicMock(returncode=127, stdout=""),
    ]

    assert install_node_nvm(app_settings, current_logger=mock_logger) is True
    mock_logger.info.assert_any_call(
        "Node version: N/A, NPM version: N/A", exc_info=False
    )
