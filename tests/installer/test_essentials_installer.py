from unittest.mock import patch

from installer.essentials_installer import install_linux_essentials
from provision.config_models import LINUX_ESSENTIALS_DEFAULT


@patch("installer.essentials_installer.AptManager")
def test_install_linux_essentials_installs_configured_packages(
    mock_apt_manager, app_settings, mock_logger
):
    mock_apt_manager.return_value.install.return_value = True

    assert install_linux_essentials(app_settings, mock_logger) is True

    mock_apt_manager.assert_called_once_with(logger=mock_logger)
    mock_apt_manager.return_value.install.assert_called_once_with(
        LINUX_ESSENTIALS_DEFAULT, app_settings
    )


@patch("installer.essentials_installer.AptManager")
def test_install_linux_essentials_failure(
    mock_apt_manager, app_settings, mock_logger
):
    mock_apt_manager.return_value.install.return_value = False

    assert install_linux_essentials(app_settings, mock_logger) is False
    mock_logger.error.assert_called_once()


@patch("installer.essentials_installer.AptManager")
def test_install_linux_essentials_custom_list(mock_apt_manager, app_settings):
    app_settings.linux_essentials = ["git", "jq"]
    mock_apt_manager.return_value.install.return_value = True

    install_linux_essentials(app_settings)

    mock_apt_manager.return_value.install.assert_called_once_with(
        ["git", "jq"], app_settings
    )
