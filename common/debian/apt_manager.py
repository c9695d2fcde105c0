# common/debian/apt_manager.py
# -*- coding: utf-8 -*-
import logging
import subprocess
from typing import List, Optional, Union

from common.command_utils import (
    command_exists,
    run_command,
    run_elevated_command,
)
from provision.config_models import AppSettings


class AptManager:
    """
    A thin manager for Debian apt packages and third-party apt repositories,
    driven through the apt-get, dpkg-query, curl and gpg command-line tools.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("apt-get"):
            self.logger.critical(
                "'apt-get' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'apt-get' not found. Is this a Debian-based system?"
            )

    def update(self, app_settings: AppSettings) -> bool:
        """
        Refreshes the package lists with 'apt-get update'.

        Args:
            app_settings: The application settings.

        Returns:
            True if successful, False otherwise.
        """
        self.logger.info("Updating apt package lists via 'apt-get update'...")
        try:
            run_elevated_command(
                ["apt-get", "update", "-yq"],
                app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self.logger.error(f"Failed to update apt cache: {e}")
            return False
        self.logger.info("Apt package lists updated successfully.")
        return True

    def is_installed(self, pkg_name: str, app_settings: AppSettings) -> bool:
        try:
            result = run_command(
                ["dpkg-query", "-W", "-f=${db:Status-Status}", pkg_name],
                app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError:
            return False
        return result.stdout.strip() == "installed"

    def install(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
    ) -> bool:
        """
        Installs packages with 'apt-get install', skipping those dpkg already
        reports as installed.

        Args:
            packages: A single package name or a list of package names.
            app_settings: The application settings.

        Returns:
            True if every package is installed afterwards, False otherwise.
        """
        if not isinstance(packages, list):
            packages = [packages]

        packages_to_install = []
        for pkg_name in packages:
            if self.is_installed(pkg_name, app_settings):
                self.logger.info(
                    f"Package '{pkg_name}' is already installed. Skipping."
                )
            else:
                self.logger.info(
                    f"Marking package for installation: {pkg_name}"
                )
                packages_to_install.append(pkg_name)

        if not packages_to_install:
            self.logger.info("All requested packages are already installed.")
            return True

        self.logger.info(
            f"Committing installation for: {', '.join(packages_to_install)}"
        )
        try:
            run_elevated_command(
                ["apt-get", "install", "-yq"] + packages_to_install,
                app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self.logger.error(f"Failed to install packages: {e}")
            return False
        self.logger.info("Packages installed successfully.")
        return True

    def add_gpg_key_from_url(
        self, key_url: str, keyring_path: str, app_settings: AppSettings
    ) -> bool:
        """
        Downloads an ASCII-armored key and writes it, dearmored, to
        `keyring_path` readable by everyone (apt runs as _apt).

        Returns:
            True if successful, False otherwise.
        """
        self.logger.info(f"Adding GPG key from {key_url} to {keyring_path}")
        try:
            key_result = run_command(
                ["curl", "-1sLf", key_url],
                app_settings,
                capture_output=True,
                current_logger=self.logger,
            )
            run_elevated_command(
                ["gpg", "--batch", "--yes", "--dearmor", "-o", keyring_path],
                app_settings,
                cmd_input=key_result.stdout,
                current_logger=self.logger,
            )
            run_elevated_command(
                ["chmod", "o+r", keyring_path],
                app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self.logger.error(f"Failed to add GPG key: {e}")
            return False
        self.logger.info("GPG key added and permissions set.")
        return True

    def add_source_list(
        self,
        list_url: str,
        list_path: str,
        app_settings: AppSettings,
    ) -> bool:
        """
        Downloads a one-line-style apt source list published by a vendor and
        installs it at `list_path`, then refreshes the package lists.

        Returns:
            True if successful, False otherwise.
        """
        self.logger.info(f"Adding apt source list {list_path} from {list_url}")
        try:
            list_result = run_command(
                ["curl", "-1sLf", list_url],
                app_settings,
                capture_output=True,
                current_logger=self.logger,
            )
            run_elevated_command(
                ["tee", list_path],
                app_settings,
                cmd_input=list_result.stdout,
                capture_output=True,
                current_logger=self.logger,
            )
            run_elevated_command(
                ["chmod", "o+r", list_path],
                app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self.logger.error(
                f"Failed to create source list '{list_path}': {e}"
            )
            return False
        self.logger.info(f"Successfully created source list: {list_path}")

        return self.update(app_settings)
