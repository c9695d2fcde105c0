# provision/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the provisioning menu,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from typing import Dict, List

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
LOG_PREFIX_DEFAULT: str = "[PROVISION]"
COMPLETION_TOKEN_DEFAULT: str = "done"
SHELL_RC_PATH_DEFAULT: str = "~/.bashrc"

LINUX_ESSENTIALS_DEFAULT: List[str] = [
    "git",
    "curl",
    "wget",
    "build-essential",
    "unzip",
    "zip",
    "gnupg",
    "ca-certificates",
    "htop",
    "tree",
    "jq",
    "ufw",
    "openssh-client",
]

NVM_VERSION_DEFAULT: str = "v0.39.7"
NVM_INSTALL_URL_TEMPLATE_DEFAULT: str = (
    "https://raw.githubusercontent.com/nvm-sh/nvm/{nvm_version}/install.sh"
)
NODE_VERSION_DEFAULT: str = "24"

CADDY_GPG_KEY_URL_DEFAULT: str = (
    "https://dl.cloudsmith.io/public/caddy/stable/gpg.key"
)
CADDY_SOURCE_LIST_URL_DEFAULT: str = (
    "https://dl.cloudsmith.io/public/caddy/stable/debian.deb.txt"
)
CADDY_KEYRING_PATH_DEFAULT: str = (
    "/usr/share/keyrings/caddy-stable-archive-keyring.gpg"
)
CADDY_SOURCE_LIST_PATH_DEFAULT: str = (
    "/etc/apt/sources.list.d/caddy-stable.list"
)

UV_INSTALL_URL_DEFAULT: str = "https://astral.sh/uv/install.sh"
VENV_DIR_DEFAULT: str = "venv"
PYTHON_PACKAGES_DEFAULT: List[str] = ["torch", "numpy", "langchain"]

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}


class NodeSettings(BaseModel):
    """Node.js (via nvm) settings."""

    nvm_version: str = Field(
        default=NVM_VERSION_DEFAULT, description="nvm release tag to install."
    )
    nvm_install_url_template: str = Field(
        default=NVM_INSTALL_URL_TEMPLATE_DEFAULT,
        description="URL of the nvm installer. Supports the {nvm_version} placeholder.",
    )
    node_version: str = Field(
        default=NODE_VERSION_DEFAULT,
        description="Node.js version passed to 'nvm install' and made the default alias.",
    )

    @property
    def nvm_install_url(self) -> str:
        return self.nvm_install_url_template.format(
            nvm_version=self.nvm_version
        )


class CaddySettings(BaseModel):
    """Caddy apt repository settings."""

    gpg_key_url: str = Field(default=CADDY_GPG_KEY_URL_DEFAULT)
    source_list_url: str = Field(default=CADDY_SOURCE_LIST_URL_DEFAULT)
    keyring_path: str = Field(default=CADDY_KEYRING_PATH_DEFAULT)
    source_list_path: str = Field(default=CADDY_SOURCE_LIST_PATH_DEFAULT)


class PythonToolingSettings(BaseModel):
    """uv and virtual environment settings."""

    uv_install_url: str = Field(
        default=UV_INSTALL_URL_DEFAULT,
        description="URL of the uv installer script.",
    )
    venv_dir: str = Field(
        default=VENV_DIR_DEFAULT,
        description="Virtual environment directory, relative to the working directory.",
    )
    packages: List[str] = Field(
        default_factory=lambda: list(PYTHON_PACKAGES_DEFAULT),
        description="Packages installed into the virtual environment with 'uv pip install'.",
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROVISION_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT, description="Prefix for log messages."
    )
    completion_token: str = Field(
        default=COMPLETION_TOKEN_DEFAULT,
        min_length=1,
        description="Word that ends the selection loop.",
    )
    clear_screen: bool = Field(
        default=True,
        description="Clear the terminal before each checklist redraw (only when stdout is a TTY).",
    )
    refresh_package_lists: bool = Field(
        default=True,
        description="Run 'apt-get update' once before executing the selected actions.",
    )
    reload_environment: bool = Field(
        default=True,
        description="Re-read the shell rc file into the process environment after the run.",
    )
    shell_rc_path: str = Field(
        default=SHELL_RC_PATH_DEFAULT,
        description="Shell configuration file sourced by the environment reload.",
    )

    linux_essentials: List[str] = Field(
        default_factory=lambda: list(LINUX_ESSENTIALS_DEFAULT),
        description="Packages installed by the 'linux_essentials' action.",
    )
    node: NodeSettings = Field(default_factory=NodeSettings)
    caddy: CaddySettings = Field(default_factory=CaddySettings)
    python: PythonToolingSettings = Field(
        default_factory=PythonToolingSettings
    )

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )
