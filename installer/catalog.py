# installer/catalog.py
# -*- coding: utf-8 -*-
"""
The fixed, ordered catalogue of provisioning actions shown in the menu.
"""

import functools
import logging
from typing import Any, Callable, List, Optional, Tuple

from installer.essentials_installer import install_linux_essentials
from installer.nodejs_installer import install_node_nvm
from installer.python_tooling_installer import (
    install_python_packages_with_uv,
    install_uv,
    setup_venv,
)
from installer.web_server_installer import (
    install_caddy,
    install_haproxy,
    install_nginx,
)
from provision.config_models import AppSettings
from provision.registry import ActionRegistry

ActionFunction = Callable[[AppSettings, Optional[logging.Logger]], Any]

# (name, label, function); the menu index is the position in this list.
DEFAULT_ACTIONS: List[Tuple[str, str, ActionFunction]] = [
    ("linux_essentials", "linux_essentials", install_linux_essentials),
    ("install_node_nvm", "install_node_nvm", install_node_nvm),
    ("install_caddy", "install_caddy", install_caddy),
    ("install_nginx", "install_nginx", install_nginx),
    ("install_haproxy", "install_haproxy", install_haproxy),
    ("install_uv", "install_uv", install_uv),
    ("setup_venv", "setup_venv", setup_venv),
    (
        "install_python_packages_with_uv",
        "install_python_packages_with_uv",
        install_python_packages_with_uv,
    ),
]


def build_default_registry(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> ActionRegistry:
    """
    Build the frozen registry of provisioning actions, each bound to
    `app_settings` and `current_logger` so it can be called without arguments.
    """
    registry = ActionRegistry()
    for name, label, function in DEFAULT_ACTIONS:
        registry.register(
            name,
            label,
            functools.partial(function, app_settings, current_logger),
        )
    return registry.freeze()
