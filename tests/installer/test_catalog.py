import functools
from unittest.mock import MagicMock

import pytest

from installer import catalog
from installer.catalog import DEFAULT_ACTIONS, build_default_registry

EXPECTED_ORDER = [
    "linux_essentials",
    "install_node_nvm",
    "install_caddy",
    "install_nginx",
    "install_haproxy",
    "install_uv",
    "setup_venv",
    "install_python_packages_with_uv",
]


def test_default_registry_order_and_labels(app_settings):
    registry = build_default_registry(app_settings)

    assert registry.names() == EXPECTED_ORDER
    assert [action.label for action in registry] == EXPECTED_ORDER
    assert registry.sentinel_index == 8


def test_default_registry_rejects_further_registration(app_settings):
    registry = build_default_registry(app_settings)

    with pytest.raises(RuntimeError):
        registry.register("extra", "extra", lambda: None)


def test_actions_are_bound_to_settings_and_logger(
    monkeypatch, app_settings, mock_logger
):
    fake = MagicMock(return_value=True)
    monkeypatch.setattr(
        catalog,
        "DEFAULT_ACTIONS",
        [("install_nginx", "install_nginx", fake)],
    )

    registry = build_default_registry(app_settings, mock_logger)
    action = registry.get(0)

    assert isinstance(action.run, functools.partial)
    assert action.run() is True
    fake.assert_called_once_with(app_settings, mock_logger)


def test_catalog_entries_are_callables():
    assert all(callable(function) for _, _, function in DEFAULT_ACTIONS)
