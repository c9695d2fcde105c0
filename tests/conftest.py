# tests/conftest.py
import logging
from unittest.mock import MagicMock

import pytest

from provision.config_models import AppSettings
from provision.registry import ActionRegistry


@pytest.fixture
def app_settings(tmp_path):
    """AppSettings with test-friendly values and no screen clearing."""
    return AppSettings(
        log_prefix="test_prefix",
        clear_screen=False,
        shell_rc_path=str(tmp_path / ".bashrc"),
        python={"venv_dir": str(tmp_path / "venv")},
        symbols={
            "warning": "!",
            "gear": "⚙️",
            "error": "❌",
            "success": "✅",
        },
    )


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def abc_registry():
    """Registry of three recording actions A, B, C; calls land in `.calls`."""
    registry = ActionRegistry()
    registry.calls = []
    for name in ("A", "B", "C"):
        registry.register(
            name, name, lambda name=name: registry.calls.append(name)
        )
    return registry.freeze()
