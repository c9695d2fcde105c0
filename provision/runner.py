# provision/runner.py
# -*- coding: utf-8 -*-
"""
Runs the selected provisioning actions one after another.

Actions run in ascending registry order, each framed by a start and a
finish banner. A failing action is logged and the run moves on to the next
one. Nothing is rolled back.
"""

import logging
import sys
from typing import Any, Callable, Iterable, List, Optional, TextIO

from pydantic import BaseModel, Field

from common.command_utils import get_symbols, log_message
from common.debian.apt_manager import AptManager
from provision.config_models import AppSettings
from provision.registry import ActionRegistry

module_logger = logging.getLogger(__name__)

BANNER_RULE = "#" * 60

Hook = Callable[[AppSettings, Optional[logging.Logger]], Any]


class RunReport(BaseModel):
    """Names of the actions a run executed, in execution order."""

    executed: List[str] = Field(default_factory=list)
    succeeded: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)


def refresh_package_lists(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    """Default preparation hook: 'apt-get update' once before the run."""
    return AptManager(logger=current_logger).update(app_settings)


class ActionRunner:
    def __init__(
        self,
        registry: ActionRegistry,
        app_settings: AppSettings,
        current_logger: Optional[logging.Logger] = None,
        prepare: Optional[Hook] = None,
        reload_environment: Optional[Hook] = None,
        output: Optional[TextIO] = None,
    ):
        """
        Args:
            registry: The frozen action registry.
            app_settings: The application settings.
            current_logger: Logger to use. Defaults to the module logger.
            prepare: Called once before the first action (package list refresh).
            reload_environment: Called once after the last action.
            output: Stream receiving the banners. Defaults to stdout.
        """
        self.registry = registry
        self.app_settings = app_settings
        self.logger = current_logger if current_logger else module_logger
        self.prepare = prepare
        self.reload_environment = reload_environment
        self.output = output if output is not None else sys.stdout

    def _write(self, line: str = "") -> None:
        print(line, file=self.output)

    def _run_hook(self, hook: Optional[Hook], description: str) -> None:
        if hook is None:
            return
        symbols = get_symbols(self.app_settings)
        try:
            if hook(self.app_settings, self.logger) is False:
                log_message(
                    f"{symbols.get('warning', '!')} {description} did not complete; continuing.",
                    "warning",
                    self.logger,
                    self.app_settings,
                )
        except Exception as e:
            log_message(
                f"{symbols.get('warning', '!')} {description} failed: {e}; continuing.",
                "warning",
                self.logger,
                self.app_settings,
            )

    def run(self, selection: Iterable[int]) -> RunReport:
        """
        Execute the actions at the selected indices in ascending order.

        Exceptions raised by an action are logged and do not stop the run.
        SystemExit and KeyboardInterrupt are not intercepted.

        Returns:
            A report of executed, succeeded and failed action names.
        """
        report = RunReport()
        indices = sorted(set(selection))
        # Resolve every index up front so a bad selection fails before any side effect.
        actions = [self.registry.get(index) for index in indices]

        if not actions:
            self._write("No options selected. Exiting.")
            log_message(
                "Nothing selected; no actions executed.",
                "info",
                self.logger,
                self.app_settings,
            )
            return report

        symbols = get_symbols(self.app_settings)
        self._write("Executing selected functions...")
        self._run_hook(self.prepare, "Updating package lists")

        for action in actions:
            self._write()
            self._write(BANNER_RULE)
            self._write(f"### Running: {action.name}")
            self._write(BANNER_RULE)
            report.executed.append(action.name)

            try:
                result = action.run()
            except Exception as e:
                log_message(
                    f"{symbols.get('error', '❌')} Action '{action.name}' failed: {e}",
                    "error",
                    self.logger,
                    self.app_settings,
                )
                report.failed.append(action.name)
            else:
                if result is False:
                    log_message(
                        f"{symbols.get('error', '❌')} Action '{action.name}' did not complete.",
                        "error",
                        self.logger,
                        self.app_settings,
                    )
                    report.failed.append(action.name)
                else:
                    report.succeeded.append(action.name)

            self._write(f"### Finished: {action.name}")

        if self.reload_environment is not None:
            self._write()
            self._write(BANNER_RULE)
            self._write("### Reloading shell environment")
            self._write(BANNER_RULE)
            self._run_hook(self.reload_environment, "Environment reload")

        self._write()
        self._write(BANNER_RULE)
        self._write("All selected tasks are complete.")
        self._write(BANNER_RULE)

        if report.failed:
            log_message(
                f"{symbols.get('warning', '!')} {len(report.failed)} of {len(report.executed)} action(s) failed: "
                f"{', '.join(report.failed)}. Re-run the menu to retry them.",
                "warning",
                self.logger,
                self.app_settings,
            )
        else:
            log_message(
                f"{symbols.get('success', '✅')} {len(report.succeeded)} action(s) completed.",
                "success",
                self.logger,
                self.app_settings,
            )
        return report
