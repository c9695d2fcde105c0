# provision/selector.py
# -*- coding: utf-8 -*-
"""
Interactive checklist used to choose which provisioning actions to run.

The operator types whitespace-separated indices to toggle entries, and the
completion word (or the index of the trailing "done" entry) to confirm.
"""

import logging
import re
import sys
from typing import Callable, Iterator, List, Optional, Set, TextIO

from common.command_utils import get_symbols, log_message
from provision.config_models import AppSettings
from provision.registry import ActionRegistry

module_logger = logging.getLogger(__name__)

SELECTING = "SELECTING"
CONFIRMED = "CONFIRMED"

PROMPT = "Enter number(s) to toggle, or type '{token}' to execute: "
RULE = "-" * 76
CLEAR_SCREEN = "\033[2J\033[H"

_INDEX_TOKEN = re.compile(r"^[0-9]+$")


class SelectionSet:
    """
    The set of registry indices chosen by the operator.

    Every member is in ``[0, limit)``; out-of-range indices are refused by
    `toggle`.
    """

    def __init__(self, limit: int):
        self.limit = limit
        self._indices: Set[int] = set()

    def toggle(self, index: int) -> bool:
        """
        Add `index` if absent, remove it if present.

        Returns:
            True if the index is selected after the call.

        Raises:
            IndexError: If `index` is outside ``[0, limit)``.
        """
        if not 0 <= index < self.limit:
            raise IndexError(
                f"Selection index {index} out of range (0..{self.limit - 1})"
            )
        if index in self._indices:
            self._indices.discard(index)
            return False
        self._indices.add(index)
        return True

    def ordered(self) -> List[int]:
        return sorted(self._indices)

    def __contains__(self, index: object) -> bool:
        return index in self._indices

    def __len__(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.ordered())

    def __repr__(self) -> str:
        return f"SelectionSet({self.ordered()})"


class ChecklistSelector:
    """
    Two-state selection loop over an action registry.

    ``SELECTING`` repeats render / read / apply; ``CONFIRMED`` is terminal
    and reached by the completion word or the sentinel index.
    """

    def __init__(
        self,
        registry: ActionRegistry,
        app_settings: AppSettings,
        current_logger: Optional[logging.Logger] = None,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
    ):
        self.registry = registry
        self.app_settings = app_settings
        self.logger = current_logger if current_logger else module_logger
        self.input_func = input_func
        self.output = output if output is not None else sys.stdout
        self.selection = SelectionSet(registry.count())
        self.state = SELECTING
        self._notices: List[str] = []

    @property
    def completion_token(self) -> str:
        return self.app_settings.completion_token

    def _write(self, line: str = "") -> None:
        print(line, file=self.output)

    def _should_clear(self) -> bool:
        if not self.app_settings.clear_screen:
            return False
        isatty = getattr(self.output, "isatty", None)
        return bool(isatty and isatty())

    def render(self) -> None:
        """Redraw the checklist, followed by any pending invalid-token notices."""
        if self._should_clear():
            self.output.write(CLEAR_SCREEN)

        self._write(
            "Select options to install/run. Enter numbers separated by spaces to toggle them."
        )
        self._write(RULE)
        for index, action in enumerate(self.registry):
            mark = "x" if index in self.selection else " "
            self._write(f" [{mark}]  {index}. {action.label}")
        self._write(
            f" [ ]  {self.registry.sentinel_index}. {self.completion_token}"
        )
        self._write(RULE)

        for notice in self._notices:
            self._write(notice)
        self._notices = []

    def read_command(self) -> str:
        """
        Block until the operator enters one line.

        End of input confirms the current selection, so a closed stdin
        cannot keep the loop spinning.
        """
        try:
            return self.input_func(
                PROMPT.format(token=self.completion_token)
            )
        except EOFError:
            log_message(
                f"{get_symbols(self.app_settings).get('warning', '!')} No user input (EOF), confirming current selection.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return self.completion_token

    def is_completion(self, cmd: str) -> bool:
        """Exact match on the completion word or the sentinel number."""
        return cmd in (
            self.completion_token,
            str(self.registry.sentinel_index),
        )

    def apply_command(self, cmd: str) -> bool:
        """
        Apply one line of input.

        Returns:
            True if the command confirmed the selection.
        """
        cmd = cmd.strip()
        if self.is_completion(cmd):
            self.state = CONFIRMED
            log_message(
                f"Selection confirmed: {self.selection.ordered()}",
                "debug",
                self.logger,
                self.app_settings,
            )
            return True

        for token in cmd.split():
            index = self.parse_index(token)
            if index is None:
                self._reject(token)
                continue
            selected = self.selection.toggle(index)
            log_message(
                f"Toggled {self.registry.get(index).name} {'on' if selected else 'off'}",
                "debug",
                self.logger,
                self.app_settings,
            )
        return False

    def parse_index(self, token: str) -> Optional[int]:
        """Return the index named by `token`, or None if it names no action."""
        if not _INDEX_TOKEN.match(token):
            return None
        index = int(token)
        if index >= self.registry.count():
            return None
        return index

    def _reject(self, token: str) -> None:
        symbols = get_symbols(self.app_settings)
        notice = (
            f"{symbols.get('warning', '!')} Ignoring invalid selection '{token}': "
            f"enter a number from 0 to {self.registry.count() - 1} "
            f"or '{self.completion_token}'."
        )
        self._notices.append(notice)
        log_message(
            f"Invalid selection token: {token!r}",
            "debug",
            self.logger,
            self.app_settings,
        )

    def run(self) -> SelectionSet:
        """Loop until the operator confirms, then return the selection."""
        while self.state == SELECTING:
            self.render()
            self.apply_command(self.read_command())
        return self.selection
