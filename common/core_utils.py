#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project: logging setup.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from provision.config_models import SYMBOLS_DEFAULT

SIMPLE_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"


class SymbolFormatter(logging.Formatter):
    """
    A formatter that exposes a per-level symbol as ``%(symbol)s``.
    """

    LEVEL_KEYS = {
        logging.DEBUG: "debug",
        logging.INFO: "info",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "critical",
    }

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        symbols: Optional[Dict[str, str]] = None,
    ):
        super().__init__(fmt, datefmt)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record: logging.LogRecord) -> str:
        key = self.LEVEL_KEYS.get(record.levelno)
        record.symbol = self.symbols.get(key, "") if key else ""
        return super().format(record)


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures the root logger.

    Existing root handlers are replaced, so calling this twice is safe.

    Args:
        log_level: The logging level. Defaults to logging.INFO.
        log_file: Optional file that receives the log as well as stdout.
        log_prefix: Optional text prepended to every line, e.g. "[PROVISION]".
        symbols: Level symbols for the formatter.
    """
    handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path, mode="a"))
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    handlers.append(logging.StreamHandler(sys.stdout))

    prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )
    formatter = SymbolFormatter(
        fmt=prefix + SIMPLE_LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        symbols=symbols,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}."
    )
