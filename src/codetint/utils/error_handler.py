# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Custom exceptions and logging setup."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from codetint.core.constants import APP_NAME, APP_VERSION

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class CodeTintError(Exception):
    """Base exception for codetint."""


class ConfigurationError(CodeTintError):
    """Invalid or contradictory engine configuration."""


class StyleResolutionError(CodeTintError):
    """A declared style setting could not be resolved to a value."""


class ThemeValidationError(CodeTintError, ValueError):
    """A theme definition is malformed or unknown."""


def setup_logging(debug: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Configure package logging."""
    logger = logging.getLogger(APP_NAME)
    # Guard against duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if debug else logging.INFO)
    console.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console)

    if log_file is not None:
        # 5 MB max, 3 backups
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024,
            backupCount=3, encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.debug(f"{APP_NAME} {APP_VERSION} logging configured")
    return logger
