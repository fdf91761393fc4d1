"""Logging for jsx-info.

Per-file progress and run summaries are logged at INFO under the ``jsxinfo``
logger. ``--no-progress`` raises the level to WARNING so only unreadable files
and parse errors are reported; ``--verbose`` adds parser and discovery detail.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "jsxinfo"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``jsxinfo.<name>``, e.g. ``get_logger("parsing")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send jsx-info log records to stderr, and to ``log_file`` when given.

    ``verbose`` wins over ``quiet``. Report output goes to stdout, so the
    progress lines never mix with ``--format json``.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run several times in one process (tests)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    progress_handler = logging.StreamHandler()
    progress_handler.setLevel(level)
    progress_handler.setFormatter(logging.Formatter("[jsx-info] %(levelname)s %(message)s"))
    logger.addHandler(progress_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
