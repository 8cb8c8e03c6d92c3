#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the markdown-walker command line.

Library modules only create loggers with ``logging.getLogger(__name__)``.
Handlers are attached by ``configure_logging``, which the CLI calls once per
run. The handlers it installs are tagged, so calling it again replaces them
without disturbing handlers owned by a host application or test runner.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from markdown_walker.constants import LOG_FORMAT, TRACE_DATE_FORMAT, TRACE_LOG_FORMAT

logger = logging.getLogger(__name__)

_HANDLER_TAG = "_markdown_walker_handler"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for a level number or name, WARNING if unknown."""
    if isinstance(log_level, int):
        return log_level
    level = getattr(logging, str(log_level).upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def installed_handlers(target: Optional[logging.Logger] = None) -> list[logging.Handler]:
    """Return the handlers ``configure_logging`` attached to ``target`` (the root logger by default)."""
    target = target or logging.getLogger()
    return [handler for handler in target.handlers if getattr(handler, _HANDLER_TAG, False)]


def _install(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    root.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send log records to stderr and, optionally, a log file.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name; unknown names mean WARNING
    log_file : str, optional
        File that receives a copy of every record, opened for appending
    trace_mode : bool, default False
        Prefix records with a timestamp, level and logger name

    Returns
    -------
    logging.Logger
        The root logger

    Notes
    -----
    A log file that cannot be opened is reported as a warning on stderr and
    otherwise ignored.

    """
    level = resolve_log_level(log_level)
    root = logging.getLogger()
    for handler in installed_handlers(root):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    if trace_mode:
        formatter = logging.Formatter(TRACE_LOG_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    _install(root, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            logger.warning("Could not open log file %s: %s", log_file, e)
        else:
            _install(root, file_handler, level, formatter)
            logger.info("Logging to file: %s", log_file)

    return root
