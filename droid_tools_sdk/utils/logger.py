"""
SDK logging setup.

Configures the root logger for the host application and gives the
``droid_tools_sdk`` logger tree a level of its own, so tool dispatch can be
traced without turning on debug output everywhere.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

SDK_LOGGER = "droid_tools_sdk"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# HTTP client libraries used by the conversation layer
_QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "openai")


def parse_level(value: Union[int, str]) -> int:
    """``"debug"``, ``"WARNING"`` or ``10`` to a logging level.

    Raises:
        ValueError: For unknown level names.
    """
    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: str = "",
    debug: bool = False,
    sdk_level: Optional[Union[int, str]] = None,
) -> logging.Logger:
    """
    Configure the root logger and the SDK logger.

    Args:
        level: Root log level.
        log_file: Log file path (empty for terminal only).
        debug: Switch both the root and the SDK logger to DEBUG.
        sdk_level: Level of the ``droid_tools_sdk`` loggers. Defaults to
            *level*.

    Returns:
        The ``droid_tools_sdk`` logger.
    """
    if debug:
        level = sdk_level = logging.DEBUG
    level = parse_level(level)
    sdk_level = parse_level(sdk_level) if sdk_level is not None else level

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    sdk_logger = logging.getLogger(SDK_LOGGER)
    sdk_logger.setLevel(sdk_level)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        # no handler level: logger levels decide what reaches the file
        fh = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)

    return sdk_logger
