"""Omaha logging

Library modules only ask for loggers under the ``omaha`` namespace;
applications call :func:`configure_logging` once to attach handlers.
"""

import logging
import sys
from typing import Optional

from rich.logging import RichHandler

from .config import OmahaConfig

ROOT_LOGGER = "omaha"


def configure_logging(
    name: Optional[str] = ROOT_LOGGER,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_rich: Optional[bool] = None,
    config: Optional[OmahaConfig] = None,
) -> logging.Logger:
    """Set up a logger

    Creates and configures a logger with console output and optional file
    output. Arguments left as None are taken from ``config``.

    Args:
        name: logger name
        level: log level name
        log_file: path of an extra log file
        enable_rich: use rich for console output
        config: configuration supplying defaults, ``OmahaConfig.from_env()``
            when not given

    Returns:
        the configured logger
    """
    config = config or OmahaConfig.from_env()

    level = (level or config.log_level).upper()
    log_file = log_file or config.log_file
    enable_rich = enable_rich if enable_rich is not None else config.enable_rich_logging

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # drop handlers from an earlier call
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    if enable_rich:
        rich_handler = RichHandler(
            rich_tracebacks=True, show_time=True, show_level=True, show_path=True
        )
        rich_handler.setLevel(level)
        logger.addHandler(rich_handler)
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(config.log_format))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(config.log_format))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger

    Names outside the ``omaha`` namespace are nested under it so that one
    :func:`configure_logging` call covers every module.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
