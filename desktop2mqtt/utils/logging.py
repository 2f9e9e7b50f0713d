"""Logging setup for the bridge process.

The ``desktop2mqtt`` package logs at the configured level. Library loggers
(aiomqtt, asyncio) have their own level so that a debug session of the
entity layer is not buried under broker traffic.
"""

import logging
import sys
from pathlib import Path

from ..config import LoggingConfig

PACKAGE_LOGGER = "desktop2mqtt"
LIBRARY_LOGGERS = ("aiomqtt", "asyncio")

# Handlers installed by setup_logging(); other root handlers are left alone
_installed_handlers: list[logging.Handler] = []


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """Configure logging from the ``logging`` config section.

    Safe to call again (e.g. after reloading the configuration): the
    handlers of the previous call are replaced, not duplicated.

    Args:
        config: Logging configuration

    Returns:
        The package logger
    """
    root_logger = logging.getLogger()

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    for handler in _build_handlers(config):
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(config.level)

    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(config.library_level)

    package_logger.info(
        f"Logging configured: level={config.level}, libraries={config.library_level}"
        + (f", file={config.file}" if config.file else "")
    )
    return package_logger
