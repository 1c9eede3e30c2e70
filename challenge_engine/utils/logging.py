import logging
import sys
from typing import Optional, Union

from ..config import LOG_LEVEL

PACKAGE_LOGGER = "challenge_engine"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _level_number(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def _configure_package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(_level_number(LOG_LEVEL))
    return root


def setup_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Logger for a module of the package.

    Output goes through a single stdout handler on the package logger, so
    module loggers never stack handlers of their own. level overrides the
    LOG_LEVEL setting for this logger only.
    """
    _configure_package_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_level_number(level))
    return logger
