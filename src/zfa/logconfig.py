import logging
import os
from typing import Optional

TRACE = 5

logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "zfa"
LEVEL_ENV_VAR = "ZFA_LOGGING_LEVEL"
DEV_LOGGER_ENV_VAR = "ZFA_USE_DEV_LOGGER"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] - %(message)s"

_installed_handler: Optional[logging.Handler] = None


def get_level() -> str:
    """Return the level named by ``ZFA_LOGGING_LEVEL``, or ``WARNING`` if unset."""
    return os.getenv(LEVEL_ENV_VAR, "WARNING").upper()


def _make_handler(level: str, fmt: str) -> logging.Handler:
    handler: logging.Handler
    if os.getenv(DEV_LOGGER_ENV_VAR, "").lower() == "true":
        handler = logging.StreamHandler()
    else:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def configure_root_logger(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Configure the ``zfa`` logger from the environment and return it.

    Records go to stderr only when ``ZFA_USE_DEV_LOGGER`` is ``true``; otherwise
    they are discarded by a ``NullHandler``. Calling this again swaps out the
    handler installed by the previous call instead of adding another."""
    global _installed_handler

    level = level or get_level()
    logger = logging.getLogger(LOGGER_NAME)
    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)
    _installed_handler = _make_handler(level, fmt)
    logger.setLevel(level)
    logger.addHandler(_installed_handler)
    return logger
