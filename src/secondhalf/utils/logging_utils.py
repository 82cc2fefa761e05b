"""
Logging setup for SecondHalf.

Every module logs through ``get_logger(__name__)``. The first call configures
the root logger for stdout; the level comes from ``SECONDHALF_LOG_LEVEL``
(default INFO).
"""

import logging
import os
from typing import Mapping, Optional

ENV_LOG_LEVEL = "SECONDHALF_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# Third-party loggers that would otherwise echo request URLs, API key included.
QUIET_LOGGERS = ("urllib3", "httpx")


def resolve_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """Return the log level named by ``SECONDHALF_LOG_LEVEL``, or INFO."""
    env = os.environ if environ is None else environ
    name = env.get(ENV_LOG_LEVEL, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger, configuring the root logger on first use.

    Parameters
    ----------
    name : str | None
        Logger name, usually ``__name__``. If None, the package logger
        ``secondhalf`` is returned.

    Returns
    -------
    logging.Logger
        Logger instance.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(level=resolve_level(), format=LOG_FORMAT)
        for noisy in QUIET_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logging.getLogger(name if name is not None else "secondhalf")
