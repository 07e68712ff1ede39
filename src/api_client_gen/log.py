"""Logging configuration for the generator.

Skipped endpoints are reported at WARNING, catalog notes at INFO and pass
progress at DEBUG. Modules obtain their logger with
``logging.getLogger(__name__)``.
"""

import logging
import os

LOGGER_NAME = "api_client_gen"
LEVEL_ENV_VAR = "API_CLIENT_GEN_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    The level comes from ``level``, then the ``API_CLIENT_GEN_LOG_LEVEL``
    environment variable, then WARNING.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, DEFAULT_LEVEL)

    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)

    logger.propagate = False
    return logger
