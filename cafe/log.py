"""diagnostic logging setup (user-facing output goes through termcolor instead)"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

APP_LOGGER = "cafe"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """configure the package logger once; later calls only adjust the level"""
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        datefmt="%Y-%m-%dT%H:%M:%S",
    ))
    logger.addHandler(handler)
    return logger
