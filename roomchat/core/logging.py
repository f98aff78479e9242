# roomchat/core/logging.py

import logging
import os
import sys


DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "redis": logging.WARNING,
    "asyncio": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    # roomchat.access already logs one line per request
    "uvicorn.access": logging.WARNING,
}


def setup_logging() -> None:
    """
    Send roomchat logs to stdout at LOG_LEVEL (default INFO).

    Called once when roomchat.main is imported. Under uvicorn the root
    logger already has handlers, so only the level is adjusted.
    """
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if root_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    for name, name_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(name_level)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)
