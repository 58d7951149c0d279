import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "ontovault"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below the ontovault root logger."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a single stream handler to the ontovault root logger.

    Calling it again only adjusts the level, so the CLI can raise verbosity
    after the handler is installed.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    handler = next(
        (h for h in logger.handlers if getattr(h, "_ontovault_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._ontovault_handler = True
        logger.addHandler(handler)
    handler.setLevel(level)
    return logger
