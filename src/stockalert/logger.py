"""Package logging setup: console output on stderr plus an optional log file."""

import logging
import os
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    level: int | str = logging.INFO,
    log_file: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Set up a logger with console and optional file handlers.

    Calling it again on a configured logger only updates the levels.

    :param name: Logger name, usually the package name.
    :param level: Logging level, as an int or a level name such as "DEBUG".
    :param log_file: Path of a log file to append to, None for console only.
    :param stream: Console stream, stderr by default so stdout stays parseable.
    :returns: Configured logger.
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.info("Logging to file: %s", log_file)

    return logger
