"""
Logger configuration for the site translator.

One named logger shared by every module, printing to stdout and optionally
mirrored into a log file.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from config import LOGGING_CONFIG

LOGGER_NAME = 'site_translator'


def setup_logger(log_file: Optional[str] = None) -> logging.Logger:
    """
    Creates and configures the logger with a console handler and, when a
    log file is given (or configured), a file handler
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(LOGGING_CONFIG['level'])
    logger.propagate = False

    # Remove any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(
        LOGGING_CONFIG['format'],
        LOGGING_CONFIG['datefmt']
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or LOGGING_CONFIG.get('log_file')
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        logger.addHandler(file_handler)

    # The translation backend talks HTTP through requests
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    return logger



def set_verbose_mode(logger: logging.Logger, verbose: bool) -> None:
    """Sets console handler level based on verbose mode"""
    level = logging.INFO if verbose else logging.WARNING
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream == sys.stdout:
            handler.setLevel(level)
