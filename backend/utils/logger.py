# backend/utils/logger.py

import logging
from typing import Optional

LOGGER_NAME = "csv_search"

_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")


def get_logger(level: Optional[str] = None) -> logging.Logger:
    """
    Return the app logger, attaching a stream handler on first use.
    The level only changes when one is passed explicitly.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(_formatter)
        logger.addHandler(ch)
        logger.setLevel(level or "INFO")
    elif level:
        logger.setLevel(level)

    return logger
