# core/logging_config.py
import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "rentas_access"


def setup_logger(level: str = None) -> logging.Logger:
    """
    Configure the service logger once.
    LOG_LEVEL is read straight from the environment so logging works
    before (and independently of) the Settings object.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Avoid duplicate handlers in dev reload
    if logger.handlers:
        return logger

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)
    logger.propagate = True

    return logger


logger = setup_logger()
