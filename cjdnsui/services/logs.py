import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textual.logging import TextualHandler

from cjdnsui.config import UiConfig, default_log_dir

LOGGER_NAME = "cjdnsui"
LOG_FILENAME = "cjdnsui.log"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(config: UiConfig) -> logging.Logger:
    """Configure the ``cjdnsui`` logger.

    Records go to a rotating file and to the Textual devtools console; nothing
    is written to stdout/stderr while the UI owns the terminal. Calling this
    again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level.upper())

    if logger.handlers:
        return logger

    log_dir = Path(config.log_dir) if config.log_dir else default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))

    textual_handler = TextualHandler()
    textual_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(textual_handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
