"""
Logging setup shared by the scripts.

Library modules only create `logging.getLogger(__name__)` loggers; the
scripts call setup_logging() once at startup.
"""
import logging
import logging.handlers
import os
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None,
                  log_format: str = DEFAULT_FORMAT) -> None:
    """
    Configures the root logger: console always, rotating file if `log_file`.

    The file rotates at 1MB and keeps 5 backups.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.debug(f"Log level set to {level.upper()}.")
    if log_file:
        logging.debug(f"Log file path: {log_file}")
