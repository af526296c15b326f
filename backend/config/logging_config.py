# config/logging_config.py - LOGGING SETUP

import logging
import sys
from datetime import datetime

from config.settings import settings


def setup_logging():
    """
    Setup logging configuration

    Returns:
        Configured logger instance
    """
    log_level = settings.LOG_LEVEL
    log_to_file = settings.LOG_TO_FILE
    log_dir = settings.LOGS_DIR

    logger = logging.getLogger("deezl")
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    # ========== Console Handler ==========
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(console_handler)

    # ========== File Handlers ==========
    if log_to_file:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_format = logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            )

            # All logs
            log_file = log_dir / f"{settings.LOG_FILE}_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(file_format)
            logger.addHandler(file_handler)

            # Errors only
            error_log_file = log_dir / f"{settings.LOG_FILE}_error_{datetime.now().strftime('%Y%m%d')}.log"
            error_handler = logging.FileHandler(error_log_file, encoding='utf-8')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_format)
            logger.addHandler(error_handler)

        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}")

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logging()


def get_logger(name: str = None):
    """
    Get a child logger

    Args:
        name: Logger name (e.g., 'services.extractor', 'routes.media')

    Returns:
        Logger instance
    """
    if name:
        return logger.getChild(name)
    return logger
