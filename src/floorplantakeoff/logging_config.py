"""
Logging Configuration
Sets up the package logger for the application.

The level can be overridden without code changes through the
FLOORPLANTAKEOFF_LOG_LEVEL environment variable (e.g. "DEBUG").
"""
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV = "FLOORPLANTAKEOFF_LOG_LEVEL"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'floorplantakeoff' logger namespace.

    Args:
        level: Logging level as a number or a name ("DEBUG", "INFO", ...).
        log_file: Optional path to also write logs to; its directory is created.

    Returns:
        The configured package logger.
    """
    level = os.environ.get(LOG_LEVEL_ENV, level)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("floorplantakeoff")
    logger.setLevel(level)
    logger.propagate = False

    # Check if handlers already exist to avoid duplicate logs during restart
    if logger.hasHandlers():
        logger.handlers.clear()

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
