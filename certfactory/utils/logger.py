"""Logging configuration."""

import logging
from pathlib import Path
from typing import Optional

from certfactory.models.config import AppConfig

LOGGER_NAME = "certfactory"

# Issuance events go to the console without timestamps; the file keeps the configured format
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def setup_logger(config: Optional[AppConfig] = None) -> logging.Logger:
    """
    Configure the certfactory logger once per process.

    Level and file output come from the ``logging`` section of the config;
    without a config the logger writes INFO and above to the console.

    Args:
        config: Application configuration

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    settings = config.logging if config else None
    level = getattr(logging, settings.level.upper(), logging.INFO) if settings else logging.INFO
    logger.setLevel(level)

    _attach(logger, logging.StreamHandler(), level, CONSOLE_FORMAT)

    if settings and settings.file:
        log_file = Path(settings.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file), level, settings.format)

    return logger
