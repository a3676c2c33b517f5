"""Logging setup shared by the bot entry point and scripts."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("storefront")

_configured = False


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Configure root logging once and return the package logger."""
    global _configured
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    if not _configured:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        # aiogram event logs are noisy at INFO
        logging.getLogger("aiogram.event").setLevel(logging.WARNING)
        _configured = True
    logger.setLevel(level)
    return logger
