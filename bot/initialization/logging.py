"""
Bot Initialization - Logging Module.

Module: logging.py
Configures loguru logger for the bot.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from app.config.settings import settings


def setup_logging() -> None:
    """Configure console and rotating file sinks."""
    level = "DEBUG" if settings.debug else settings.log_level
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(
        "logs/bot.log",
        rotation="1 day",
        retention="7 days",
        level=level,
        encoding="utf-8",
    )

    logger.info(f"Starting Payback247 bot ({settings.environment})...")
