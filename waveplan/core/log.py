"""Loguru configuration."""

import sys
from pathlib import Path

from loguru import logger

from waveplan.core.config import Settings, get_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings | None = None, level: str | None = None) -> None:
    """Configure loguru based on settings.

    Replaces the default handler with a coloured stderr sink, and adds a
    daily-rotated file sink when ``waveplan_log_dir`` is set.

    Args:
        settings: Settings to use; defaults to the cached settings.
        level: Console level override.
    """
    settings = settings or get_settings()
    logger.remove()  # Remove default handler

    if level is None:
        level = "DEBUG" if settings.waveplan_debug else settings.waveplan_log_level

    # Resolve stderr per message so redirected streams are honoured
    logger.add(
        lambda msg: print(msg, end="", file=sys.stderr),
        level=level,
        format=LOG_FORMAT,
        colorize=True,
    )

    if settings.waveplan_log_dir:
        logs_dir = Path(settings.waveplan_log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(logs_dir / "waveplan_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="7 days",
            level=settings.waveplan_log_level,
            format=LOG_FORMAT,
        )
