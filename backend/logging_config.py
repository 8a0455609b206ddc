"""Structured logging configuration (Loguru).

Every record carries a ``component`` tag (``demo``, ``api`` ...) so the
shared daily file can be split by entry point afterwards.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from backend.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[component]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def log_file_path(log_dir: str | Path | None = None) -> Path:
    """Daily log file pattern inside ``log_dir`` (defaults to settings)."""
    return Path(log_dir or settings.log_dir) / "orrery_{time:YYYY-MM-DD}.log"


def setup_logging(component: str = "orrery", log_to_file: bool = True) -> None:
    """Configure Loguru for one entry point.

    Args:
        component: Tag stamped on every record, e.g. ``"demo"`` or ``"api"``.
        log_to_file: Also write to the daily-rotated file in ``settings.log_dir``
            at ``settings.log_file_level``.
    """
    logger.remove()
    logger.configure(extra={"component": component})

    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    if log_to_file:
        logger.add(
            str(log_file_path()),
            format=LOG_FORMAT,
            level=settings.log_file_level,
            rotation="00:00",
            retention=f"{settings.log_retention_days} days",
            compression="gz",
            enqueue=True,
        )

    logger.info(
        "Logging ready  |  component={}  level={}  file_level={}  env={}",
        component,
        settings.log_level,
        settings.log_file_level if log_to_file else "off",
        settings.app_env,
    )
