from __future__ import annotations

"""Centralised Loguru configuration.

Call setup_logger() once at program start. Repeated calls are no-ops.
"""
import sys
from pathlib import Path
from typing import Literal

from loguru import logger

from relay.settings import settings

_INITIALISED = False


def setup_logger(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None
) -> None:
    """Configure Loguru sinks once per process.

    If *level* is *None* the value of ``settings.LOG_LEVEL`` is used. File
    sinks are only added when ``settings.LOG_DIR`` is non-empty.
    """

    global _INITIALISED
    if _INITIALISED:
        return

    if level is None:
        level = settings.LOG_LEVEL.upper()  # type: ignore[assignment]

    logger.remove()  # remove default stderr sink

    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(log_dir / "app.log", level="INFO", rotation="1 MB", retention="10 days")
        logger.add(log_dir / "debug.log", level="DEBUG", rotation="1 MB", retention="10 days")

    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> {message}",
        colorize=True,
    )

    logger.info("Logger initialised (level: {})", level)

    _INITIALISED = True
