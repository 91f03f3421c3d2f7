"""
gep_evolution/log.py - Logging setup
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Replace loguru's default sink with a formatted stderr sink (and optional file)"""
    logger.remove()
    logger.add(sys.stderr, format=DEFAULT_FORMAT, level=level.upper())

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=DEFAULT_FORMAT, level="DEBUG")
