"""
Common utilities for Retro Arcade
"""

import logging
import sys
from pathlib import Path


def setup_logging(
    run_name: str,
    level: str = "INFO",
    log_dir: Path | None = None,
    console: bool = True,
    logger_name: str = "retro_arcade",
) -> logging.Logger:
    """
    Setup consistent logging for the package loggers

    Args:
        run_name: Name for the run, used for the log file name
        level: Logging level
        log_dir: Directory to save the log file in, no file when omitted
        console: Whether to log to console
        logger_name: Logger to configure; module loggers below it propagate here

    Returns:
        Configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / f"{run_name}.log")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def close_handlers(logger: logging.Logger) -> None:
    """Close and detach every handler installed by setup_logging."""
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
