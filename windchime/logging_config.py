"""
Logging configuration for scripts and host applications.

The library itself only attaches a NullHandler (see windchime/__init__.py);
setup_logging() is for the application entry point.
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOGGER_NAME = "windchime"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marks handlers installed here, so a second call replaces only those.
_OWNED = "_windchime_owned"


def _owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _OWNED, False)]


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    fmt: str = DEFAULT_FORMAT,
    frame_debug: bool = False,
) -> logging.Logger:
    """
    Route the 'windchime' logger to stdout and optionally to a file.

    Handlers added by the host application are left alone; handlers from a
    previous call are closed and replaced.

    Args:
        level: level of the package logger and its handlers.
        log_file: optional path of a log file (overwritten).
        fmt: record format.
        frame_debug: keep per-frame scheduler DEBUG records; by default the
            scheduler logger is capped at INFO even when level is DEBUG.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    scheduler_logger = logging.getLogger(f"{LOGGER_NAME}.interaction.scheduler")
    if level <= logging.DEBUG and not frame_debug:
        scheduler_logger.setLevel(logging.INFO)
    else:
        scheduler_logger.setLevel(logging.NOTSET)

    logger.debug("Logging initialized (level %s)", logging.getLevelName(level))
    return logger
