import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from . import settings

# Tag on handlers we attach, so a second setup call doesn't stack duplicates
# while handlers added by others (e.g. pytest's capture) are left alone.
_HANDLER_TAG = "_offset_charts_handler"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logger(
    name: Optional[str] = None,
    log_level: Optional[int | str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Sends a chart run's logs to stdout (bare messages) and to a rotating file
    (timestamped). Level and file default to settings.LOG_LEVEL and
    settings.LOG_DIR / settings.LOG_FILENAME.
    """
    level = _resolve_level(settings.LOG_LEVEL if log_level is None else log_level)
    log_file = Path(log_file) if log_file else settings.LOG_DIR / settings.LOG_FILENAME

    logger = logging.getLogger(name)
    logger.setLevel(level)

    ours = [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]
    if ours:
        for handler in ours:
            handler.setLevel(level)
        return logger

    console_handler = _tagged(logging.StreamHandler(sys.stdout))
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = _tagged(
        RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    return logger
