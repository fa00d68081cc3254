"""
Logging for the mastery engine.

Everything logs under the ``mastery_app`` logger tree
(``logging.getLogger(__name__)`` in each module).  ``setup_logging``
attaches the handlers once per process: the console always, and a
rotating ``mastery.log`` when a log directory is configured.  Session
lifecycle and rejected cards log at INFO/WARNING, per-answer moves at
DEBUG.
"""

import os
import logging
import logging.handlers
from typing import Optional

ROOT_LOGGER_NAME = 'mastery_app'

LOG_FILE_NAME = 'mastery.log'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
_JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'


def _build_formatter(json_format: bool) -> logging.Formatter:
    return logging.Formatter(_JSON_FORMAT if json_format else _TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')


def setup_logging(
    log_level: str = 'INFO',
    log_dir: Optional[str] = None,
    json_format: bool = False
) -> logging.Logger:
    """
    (Re)configure the engine's root logger.

    Args:
        log_level: Level name, case-insensitive; unknown names mean INFO.
        log_dir: Directory for ``mastery.log``; console only when omitted.
        json_format: One JSON object per line instead of plain text.

    Returns:
        The ``mastery_app`` logger.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Re-running replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = _build_formatter(json_format)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Engine logging ready: level={logging.getLevelName(level)}, dir={log_dir or '-'}")

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Logger *name*, placed under ``mastery_app`` unless it already is."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + '.'):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
