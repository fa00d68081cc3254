"""Adaptive mastery study engine."""

from __future__ import annotations

import logging

from .core.config import Config
from .core.errors import (
    InsufficientCardsError,
    InsufficientPoolError,
    MalformedCardError,
    MasteryError,
    NoActiveCardError,
    SchedulerStateError,
)
from .core.logging_config import setup_logging
from .modules.cards import Card, CardPool, Direction
from .modules.matching import is_acceptable, normalize, similarity
from .modules.scheduling import STAGE_PRESETS, EvaluatorKind, Stage
from .modules.session import (
    COMPLETE,
    Prompt,
    SessionConfig,
    SessionStats,
    StudySession,
    Verdict,
    create_session,
)
from .modules.stats import connect_reporter, disconnect_reporter

__version__ = '0.1.0'

__all__ = [
    'COMPLETE',
    'Card',
    'CardPool',
    'Config',
    'Direction',
    'EvaluatorKind',
    'InsufficientCardsError',
    'InsufficientPoolError',
    'MalformedCardError',
    'MasteryError',
    'NoActiveCardError',
    'Prompt',
    'STAGE_PRESETS',
    'SchedulerStateError',
    'SessionConfig',
    'SessionStats',
    'Stage',
    'StudySession',
    'Verdict',
    'configure',
    'connect_reporter',
    'create_session',
    'disconnect_reporter',
    'is_acceptable',
    'normalize',
    'similarity',
]


def configure(config_class: type[Config] = Config, reporter=None) -> logging.Logger:
    """Set up logging from *config_class* and optionally attach a stats reporter."""

    logger = setup_logging(
        log_level=config_class.get('LOG_LEVEL'),
        log_dir=config_class.get('LOG_DIR'),
        json_format=config_class.get('LOG_JSON'),
    )
    if reporter is not None:
        connect_reporter(reporter, background=config_class.get('REPORT_IN_BACKGROUND'))
    return logger
