from .config import Config
from .errors import (
    InsufficientCardsError,
    InsufficientPoolError,
    MalformedCardError,
    MasteryError,
    NoActiveCardError,
    SchedulerStateError,
)
from .logging_config import get_logger, setup_logging

__all__ = [
    'Config',
    'MasteryError',
    'InsufficientCardsError',
    'InsufficientPoolError',
    'MalformedCardError',
    'NoActiveCardError',
    'SchedulerStateError',
    'setup_logging',
    'get_logger',
]
