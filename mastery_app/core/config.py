# File: mastery_app/core/config.py
# Core Infrastructure Layer

import os
from typing import Any

from dotenv import load_dotenv

from .defaults import DEFAULT_ENGINE_CONFIGS

load_dotenv()

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _coerce(raw: str, default: Any) -> Any:
    """Convert an environment string to the type of its default value."""
    if isinstance(default, bool):
        return raw.strip().lower() in _TRUE_VALUES
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


class Config:
    """Engine configuration. Environment variables prefixed ``MASTERY_`` override defaults."""

    ENV_PREFIX = 'MASTERY_'

    SIMILARITY_THRESHOLD = DEFAULT_ENGINE_CONFIGS['SIMILARITY_THRESHOLD']
    SIMILARITY_INCLUSIVE = DEFAULT_ENGINE_CONFIGS['SIMILARITY_INCLUSIVE']
    ALLOW_CONTAINMENT = DEFAULT_ENGINE_CONFIGS['ALLOW_CONTAINMENT']
    DEFAULT_DISTRACTOR_COUNT = DEFAULT_ENGINE_CONFIGS['DEFAULT_DISTRACTOR_COUNT']
    MIN_CARDS = DEFAULT_ENGINE_CONFIGS['MIN_CARDS']
    STATEMENT_TRUE_RATIO = DEFAULT_ENGINE_CONFIGS['STATEMENT_TRUE_RATIO']
    SHUFFLE_ON_START = DEFAULT_ENGINE_CONFIGS['SHUFFLE_ON_START']

    LOG_LEVEL = DEFAULT_ENGINE_CONFIGS['LOG_LEVEL']
    LOG_DIR = DEFAULT_ENGINE_CONFIGS['LOG_DIR']
    LOG_JSON = DEFAULT_ENGINE_CONFIGS['LOG_JSON']

    REPORT_IN_BACKGROUND = DEFAULT_ENGINE_CONFIGS['REPORT_IN_BACKGROUND']

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Resolve a setting.

        Lookup order: environment (``MASTERY_<KEY>``), class attribute,
        ``DEFAULT_ENGINE_CONFIGS``, then *default*.
        """
        fallback = getattr(cls, key, DEFAULT_ENGINE_CONFIGS.get(key, default))
        raw = os.environ.get(f"{cls.ENV_PREFIX}{key}")
        if raw is None or fallback is None:
            return fallback if raw is None else raw
        try:
            return _coerce(raw, fallback)
        except ValueError:
            return fallback
