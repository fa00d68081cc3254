"""
Centralized Default Configuration for the Mastery engine.

This file serves as the "Source of Truth" for all engine tunables.
These values are used as fallbacks when a setting is not overridden
through the environment (see ``Config``).
"""

DEFAULT_ENGINE_CONFIGS = {
    # --- Answer matching ---
    # Strict ``>`` comparison: distance 1 on a 5-char answer (exactly 0.8) is rejected.
    'SIMILARITY_THRESHOLD': 0.8,
    'SIMILARITY_INCLUSIVE': False,
    'ALLOW_CONTAINMENT': True,

    # --- Scheduling ---
    'DEFAULT_DISTRACTOR_COUNT': 3,
    'MIN_CARDS': 2,
    'STATEMENT_TRUE_RATIO': 0.5,
    'SHUFFLE_ON_START': True,

    # --- Logging ---
    'LOG_LEVEL': 'INFO',
    'LOG_DIR': None,
    'LOG_JSON': False,

    # --- Stats reporting ---
    'REPORT_IN_BACKGROUND': True,
}
