# File: mastery_app/modules/session/__init__.py
"""
Session Package
===============
The study-session façade: prompts, verdicts, stats and restarts.
"""

from .interface import create_session
from .schemas import (
    COMPLETE,
    Attempt,
    Prompt,
    SessionComplete,
    SessionConfig,
    SessionStats,
    SessionSummary,
    Verdict,
)
from .services.session_service import StudySession

__all__ = [
    'COMPLETE',
    'Attempt',
    'Prompt',
    'SessionComplete',
    'SessionConfig',
    'SessionStats',
    'SessionSummary',
    'StudySession',
    'Verdict',
    'create_session',
]
