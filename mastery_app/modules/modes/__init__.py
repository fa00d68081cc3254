# File: mastery_app/modules/modes/__init__.py
"""
Study Modes Package
===================
Contains the Mode abstraction and the concrete evaluators (choice,
statement, typed, exact, spelled, self-rated) a stage plan refers to.
"""

from .base_mode import BaseStudyMode, EvaluationResult
from .factory import ModeFactory

__all__ = ['BaseStudyMode', 'EvaluationResult', 'ModeFactory']
