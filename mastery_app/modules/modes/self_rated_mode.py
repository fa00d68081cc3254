"""
Self-Rated Mode
===============
Classic two-sided card: the learner flips it and answers "know" (True)
or "don't know" (False).  The rating is trusted as the verdict.
"""

from __future__ import annotations

from typing import Any, Dict

from .base_mode import BaseStudyMode, EvaluationResult


class SelfRatedMode(BaseStudyMode):

    def get_mode_id(self) -> str:
        return 'self_rated'

    def format_interaction(self, card, pool, settings=None, rng=None) -> Dict[str, Any]:
        return {}

    def evaluate_submission(self, card, user_input: Any, interaction: Dict[str, Any]) -> EvaluationResult:
        return EvaluationResult(is_correct=user_input is True)
