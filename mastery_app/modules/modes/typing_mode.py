"""
Typing Mode
===========
Free-text recall judged by the three-tier ``AnswerMatcher``
(exact → containment → fuzzy).
"""

from __future__ import annotations

from typing import Any, Dict

from mastery_app.modules.matching.engine.matcher import AnswerMatcher
from .base_mode import BaseStudyMode, EvaluationResult


class TypingMode(BaseStudyMode):
    """
    - **Format**: answer length as a hint.
    - **Evaluate**: tolerant matching against every accepted variant.
    """

    def __init__(self, matcher: AnswerMatcher = None):
        self.matcher = matcher or AnswerMatcher()

    def get_mode_id(self) -> str:
        return 'typed'

    def format_interaction(self, card, pool, settings=None, rng=None) -> Dict[str, Any]:
        return {'hint': {'length': len(card.answer)}}

    def evaluate_submission(self, card, user_input: Any, interaction: Dict[str, Any]) -> EvaluationResult:
        text = user_input if isinstance(user_input, str) else ''
        result = self.matcher.match(text, card)
        return EvaluationResult(
            is_correct=result.is_correct,
            match_tier=result.tier,
            feedback={
                'user_text': user_input,
                'matched_variant': result.matched_variant,
                'similarity': round(result.score, 3),
            },
        )
